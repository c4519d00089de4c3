"""Dashboard views computed from grouped conversations."""

from jobtrail.dashboard.followups import (
    FollowUpSuggestion,
    generate_follow_ups,
    time_since_oldest_pending,
)
from jobtrail.dashboard.listing import (
    ConversationPage,
    PlanRestrictionError,
    filter_emails,
    paginate_conversations,
    select_view_emails,
)
from jobtrail.dashboard.stats import DashboardStats, compute_dashboard_stats

__all__ = [
    "ConversationPage",
    "DashboardStats",
    "FollowUpSuggestion",
    "PlanRestrictionError",
    "compute_dashboard_stats",
    "filter_emails",
    "generate_follow_ups",
    "paginate_conversations",
    "select_view_emails",
    "time_since_oldest_pending",
]
