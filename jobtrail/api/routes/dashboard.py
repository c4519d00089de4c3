"""Dashboard endpoints backing the popup's overview and list screens.

- POST /api/dashboard/stats - Category counts, totals and rates
- POST /api/dashboard/followups - Deterministic follow-up suggestions
- POST /api/conversations - One page of conversations for a list view
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, status

from jobtrail.api.models import ConversationsRequest, DashboardStatsRequest, FollowUpsRequest
from jobtrail.api.routes.threads import get_thread_grouper
from jobtrail.dashboard.followups import generate_follow_ups, time_since_oldest_pending
from jobtrail.dashboard.listing import (
    PlanRestrictionError,
    filter_emails,
    paginate_conversations,
    select_view_emails,
)
from jobtrail.dashboard.stats import compute_dashboard_stats
from jobtrail.observability.telemetry import log_event

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.post("/dashboard/stats")
async def dashboard_stats(request: DashboardStatsRequest) -> dict[str, Any]:
    """Compute dashboard statistics from categorized emails."""
    stats = compute_dashboard_stats(
        request.categorized_emails,
        total_processed=request.total_processed,
        grouper=get_thread_grouper(),
    )
    log_event(
        "api.dashboard.stats",
        categories=len(request.categorized_emails),
        total_applications=stats.total_applications,
    )
    return stats.to_dict()


@router.post("/dashboard/followups")
async def dashboard_followups(request: FollowUpsRequest) -> dict[str, Any]:
    """Generate follow-up suggestions for the given emails."""
    suggestions = generate_follow_ups(request.emails, limit=request.limit)
    return {
        "suggestions": [s.to_dict() for s in suggestions],
        "oldestPending": time_since_oldest_pending(suggestions),
    }


@router.post("/conversations")
async def conversations(request: ConversationsRequest) -> dict[str, Any]:
    """Return one page of conversations for a list view.

    Side Effects:
        - Logs telemetry events
    """
    emails = select_view_emails(request.categorized_emails, request.view)
    try:
        emails = filter_emails(
            emails,
            query=request.query,
            time_range=request.time_range,
            plan=request.plan,
        )
    except PlanRestrictionError as e:
        log_event("api.conversations.plan_restricted", time_range=request.time_range)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e

    page = paginate_conversations(
        emails,
        page=request.page,
        page_size=request.page_size,
        grouper=get_thread_grouper(),
    )
    log_event(
        "api.conversations",
        view=request.view,
        page=page.page,
        total=page.total_conversations,
    )
    return page.to_dict()
