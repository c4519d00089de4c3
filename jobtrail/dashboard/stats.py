"""
Dashboard statistics for the popup's overview screen.

All counts are conversation counts (see jobtrail.threads), not raw email
counts, except "new applications this week" which counts emails.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from jobtrail.config import NEW_APPLICATIONS_WINDOW_DAYS, RECENT_EMAILS_LIMIT
from jobtrail.contracts.email import Category, EmailRecord
from jobtrail.observability.logging import get_logger
from jobtrail.threads.grouper import ThreadGrouper, get_default_grouper
from jobtrail.utils.dates import as_utc, utc_now

logger = get_logger(__name__)

CategorizedEmails = Mapping[str, Iterable[EmailRecord]]


@dataclass
class DashboardStats:
    """Numbers shown on the dashboard cards."""

    category_counts: dict[str, int]
    total_applications: int
    response_rate: int
    success_rate: int
    new_applications_this_week: int
    recent_emails: list[EmailRecord] = field(default_factory=list)

    @property
    def interviews_and_offers(self) -> int:
        return self.category_counts.get(Category.INTERVIEWED.value, 0) + self.category_counts.get(
            Category.OFFERS.value, 0
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "categoryCounts": dict(self.category_counts),
            "totalApplications": self.total_applications,
            "interviewsAndOffers": self.interviews_and_offers,
            "responseRate": self.response_rate,
            "successRate": self.success_rate,
            "newApplicationsThisWeek": self.new_applications_this_week,
            "recentEmails": [email.to_payload() for email in self.recent_emails],
        }


def emails_for_category(categorized: CategorizedEmails, category: str) -> list[EmailRecord]:
    """Look a category up under its lowercase or Capitalized key."""
    emails = categorized.get(category)
    if emails is None:
        emails = categorized.get(category.capitalize())
    return list(emails or [])


def percentage(part: int, whole: int) -> int:
    """Whole-number percentage rounded half up; 0 when whole is 0."""
    if whole <= 0:
        return 0
    return math.floor(part / whole * 100 + 0.5)


def _sort_newest_first(emails: Iterable[EmailRecord]) -> list[EmailRecord]:
    def key(email: EmailRecord) -> tuple[int, float]:
        parsed = email.parsed_date
        return (0, 0.0) if parsed is None else (1, parsed.timestamp())

    return sorted(emails, key=key, reverse=True)


def compute_dashboard_stats(
    categorized: CategorizedEmails,
    total_processed: int | None = None,
    now: datetime | None = None,
    grouper: ThreadGrouper | None = None,
) -> DashboardStats:
    """
    Compute dashboard statistics from emails bucketed by category.

    Side Effects: None beyond grouping telemetry

    Args:
        categorized: Category name -> emails in that category
        total_processed: Backend's own application total, when it reports one
        now: Reference time (defaults to current UTC time)
        grouper: Grouper to use (defaults to the process-wide one)

    Returns:
        DashboardStats; the application total is the larger of the
        backend figure and the local unique-conversation count
    """
    grouper = grouper or get_default_grouper()
    now = as_utc(now) if now else utc_now()

    category_counts = {
        category.value: grouper.count(emails_for_category(categorized, category.value))
        for category in Category
    }

    relevant = [
        email
        for name, bucket in categorized.items()
        if name.lower() != Category.IRRELEVANT.value
        for email in bucket
        if email.category != Category.IRRELEVANT.value
    ]
    local_total = grouper.count(relevant)
    if total_processed is None:
        total_applications = local_total
    else:
        total_applications = max(total_processed, local_total)
        if total_processed < local_total:
            logger.debug(
                "Backend total %d below local thread count %d", total_processed, local_total
            )

    interviews_and_offers = (
        category_counts[Category.INTERVIEWED.value] + category_counts[Category.OFFERS.value]
    )

    window_start = now - timedelta(days=NEW_APPLICATIONS_WINDOW_DAYS)
    new_this_week = 0
    for email in emails_for_category(categorized, Category.APPLIED.value):
        parsed = email.parsed_date
        if parsed is not None and parsed >= window_start:
            new_this_week += 1

    return DashboardStats(
        category_counts=category_counts,
        total_applications=total_applications,
        response_rate=percentage(interviews_and_offers, total_applications),
        success_rate=percentage(category_counts[Category.OFFERS.value], total_applications),
        new_applications_this_week=new_this_week,
        recent_emails=_sort_newest_first(relevant)[:RECENT_EMAILS_LIMIT],
    )
