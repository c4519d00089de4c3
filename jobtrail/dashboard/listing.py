"""
Conversation list views: view selection, filtering and pagination.

Pagination works on conversations, not emails: a page of size 10 holds
ten thread groups and every email belonging to them.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from jobtrail.config import FREE_PLAN, FREE_PLAN_BLOCKED_RANGES, PAGE_SIZE
from jobtrail.contracts.email import RELEVANT_CATEGORIES, EmailRecord
from jobtrail.dashboard.stats import emails_for_category
from jobtrail.observability.logging import get_logger
from jobtrail.threads.grouper import ThreadGrouper, get_default_grouper
from jobtrail.threads.types import ThreadGroup
from jobtrail.utils.dates import date_threshold

logger = get_logger(__name__)

VIEW_ALL = "all"
VIEW_STARRED = "starred"


class PlanRestrictionError(ValueError):
    """Raised when the user's plan does not allow a requested filter."""


@dataclass
class ConversationPage:
    """One page of conversations for a list view."""

    page: int
    page_size: int
    total_conversations: int
    groups: list[ThreadGroup] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        if self.total_conversations == 0:
            return 0
        return math.ceil(self.total_conversations / self.page_size)

    @property
    def emails(self) -> list[EmailRecord]:
        return [email for group in self.groups for email in group.emails]

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "pageSize": self.page_size,
            "totalConversations": self.total_conversations,
            "totalPages": self.total_pages,
            "conversations": [group.to_dict() for group in self.groups],
        }


def select_view_emails(
    categorized: Mapping[str, Iterable[EmailRecord]], view: str
) -> list[EmailRecord]:
    """
    Emails behind a list view.

    "all" is every relevant category, "starred" every starred email in
    any category, anything else a single category.
    """
    view = (view or VIEW_ALL).strip().lower()
    if view == VIEW_ALL:
        return [
            email
            for category in RELEVANT_CATEGORIES
            for email in emails_for_category(categorized, category)
        ]
    if view == VIEW_STARRED:
        return [email for bucket in categorized.values() for email in bucket if email.is_starred]
    return emails_for_category(categorized, view)


def _matches_query(email: EmailRecord, query: str) -> bool:
    text = " ".join(
        part or "" for part in (email.subject, email.sender, email.body, email.snippet)
    ).lower()
    return query in text


def filter_emails(
    emails: Iterable[EmailRecord],
    query: str | None = None,
    time_range: str | None = None,
    plan: str | None = None,
    now: datetime | None = None,
) -> list[EmailRecord]:
    """
    Apply the search box and time-range filter, newest first.

    Args:
        emails: Candidate emails
        query: Case-insensitive substring over subject, sender, body, snippet
        time_range: "today", "week", "month", "90", "all" (or the lastNdays forms)
        plan: User plan; the free plan cannot look back 90 days
        now: Reference time for the range

    Raises:
        PlanRestrictionError: If the plan does not allow the time range
    """
    range_key = (time_range or "all").strip().lower()
    if (plan or "").lower() == FREE_PLAN and range_key in FREE_PLAN_BLOCKED_RANGES:
        raise PlanRestrictionError("Free plan allows filtering only within the last 30 days.")

    needle = (query or "").strip().lower()
    threshold = date_threshold(range_key, now)

    kept: list[tuple[EmailRecord, datetime | None]] = []
    for email in emails:
        if needle and not _matches_query(email, needle):
            continue
        parsed = email.parsed_date
        if threshold is not None and (parsed is None or parsed < threshold):
            continue
        kept.append((email, parsed))

    kept.sort(
        key=lambda pair: (0, 0.0) if pair[1] is None else (1, pair[1].timestamp()),
        reverse=True,
    )
    return [email for email, _ in kept]


def paginate_conversations(
    emails: Iterable[EmailRecord],
    page: int = 1,
    page_size: int = PAGE_SIZE,
    grouper: ThreadGrouper | None = None,
) -> ConversationPage:
    """
    Group emails into conversations and return one page of them.

    Pages are 1-based; values below 1 are treated as page 1.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    grouper = grouper or get_default_grouper()
    page = max(page, 1)

    groups = grouper.group(emails)
    start = (page - 1) * page_size
    logger.debug("Paginating %d conversations, page %d", len(groups), page)
    return ConversationPage(
        page=page,
        page_size=page_size,
        total_conversations=len(groups),
        groups=groups[start : start + page_size],
    )
