"""
Deterministic follow-up suggestions.

Suggestions come from fixed rules over email age and category so the
same inbox always yields the same list:

- applied, 7+ days old      -> follow up on the application
- interviewed, 2+ days old  -> send a thank-you note
- offers, 1+ day old        -> research the offer before negotiating

When the rules leave room, one generic networking suggestion is added.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass, replace
from datetime import datetime
from typing import Any

from jobtrail.config import (
    FOLLOWUP_APPLIED_AFTER_DAYS,
    FOLLOWUP_APPLIED_HIGH_AFTER_DAYS,
    FOLLOWUP_INTERVIEW_AFTER_DAYS,
    FOLLOWUP_INTERVIEW_HIGH_AFTER_DAYS,
    FOLLOWUP_LIMIT,
    FOLLOWUP_OFFER_AFTER_DAYS,
)
from jobtrail.contracts.email import Category, EmailRecord
from jobtrail.observability.telemetry import log_event
from jobtrail.utils.dates import as_utc, days_between, parse_email_date, utc_now


@dataclass
class FollowUpSuggestion:
    """One suggested next step shown on the dashboard."""

    id: str
    type: str
    title: str
    description: str
    urgency: str
    days_ago: int
    company: str
    position: str
    action_type: str
    estimated_time: str
    impact: str
    thread_id: str | None = None
    date: str | None = None
    followed_up: bool = False
    responded: bool = False

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        return {
            "id": data["id"],
            "type": data["type"],
            "title": data["title"],
            "description": data["description"],
            "urgency": data["urgency"],
            "daysAgo": data["days_ago"],
            "company": data["company"],
            "position": data["position"],
            "threadId": data["thread_id"],
            "actionType": data["action_type"],
            "estimatedTime": data["estimated_time"],
            "impact": data["impact"],
            "date": data["date"],
            "followedUp": data["followed_up"],
            "responded": data["responded"],
        }


NETWORKING_SUGGESTION = FollowUpSuggestion(
    id="networking-linkedin",
    type="networking",
    title="Connect with relevant contacts",
    description=(
        "Identify and reach out to a few relevant contacts at target companies "
        "with a short, personalized message."
    ),
    urgency="medium",
    days_ago=0,
    company="Target Companies",
    position="",
    action_type="linkedin",
    estimated_time="15 mins",
    impact="medium",
)


def _suggestion_for(email: EmailRecord, days_ago: int) -> FollowUpSuggestion | None:
    category = email.category
    ref = email.id or email.thread_id
    thread_id = email.thread_id or email.id
    company = email.company or email.sender or "Unknown"

    if "appl" in category:
        if days_ago < FOLLOWUP_APPLIED_AFTER_DAYS:
            return None
        plural = "" if days_ago == 1 else "s"
        return FollowUpSuggestion(
            id=f"followup-{ref}",
            type="follow_up",
            title="Follow up on your application",
            description=(
                f"It has been {days_ago} day{plural} since you applied. A concise "
                "follow-up can help re-surface your application."
            ),
            urgency="high" if days_ago > FOLLOWUP_APPLIED_HIGH_AFTER_DAYS else "medium",
            days_ago=days_ago,
            company=company,
            position=email.position or email.subject or "",
            action_type="email",
            estimated_time="5 mins",
            impact="medium",
            thread_id=thread_id,
            date=email.date,
        )

    if "interview" in category:
        if days_ago < FOLLOWUP_INTERVIEW_AFTER_DAYS:
            return None
        return FollowUpSuggestion(
            id=f"thankyou-{ref}",
            type="thank_you",
            title="Send a thank-you note",
            description=(
                "Send a personalized thank-you referencing interview details to keep momentum."
            ),
            urgency="high" if days_ago > FOLLOWUP_INTERVIEW_HIGH_AFTER_DAYS else "medium",
            days_ago=days_ago,
            company=company,
            position=email.position or "",
            action_type="email",
            estimated_time="10 mins",
            impact="high",
            thread_id=thread_id,
            date=email.date,
        )

    if "offer" in category:
        if days_ago < FOLLOWUP_OFFER_AFTER_DAYS:
            return None
        return FollowUpSuggestion(
            id=f"negotiate-{ref}",
            type="salary_negotiation",
            title="Research offer and negotiation",
            description="Review the offer details and market benchmarks before responding.",
            urgency="high",
            days_ago=days_ago,
            company=company,
            position=email.position or "",
            action_type="research",
            estimated_time="30 mins",
            impact="high",
            thread_id=thread_id,
            date=email.date,
        )

    return None


def generate_follow_ups(
    emails: Iterable[EmailRecord],
    now: datetime | None = None,
    limit: int = FOLLOWUP_LIMIT,
) -> list[FollowUpSuggestion]:
    """
    Build follow-up suggestions from relevant emails, in input order.

    Side Effects:
        - Logs a telemetry event with the number of suggestions

    Args:
        emails: Emails to consider; irrelevant and undated ones are skipped
        now: Reference time (defaults to current UTC time)
        limit: Maximum number of suggestions returned

    Returns:
        At most ``limit`` suggestions
    """
    if limit <= 0:
        return []
    now = as_utc(now) if now else utc_now()
    results: list[FollowUpSuggestion] = []

    for email in emails:
        if len(results) >= limit:
            break
        if email.category == Category.IRRELEVANT.value:
            continue
        parsed = email.parsed_date
        if parsed is None:
            continue
        suggestion = _suggestion_for(email, days_between(parsed, now))
        if suggestion is not None:
            results.append(suggestion)

    if len(results) < limit:
        results.append(replace(NETWORKING_SUGGESTION))

    log_event("followups.generated", count=len(results))
    return results


def time_since_oldest_pending(
    suggestions: Iterable[FollowUpSuggestion], now: datetime | None = None
) -> str:
    """
    Age of the oldest suggestion not yet followed up or responded to.

    Returns "N/A" when nothing is pending or no pending date parses.
    """
    now = as_utc(now) if now else utc_now()
    pending_dates = [
        parsed
        for s in suggestions
        if not s.followed_up and not s.responded
        for parsed in [parse_email_date(s.date)]
        if parsed is not None
    ]
    if not pending_dates:
        return "N/A"

    diff_days = days_between(min(pending_dates), now)
    if diff_days == 0:
        return "Today"
    if diff_days == 1:
        return "Yesterday"
    return f"{diff_days} days ago"
