"""
Date parsing and display helpers for email timestamps.

The backend sends a mix of ISO strings (with and without offsets), RFC
2822 header dates and epoch milliseconds. Everything is normalized to an
aware UTC datetime, or None when the value cannot be read.
"""

from __future__ import annotations

import math
import re
from datetime import UTC, datetime, timedelta
from email.utils import parsedate_to_datetime
from typing import Any

from jobtrail.observability.logging import get_logger

logger = get_logger(__name__)

_DAY_SECONDS = 60 * 60 * 24

_ISO_NO_TIMEZONE = re.compile(r"^\d{4}-\d{2}-\d{2}(?:[ T]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?)?$")

TIME_RANGE_DAYS: dict[str, int] = {
    "week": 7,
    "last7days": 7,
    "month": 30,
    "last30days": 30,
    "90": 90,
    "last90days": 90,
}


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_email_date(value: Any) -> datetime | None:
    """
    Parse an email timestamp into an aware UTC datetime.

    Side Effects: None (pure function)

    Args:
        value: datetime, epoch milliseconds, ISO-8601 or RFC 2822 string

    Returns:
        UTC datetime, or None when the value is empty or unparseable
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        try:
            return as_utc(value)
        except OverflowError:
            return None
    if isinstance(value, int | float):
        if not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value / 1000.0, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None

    raw = str(value).strip()
    if not raw:
        return None

    # ISO timestamps without an offset are stored as UTC by the backend
    if _ISO_NO_TIMEZONE.match(raw):
        raw = raw.replace(" ", "T")

    try:
        return as_utc(datetime.fromisoformat(raw.replace("Z", "+00:00")))
    except (OverflowError, ValueError):
        pass

    try:
        return as_utc(parsedate_to_datetime(raw))
    except (OverflowError, TypeError, ValueError, IndexError):
        return None


def utc_now() -> datetime:
    return datetime.now(UTC)


def days_between(earlier: datetime, later: datetime) -> int:
    """Whole days elapsed from ``earlier`` to ``later`` (floored)."""
    return math.floor((later - earlier).total_seconds() / _DAY_SECONDS)


def format_relative_date(value: Any, now: datetime | None = None) -> str:
    """
    Format a timestamp the way the popup lists show it.

    Returns "N/A" for empty input, "Invalid Date" for garbage, "Today",
    "Yesterday", "N days ago" within a week, otherwise "M/D/YYYY".
    """
    if value is None or value == "":
        return "N/A"
    parsed = parse_email_date(value)
    if parsed is None:
        logger.warning("Invalid date provided to format_relative_date: %r", value)
        return "Invalid Date"

    now = as_utc(now) if now else utc_now()
    diff_days = math.ceil(abs((now - parsed).total_seconds()) / _DAY_SECONDS)

    if diff_days <= 1:
        return "Today"
    if diff_days == 2:
        return "Yesterday"
    if diff_days <= 7:
        return f"{diff_days - 1} days ago"
    return f"{parsed.month}/{parsed.day}/{parsed.year}"


def date_threshold(time_range: str | None, now: datetime | None = None) -> datetime | None:
    """
    Lower bound for a time-range filter.

    Returns None for "all" (or an unrecognized range), meaning no bound.
    """
    now = as_utc(now) if now else utc_now()
    key = (time_range or "all").strip().lower()
    if key == "today":
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    days = TIME_RANGE_DAYS.get(key)
    if days is None:
        return None
    return now - timedelta(days=days)
