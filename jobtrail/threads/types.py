"""
Module: types
Purpose: Result types for thread grouping.
Dependencies: jobtrail.contracts.email

ThreadGroup is a computed view: built fresh on every grouping call and
never mutated afterwards by callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from jobtrail.contracts.email import EmailRecord

NO_SUBJECT = "(No subject)"


@dataclass
class ThreadGroup:
    """One logical conversation assembled from one or more emails."""

    key: str
    thread_id: str
    emails: list[EmailRecord] = field(default_factory=list)
    latest_email: EmailRecord | None = None
    earliest_email: EmailRecord | None = None
    latest_date: datetime | None = None
    preview: str = ""

    @property
    def id(self) -> str:
        return f"thread-{self.thread_id}"

    @property
    def subject(self) -> str:
        if self.latest_email and self.latest_email.subject:
            return self.latest_email.subject
        if self.earliest_email and self.earliest_email.subject:
            return self.earliest_email.subject
        return NO_SUBJECT

    @property
    def date(self) -> str | None:
        return self.latest_email.date if self.latest_email else None

    @property
    def sender(self) -> str:
        return self.latest_email.sender if self.latest_email else ""

    @property
    def unread_count(self) -> int:
        return sum(1 for email in self.emails if not email.is_read)

    @property
    def message_count(self) -> int:
        return len(self.emails)

    @property
    def is_read(self) -> bool:
        return self.unread_count == 0

    def to_dict(self, include_emails: bool = True) -> dict[str, Any]:
        """
        Render in the shape the popup's list components consume.

        Side Effects: None (pure function - returns new dict)
        """
        data: dict[str, Any] = {
            "id": self.id,
            "threadId": self.thread_id,
            "subject": self.subject,
            "date": self.date,
            "from": self.sender,
            "is_read": self.is_read,
            "messageCount": self.message_count,
            "unreadCount": self.unread_count,
            "preview": self.preview,
            "latestEmail": self.latest_email.to_payload() if self.latest_email else None,
            "earliestEmail": self.earliest_email.to_payload() if self.earliest_email else None,
        }
        if include_emails:
            data["emails"] = [email.to_payload() for email in self.emails]
        return data
