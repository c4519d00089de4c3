"""
Module: email
Purpose: The classified email record exchanged with the extension.
Dependencies: pydantic

Records arrive from the classification backend through the extension's
background script. Field names vary between endpoints (``thread_id`` vs
``threadId``, ``from`` vs ``from_email``) so every alias is accepted on
input; output always uses the extension's wire names.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from jobtrail.utils.dates import parse_email_date


class Category(str, Enum):
    """Lifecycle stage assigned by the upstream classifier."""

    APPLIED = "applied"
    INTERVIEWED = "interviewed"
    OFFERS = "offers"
    REJECTED = "rejected"
    IRRELEVANT = "irrelevant"


RELEVANT_CATEGORIES: tuple[str, ...] = (
    Category.APPLIED.value,
    Category.INTERVIEWED.value,
    Category.OFFERS.value,
    Category.REJECTED.value,
)


class EmailRecord(BaseModel):
    """One classified email. Immutable from the grouping code's point of view."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    id: str = Field(..., validation_alias=AliasChoices("id", "messageId"))
    thread_id: str | None = Field(
        default=None, validation_alias=AliasChoices("thread_id", "threadId", "thread")
    )
    sender: str = Field(
        default="",
        validation_alias=AliasChoices("from", "from_email", "sender"),
        serialization_alias="from",
    )
    subject: str = ""
    date: str | None = None
    category: str = ""
    is_read: bool = False
    is_starred: bool = False
    body: str | None = None
    html_body: str | None = None
    snippet: str | None = None
    company: str | None = None
    position: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("thread_id", mode="before")
    @classmethod
    def _coerce_thread_id(cls, v: Any) -> Any:
        if v is None or v == "":
            return None
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("sender", "subject", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("is_read", "is_starred", mode="before")
    @classmethod
    def _none_to_false(cls, v: Any) -> Any:
        return False if v is None else v

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, Category):
            return v.value
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("date", mode="before")
    @classmethod
    def _stringify_date(cls, v: Any) -> Any:
        if isinstance(v, datetime):
            return v.isoformat()
        if isinstance(v, int | float) and not isinstance(v, bool):
            parsed = parse_email_date(v)
            return parsed.isoformat() if parsed else None
        return v

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> EmailRecord:
        """Validate a raw payload dict from the extension."""
        return cls.model_validate(payload)

    @property
    def native_thread_id(self) -> str | None:
        """Provider thread id, when it is not just the message id again."""
        if self.thread_id and self.thread_id != self.id:
            return self.thread_id
        return None

    @property
    def parsed_date(self) -> datetime | None:
        return parse_email_date(self.date)

    def to_payload(self) -> dict[str, Any]:
        """Serialize with wire names (``from``), keeping unknown fields."""
        return self.model_dump(by_alias=True)
