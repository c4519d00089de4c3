"""Pydantic request/response models for the JobTrail API.

Request bodies carry EmailRecord lists exactly as the extension's
background script forwards them from the classification backend.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from jobtrail.config import API_BATCH_SIZE_MAX, FOLLOWUP_LIMIT, PAGE_SIZE, PAGE_SIZE_MAX
from jobtrail.contracts.email import EmailRecord

# =============================================================================
# VALIDATION HELPERS
# =============================================================================

MAX_CATEGORY_BUCKETS = 20
MAX_QUERY_LENGTH = 200


def _check_batch_size(emails: list[EmailRecord]) -> list[EmailRecord]:
    if len(emails) > API_BATCH_SIZE_MAX:
        raise ValueError(f"Too many emails: {len(emails)} > {API_BATCH_SIZE_MAX}")
    return emails


# =============================================================================
# REQUESTS
# =============================================================================


class EmailBatch(BaseModel):
    """A flat list of classified emails."""

    emails: list[EmailRecord] = Field(default_factory=list)

    @field_validator("emails")
    @classmethod
    def validate_size(cls, v: list[EmailRecord]) -> list[EmailRecord]:
        return _check_batch_size(v)


class CategorizedEmailsRequest(BaseModel):
    """Emails bucketed by category, as the popup keeps them."""

    categorized_emails: dict[str, list[EmailRecord]] = Field(default_factory=dict)

    @field_validator("categorized_emails")
    @classmethod
    def validate_buckets(cls, v: dict[str, list[EmailRecord]]) -> dict[str, list[EmailRecord]]:
        if len(v) > MAX_CATEGORY_BUCKETS:
            raise ValueError(f"Too many categories: {len(v)} > {MAX_CATEGORY_BUCKETS}")
        _check_batch_size([email for bucket in v.values() for email in bucket])
        return v


class DashboardStatsRequest(CategorizedEmailsRequest):
    total_processed: int | None = Field(default=None, ge=0)


class FollowUpsRequest(EmailBatch):
    limit: int = Field(default=FOLLOWUP_LIMIT, ge=0, le=50)


class ConversationsRequest(CategorizedEmailsRequest):
    view: str = Field(default="all", min_length=1, max_length=50)
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=PAGE_SIZE, ge=1, le=PAGE_SIZE_MAX)
    query: str | None = Field(default=None, max_length=MAX_QUERY_LENGTH)
    time_range: str | None = Field(default=None, max_length=20)
    plan: str | None = Field(default=None, max_length=20)


# =============================================================================
# RESPONSES
# =============================================================================


class ThreadCountResponse(BaseModel):
    count: int


class ThreadGroupsResponse(BaseModel):
    groups: list[dict[str, Any]]
    count: int
