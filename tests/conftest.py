"""
Pytest configuration for JobTrail tests

Provides fixtures shared across unit and integration tests
"""

from __future__ import annotations

import itertools
from datetime import UTC, datetime
from typing import Any

import pytest

from jobtrail.contracts.email import EmailRecord
from jobtrail.observability.telemetry import reset_telemetry
from jobtrail.threads.grouper import set_default_grouper

# Fixed reference time so date-dependent assertions never drift
NOW = datetime(2024, 6, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_email():
    """
    Factory for EmailRecord instances.

    Each call gets a fresh message id unless one is given; thread_id
    defaults to the message id, which the grouper treats as "no thread".
    """
    ids = itertools.count(1)

    def _make(**fields: Any) -> EmailRecord:
        message_id = str(fields.pop("id", f"msg-{next(ids)}"))
        payload: dict[str, Any] = {
            "id": message_id,
            "thread_id": message_id,
            "from": "jane@acme.com",
            "subject": "Application received",
            "date": "2024-06-01T10:00:00Z",
            "category": "applied",
            "is_read": True,
        }
        if "sender" in fields:
            fields["from"] = fields.pop("sender")
        payload.update(fields)
        return EmailRecord.model_validate(payload)

    return _make


@pytest.fixture(autouse=True)
def clean_state():
    """Reset in-memory telemetry and the process-wide grouper around each test."""
    reset_telemetry()
    set_default_grouper(None)
    yield
    reset_telemetry()
    set_default_grouper(None)
