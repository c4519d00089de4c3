"""Thread grouping endpoints.

- POST /api/threads/group - Conversations for a flat email list
- POST /api/threads/count - Unique conversation count only
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from jobtrail.api.models import EmailBatch, ThreadCountResponse, ThreadGroupsResponse
from jobtrail.observability.telemetry import log_event
from jobtrail.threads.grouper import ThreadGrouper, get_default_grouper

router = APIRouter(prefix="/api/threads", tags=["threads"])

# Module-level storage for dependencies injected at startup
_grouper: ThreadGrouper | None = None


def set_thread_grouper(grouper: ThreadGrouper | None) -> None:
    """Inject the grouper dependency.

    Side Effects:
        - Sets module-level _grouper variable
    """
    global _grouper
    _grouper = grouper


def get_thread_grouper() -> ThreadGrouper:
    return _grouper or get_default_grouper()


@router.post("/group", response_model=ThreadGroupsResponse)
async def group_threads(batch: EmailBatch) -> dict[str, Any]:
    """Group emails into conversations, most recent first.

    Side Effects:
        - Logs telemetry events
    """
    groups = get_thread_grouper().group(batch.emails)
    log_event("api.threads.group", emails=len(batch.emails), groups=len(groups))
    return {"groups": [group.to_dict() for group in groups], "count": len(groups)}


@router.post("/count", response_model=ThreadCountResponse)
async def count_threads(batch: EmailBatch) -> dict[str, Any]:
    """Count unique conversations."""
    return {"count": get_thread_grouper().count(batch.emails)}
