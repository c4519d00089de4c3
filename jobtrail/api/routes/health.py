"""Health check and debug endpoints for the JobTrail API.

- /health - Service status and version
- /debug/stats - In-memory grouping counters and latency (no PII)
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter

from jobtrail.config import APP_NAME, APP_VERSION
from jobtrail.observability.telemetry import get_latency_stats, snapshot_counters
from jobtrail.threads.grouper import get_default_grouper

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": APP_NAME,
        "version": APP_VERSION,
        "timestamp": datetime.now(UTC).isoformat(),
    }


@router.get("/debug/stats")
async def debug_stats() -> dict[str, Any]:
    """Aggregate grouping statistics for debugging. Contains no PII."""
    rules = get_default_grouper().rules
    return {
        "counters": snapshot_counters(),
        "grouping_latency": get_latency_stats("threads.group.latency"),
        "rules": {
            "ats_platform_domains": len(rules.ats_platform_domains),
            "company_domain_suffixes": len(rules.company_domain_suffixes),
            "administrative_suffixes": len(rules.administrative_suffixes),
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
