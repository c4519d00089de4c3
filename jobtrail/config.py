"""Centralized configuration for the JobTrail backend.

Typed constants for the API, pagination, follow-up generation and
thread grouping. Environment variable overrides use safe defaults so the
app starts without extra env configuration.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# .env values must be in place before the constants below read them
load_dotenv()

# --- App ---
APP_NAME: str = "JobTrail API"
APP_VERSION: str = "1.0.0"
APP_ENV: str = os.getenv("JOBTRAIL_ENV", "development")

# --- CORS ---
EXTENSION_ID: str = os.getenv("JOBTRAIL_EXTENSION_ID", "")
DEV_EXTENSION_ID: str = os.getenv("JOBTRAIL_DEV_EXTENSION_ID", "")

# --- Pagination ---
PAGE_SIZE: int = int(os.getenv("JOBTRAIL_PAGE_SIZE", "10"))
PAGE_SIZE_MAX: int = 100

# --- Dashboard ---
RECENT_EMAILS_LIMIT: int = 5
NEW_APPLICATIONS_WINDOW_DAYS: int = 7

# --- Follow-ups ---
FOLLOWUP_LIMIT: int = int(os.getenv("JOBTRAIL_FOLLOWUP_LIMIT", "6"))
FOLLOWUP_APPLIED_AFTER_DAYS: int = 7
FOLLOWUP_APPLIED_HIGH_AFTER_DAYS: int = 10
FOLLOWUP_INTERVIEW_AFTER_DAYS: int = 2
FOLLOWUP_INTERVIEW_HIGH_AFTER_DAYS: int = 5
FOLLOWUP_OFFER_AFTER_DAYS: int = 1

# --- Plans ---
FREE_PLAN: str = "free"
FREE_PLAN_BLOCKED_RANGES: frozenset[str] = frozenset({"90", "last90days"})

# --- Thread grouping ---
# YAML file overriding the pattern lists in jobtrail.threads.grouping_data
GROUPING_RULES_PATH: str | None = os.getenv("JOBTRAIL_GROUPING_RULES") or None
PREVIEW_MAX_CHARS: int = 200

# --- Notifications ---
NOTIFICATION_TIMEOUT_SECONDS: float = float(os.getenv("JOBTRAIL_NOTIFICATION_TIMEOUT", "5.0"))

# --- API ---
API_BATCH_SIZE_MAX: int = int(os.getenv("JOBTRAIL_API_BATCH_SIZE_MAX", "5000"))
API_HOST: str = os.getenv("JOBTRAIL_API_HOST", "127.0.0.1")
API_PORT: int = int(os.getenv("JOBTRAIL_API_PORT", "8000"))
