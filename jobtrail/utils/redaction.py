"""
Redaction helpers for anything that reaches a log line.

Provides:
- redact(): Hash sensitive strings for correlation without exposure
- redact_subject(): Partially redact email subjects for debugging
- redact_address(): Mask the local part of a sender address
- redact_grouping_key(): Keep the rule prefix of a thread key, hash the rest
"""

from __future__ import annotations

import re
from hashlib import sha256

_KEY_PREFIX = re.compile(r"^(interview|thread|company|email)_")


def redact(value: str | None) -> str:
    """
    Return a stable hash representation of a sensitive string.
    """
    if not value:
        return "hash:missing"
    digest = sha256(value.encode("utf-8")).hexdigest()[:12]
    return f"hash:{digest}"


def redact_subject(subject: str | None, max_length: int = 30) -> str:
    """
    Partially redact email subject for logging while preserving debuggability.

    Shows first N characters + hash suffix for correlation.

    Example:
        "Your application to Acme Corp has been received" ->
        "Your application to Acme Corp ..." (h:7a8b9c)
    """
    if not subject:
        return "(no subject)"

    visible = subject[:max_length] + "..." if len(subject) > max_length else subject
    digest = sha256(subject.encode("utf-8")).hexdigest()[:6]
    return f"{visible} (h:{digest})"


def redact_address(address: str | None) -> str:
    """
    Mask the local part of an email address, keeping the domain.

    "jane.doe@acme.com" -> "j***@acme.com"
    """
    if not address:
        return "(no sender)"
    if "@" not in address:
        return redact(address)
    local, _, domain = address.rpartition("@")
    head = local[:1] if local else ""
    return f"{head}***@{domain}"


def redact_grouping_key(key: str | None) -> str:
    """
    Redact a thread grouping key while keeping the rule that produced it.

    "company_acme_software engineer interview" -> "company_hash:1a2b3c4d5e6f"
    """
    if not key:
        return "hash:missing"
    match = _KEY_PREFIX.match(key)
    if not match:
        return redact(key)
    return f"{match.group(0)}{redact(key[match.end():])}"
