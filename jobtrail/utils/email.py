"""
Helpers for picking apart raw ``From`` headers.
"""

from __future__ import annotations

import re

_ANGLE_ADDRESS = re.compile(r"<([^>]+)>")


def extract_email_address(email_address: str | None) -> str:
    """
    Extract and normalize email address from various formats.

    Args:
        email_address: Email address string (e.g., "user@example.com" or "Name <user@example.com>")

    Returns:
        Lowercase full email address (e.g., "user@example.com")
        If no valid email found, returns original string lowercased

    Examples:
        >>> extract_email_address("user@example.com")
        'user@example.com'

        >>> extract_email_address("Acme Talent <acme@myworkday.com>")
        'acme@myworkday.com'

        >>> extract_email_address("invalid")
        'invalid'
    """
    if not email_address:
        return ""

    email_lower = email_address.lower().strip()

    # "Name <email@domain.com>"
    angle_match = _ANGLE_ADDRESS.search(email_lower)
    if angle_match:
        email_lower = angle_match.group(1).strip()

    return email_lower.strip("\"' ")


def split_address(email_address: str | None) -> tuple[str, str]:
    """
    Split a sender into (local part, domain).

    Returns ("", "") when the sender carries no usable address.

    Examples:
        >>> split_address("Jane <jane@acme.com>")
        ('jane', 'acme.com')

        >>> split_address("Acme Careers")
        ('', '')
    """
    address = extract_email_address(email_address)
    if "@" not in address:
        return "", ""
    local, _, domain = address.rpartition("@")
    domain = domain.strip(". ")
    if not local or not domain:
        return "", ""
    return local, domain


def extract_domain_only(email_address: str | None) -> str:
    """
    Extract only the domain portion (after @) from email address.

    Examples:
        >>> extract_domain_only("user@example.com")
        'example.com'

        >>> extract_domain_only("Recruiting <no-reply@us.greenhouse-mail.io>")
        'us.greenhouse-mail.io'
    """
    return split_address(email_address)[1]


def extract_display_name(email_address: str | None) -> str:
    """
    Return the display-name part of a ``From`` header, unquoted.

    Examples:
        >>> extract_display_name('"Acme Hiring Team" <acme@myworkday.com>')
        'Acme Hiring Team'

        >>> extract_display_name("jane@acme.com")
        ''
    """
    if not email_address:
        return ""
    raw = email_address.strip()
    angle_at = raw.find("<")
    if angle_at <= 0:
        return ""
    return raw[:angle_at].strip().strip("\"'").strip()
