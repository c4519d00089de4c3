"""
Company identity extraction from sender addresses.

The "company domain" is a short token standing in for the employer an
email is about. It is usually the registrable label of the sender's
domain, with two corrections:

- Recruiting platforms (Workday, Greenhouse, ...) send for many
  employers, so the employer is recovered from the address local part,
  the display name or the subject instead.
- Employers often mail from a dedicated domain (q2ebanking.com,
  acmecareers.com); a trailing business suffix is stripped.

Both corrections are heuristics. They can over-merge (two employers
sharing a root) or under-merge (an employer using unrelated domains).
"""

from __future__ import annotations

import re
from functools import lru_cache

from jobtrail.threads.rules import DEFAULT_RULES, GroupingRules
from jobtrail.threads.subject import strip_leading_prefixes
from jobtrail.utils.email import extract_display_name, split_address

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

# "Acme - Interview invitation", "Acme: Next steps", "Acme | Application"
_SUBJECT_COMPANY = re.compile(
    r"^\s*([A-Za-z0-9&.'][A-Za-z0-9&.' ]{0,40}?)\s*(?:[:|]|\s[-–—]\s)"
)


def _token(value: str) -> str:
    return _NON_ALNUM.sub("", value.lower())


@lru_cache(maxsize=32)
def _display_name_pattern(markers: tuple[str, ...]) -> re.Pattern[str] | None:
    if not markers:
        return None
    alternation = "|".join(re.escape(m) for m in markers)
    return re.compile(rf"^\s*(.+?)\s+(?:{alternation})\b", re.IGNORECASE)


def registrable_label(domain: str, rules: GroupingRules = DEFAULT_RULES) -> str:
    """
    Second-to-last label of a domain.

    Examples:
        >>> registrable_label("q2ebanking.com")
        'q2ebanking'
        >>> registrable_label("mail.acme.co.uk")
        'acme'
    """
    labels = [label for label in domain.lower().split(".") if label]
    if not labels:
        return ""
    if len(labels) == 1:
        return labels[0]
    if len(labels) >= 3 and labels[-2] in rules.country_second_level_labels:
        return labels[-3]
    return labels[-2]


def is_ats_domain(domain: str, rules: GroupingRules = DEFAULT_RULES) -> str | None:
    """Return the matching recruiting platform name for a sender domain, if any."""
    labels = domain.lower().split(".")
    for platform in rules.ats_platform_domains:
        for label in labels:
            if label == platform or label.startswith(f"{platform}-"):
                return platform
    return None


def strip_company_suffix(label: str, rules: GroupingRules = DEFAULT_RULES) -> str:
    """
    Drop a trailing business suffix when a usable root remains.

    Examples:
        >>> strip_company_suffix("q2ebanking")
        'q2'
        >>> strip_company_suffix("hr")
        'hr'
    """
    for suffix in rules.company_domain_suffixes:
        if label.endswith(suffix):
            root = label[: -len(suffix)]
            if len(root) >= rules.min_root_length:
                return root
    return label


def company_from_display_name(sender: str, rules: GroupingRules = DEFAULT_RULES) -> str:
    """'Acme Hiring Team <x@greenhouse.io>' -> 'acme'."""
    pattern = _display_name_pattern(rules.display_name_company_markers)
    if pattern is None:
        return ""
    match = pattern.match(extract_display_name(sender))
    if not match:
        return ""
    return _token(match.group(1))


def company_from_subject(subject: str, rules: GroupingRules = DEFAULT_RULES) -> str:
    """'Reminder - Acme: Interview on Friday' -> 'acme'."""
    match = _SUBJECT_COMPANY.match(strip_leading_prefixes(subject or "", rules))
    if not match:
        return ""
    return _token(match.group(1))


def _recover_ats_company(
    local_part: str, sender: str, subject: str, rules: GroupingRules
) -> str:
    if local_part not in rules.generic_sender_aliases:
        token = _token(local_part)
        if token:
            return token
    return company_from_display_name(sender, rules) or company_from_subject(subject, rules)


def extract_company_domain(
    sender: str | None,
    subject: str | None = "",
    rules: GroupingRules = DEFAULT_RULES,
) -> str:
    """
    Extract the company token used to group emails about one employer.

    Side Effects: None (pure function)

    Args:
        sender: Raw From header ("Jane <jane@acme.com>")
        subject: Subject line, consulted only for recruiting-platform senders
        rules: Pattern lists to apply

    Returns:
        Lowercase alphanumeric token, or "" when the sender has no address

    Examples:
        >>> extract_company_domain("jane@acme.com")
        'acme'
        >>> extract_company_domain("acme@myworkday.com")
        'acme'
        >>> extract_company_domain("Recruiting <talent@q2ebanking.com>")
        'q2'
    """
    local_part, domain = split_address(sender)
    if not domain:
        return ""

    label = registrable_label(domain, rules)
    if is_ats_domain(domain, rules):
        label = _recover_ats_company(local_part, sender or "", subject or "", rules) or label

    token = _token(label)
    if not token:
        return ""
    return strip_company_suffix(token, rules)
