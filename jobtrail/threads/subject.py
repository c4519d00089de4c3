"""
Subject normalization for thread grouping.

Scheduling mail for one application tends to arrive as a family of
subjects ("Interview", "Reminder - Interview", "Interview Confirmed",
"Interview - Jane Doe"). normalize_subject maps the family onto one
string so it can be used as part of a grouping key.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from jobtrail.threads.rules import DEFAULT_RULES, GroupingRules

_WHITESPACE = re.compile(r"\s+")

# "... - Jane Doe", "... – Jane Q Doe"
_PERSONALIZATION_SUFFIX = re.compile(
    r"\s+[-–—]\s+[A-Z][A-Za-z'’.-]*(?:\s+[A-Z][A-Za-z'’.-]*){1,2}\s*$"
)


def _phrase(words: str) -> str:
    return r"\s+".join(re.escape(w) for w in words.split())


@dataclass(frozen=True)
class _CompiledRules:
    prefix: re.Pattern[str] | None
    admin_suffix: re.Pattern[str] | None
    confusables: dict[int, str]


@lru_cache(maxsize=32)
def _compile(rules: GroupingRules) -> _CompiledRules:
    confusables = str.maketrans(rules.confusable_characters)

    prefix_parts = []
    if rules.reply_forward_prefixes:
        reply = "|".join(re.escape(p) for p in rules.reply_forward_prefixes)
        prefix_parts.append(rf"(?:{reply})\s*(?:\[\d+\])?\s*:")
    if rules.notice_prefixes:
        notice = "|".join(_phrase(p) for p in rules.notice_prefixes)
        prefix_parts.append(rf"(?:{notice})\b\s*[:\-–—!]*")
    prefix = (
        re.compile(rf"^\s*(?:{'|'.join(prefix_parts)})\s*", re.IGNORECASE)
        if prefix_parts
        else None
    )

    admin_suffix = None
    if rules.administrative_suffixes:
        # Matched after lowercasing and confusable folding, so fold the words too
        folded = sorted(
            {w.lower().translate(confusables) for w in rules.administrative_suffixes},
            key=len,
            reverse=True,
        )
        admin = "|".join(_phrase(w) for w in folded)
        admin_suffix = re.compile(rf"(?:^|[\s\-–—:,.!()\[\]]+)(?:{admin})[\s\-–—:,.!()\[\]]*$")

    return _CompiledRules(prefix=prefix, admin_suffix=admin_suffix, confusables=confusables)


def _strip_repeatedly(pattern: re.Pattern[str] | None, text: str) -> str:
    if pattern is None:
        return text
    while True:
        stripped = pattern.sub("", text, count=1)
        if stripped == text:
            return text
        text = stripped


def strip_leading_prefixes(subject: str, rules: GroupingRules = DEFAULT_RULES) -> str:
    """
    Remove stacked reply/forward/reminder markers from the start of a subject.

    Examples:
        >>> strip_leading_prefixes("RE: Fwd: Reminder - Onsite interview")
        'Onsite interview'
    """
    return _strip_repeatedly(_compile(rules).prefix, subject or "").strip()


def normalize_subject(subject: str | None, rules: GroupingRules = DEFAULT_RULES) -> str:
    """
    Normalize a subject line for grouping.

    Side Effects: None (pure function)

    Steps, in order: strip leading reply/forward/notice prefixes, strip a
    trailing "- First Last" personalization, lowercase, fold confusable
    characters, strip trailing administrative words, collapse whitespace.

    Examples:
        >>> normalize_subject("Reminder - Q2 Software Engineer Interview")
        'q2 software engineer interview'
        >>> normalize_subject("Onsite Interview Confirmed - Jane Doe")
        'onsite interview'
    """
    if not subject:
        return ""
    compiled = _compile(rules)

    text = strip_leading_prefixes(subject, rules)
    text = _PERSONALIZATION_SUFFIX.sub("", text)
    text = text.lower().translate(compiled.confusables)
    text = _strip_repeatedly(compiled.admin_suffix, text)
    return _WHITESPACE.sub(" ", text).strip()
