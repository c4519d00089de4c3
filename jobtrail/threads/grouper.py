"""
Thread grouping: collapse classified emails into logical conversations.

The provider's thread id is only one signal. Interview processes in
particular spread over many threads and senders (recruiter, scheduling
tool, ATS reminders), and counting each as its own conversation inflates
the dashboard. Keys are chosen by the first matching rule:

1. interview_<company>      interviewed email with a known company
2. thread_<thread id>       provider thread id distinct from message id
3. company_<company>_<subj> company plus normalized subject
4. email_<id>               singleton

Known limitation: rule 1 merges two separate interview loops with the
same employer within one search into a single conversation.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from jobtrail.config import GROUPING_RULES_PATH, PREVIEW_MAX_CHARS
from jobtrail.contracts.email import Category, EmailRecord
from jobtrail.observability.logging import get_logger
from jobtrail.observability.telemetry import counter, time_block
from jobtrail.threads.company import extract_company_domain
from jobtrail.threads.rules import DEFAULT_RULES, GroupingRules, load_grouping_rules
from jobtrail.threads.subject import normalize_subject
from jobtrail.threads.types import ThreadGroup
from jobtrail.utils.email import extract_email_address
from jobtrail.utils.html import preview_text
from jobtrail.utils.redaction import redact_address, redact_grouping_key, redact_subject

logger = get_logger(__name__)


class _GroupAccumulator:
    """Mutable per-key state while a single grouping pass runs."""

    __slots__ = ("key", "thread_id", "emails", "latest", "latest_date", "earliest", "earliest_date")

    def __init__(self, key: str, first: EmailRecord):
        self.key = key
        self.thread_id = first.thread_id or first.id
        self.emails: list[EmailRecord] = []
        self.latest: EmailRecord | None = None
        self.latest_date: datetime | None = None
        self.earliest: EmailRecord | None = None
        self.earliest_date: datetime | None = None

    def add(self, email: EmailRecord, when: datetime | None) -> None:
        self.emails.append(email)

        # Undated members only fill an empty slot; a valid date always beats
        # a missing one, and ties keep the member seen first.
        if self.latest is None or (
            when is not None and (self.latest_date is None or when > self.latest_date)
        ):
            self.latest, self.latest_date = email, when
        if self.earliest is None or (
            when is not None and (self.earliest_date is None or when < self.earliest_date)
        ):
            self.earliest, self.earliest_date = email, when

    def build(self) -> ThreadGroup:
        latest = self.latest or self.emails[0]
        return ThreadGroup(
            key=self.key,
            thread_id=self.thread_id,
            emails=list(self.emails),
            latest_email=latest,
            earliest_email=self.earliest or self.emails[0],
            latest_date=self.latest_date,
            preview=preview_text(latest.html_body, latest.body, PREVIEW_MAX_CHARS),
        )


def _recency_sort_key(group: ThreadGroup) -> tuple[int, float]:
    if group.latest_date is None:
        return (0, 0.0)
    return (1, group.latest_date.timestamp())


class ThreadGrouper:
    """
    Groups emails into conversations using a fixed set of pattern lists.

    Instances hold no per-call state, so one grouper can be shared across
    requests.
    """

    def __init__(self, rules: GroupingRules | None = None):
        self.rules = rules or DEFAULT_RULES

    def grouping_key(self, email: EmailRecord) -> str:
        """
        Compute the grouping key for one email.

        Side Effects: None (pure function of the email's fields)
        """
        company = extract_company_domain(email.sender, email.subject, self.rules)

        if email.category == Category.INTERVIEWED.value and company:
            return f"interview_{company}"

        native_thread = email.native_thread_id
        if native_thread:
            return f"thread_{native_thread}"

        subject = normalize_subject(email.subject, self.rules)
        if company and subject:
            return f"company_{company}_{subject}"

        return f"email_{email.id}"

    def group(self, emails: Iterable[EmailRecord] | None) -> list[ThreadGroup]:
        """
        Group emails into conversations, most recent first.

        Side Effects:
            - Increments grouping counters
            - Records grouping latency

        Args:
            emails: Classified emails (None is treated as empty)

        Returns:
            One ThreadGroup per grouping key, sorted by latest date
            descending; groups without any parseable date come last.
        """
        with time_block("threads.group.latency"):
            groups: dict[str, _GroupAccumulator] = {}
            total = 0
            for email in emails or ():
                total += 1
                key = self.grouping_key(email)
                acc = groups.get(key)
                if acc is None:
                    acc = _GroupAccumulator(key, email)
                    groups[key] = acc
                    logger.debug(
                        "New thread group %s from %s: %s",
                        redact_grouping_key(key),
                        redact_address(extract_email_address(email.sender)),
                        redact_subject(email.subject),
                    )
                acc.add(email, email.parsed_date)

            result = [acc.build() for acc in groups.values()]
            result.sort(key=_recency_sort_key, reverse=True)

        counter("threads.emails_grouped", total)
        counter("threads.groups_built", len(result))
        if total:
            logger.debug("Grouped %d emails into %d threads", total, len(result))
        return result

    def count(self, emails: Iterable[EmailRecord] | None) -> int:
        """Number of unique conversations; always len(self.group(emails))."""
        return len(self.group(emails))


_default_grouper: ThreadGrouper | None = None


def get_default_grouper() -> ThreadGrouper:
    """
    Lazily build the process-wide grouper from JOBTRAIL_GROUPING_RULES.

    Side Effects:
        - Reads the rules override file on first call
        - Sets module-level _default_grouper
    """
    global _default_grouper
    if _default_grouper is None:
        _default_grouper = ThreadGrouper(load_grouping_rules(GROUPING_RULES_PATH))
    return _default_grouper


def set_default_grouper(grouper: ThreadGrouper | None) -> None:
    """Replace (or with None, reset) the process-wide grouper."""
    global _default_grouper
    _default_grouper = grouper


def group_emails_by_thread(emails: Iterable[EmailRecord] | None) -> list[ThreadGroup]:
    """Group emails with the process-wide grouper."""
    return get_default_grouper().group(emails)


def count_unique_threads(emails: Iterable[EmailRecord] | None) -> int:
    """Count conversations with the process-wide grouper."""
    return len(group_emails_by_thread(emails))
