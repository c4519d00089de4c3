"""Email thread grouping and unique-conversation counting."""

from jobtrail.threads.grouper import (
    ThreadGrouper,
    count_unique_threads,
    get_default_grouper,
    group_emails_by_thread,
    set_default_grouper,
)
from jobtrail.threads.rules import GroupingRules, GroupingRulesError, load_grouping_rules
from jobtrail.threads.types import ThreadGroup

__all__ = [
    "GroupingRules",
    "GroupingRulesError",
    "ThreadGroup",
    "ThreadGrouper",
    "count_unique_threads",
    "get_default_grouper",
    "group_emails_by_thread",
    "load_grouping_rules",
    "set_default_grouper",
]
