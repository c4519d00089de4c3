"""
Configurable pattern lists for thread grouping.

The heuristics in company.py and subject.py read every literal list from
a GroupingRules instance. Defaults come from grouping_data.py; a YAML
file can replace any of the lists:

    ats_platform_domains: [myworkday, greenhouse, lever, jobvite]
    company_domain_suffixes: [ebanking, banking, careers]
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

from jobtrail.observability.logging import get_logger
from jobtrail.threads import grouping_data

logger = get_logger(__name__)


class GroupingRulesError(ValueError):
    """Raised when a grouping rules override file is malformed."""


@dataclass(frozen=True)
class GroupingRules:
    """Pattern lists driving company extraction and subject normalization."""

    ats_platform_domains: tuple[str, ...] = grouping_data.ATS_PLATFORM_DOMAINS
    generic_sender_aliases: tuple[str, ...] = grouping_data.GENERIC_SENDER_ALIASES
    display_name_company_markers: tuple[str, ...] = grouping_data.DISPLAY_NAME_COMPANY_MARKERS
    company_domain_suffixes: tuple[str, ...] = grouping_data.COMPANY_DOMAIN_SUFFIXES
    min_root_length: int = grouping_data.MIN_ROOT_LENGTH
    country_second_level_labels: tuple[str, ...] = grouping_data.COUNTRY_SECOND_LEVEL_LABELS
    reply_forward_prefixes: tuple[str, ...] = grouping_data.REPLY_FORWARD_PREFIXES
    notice_prefixes: tuple[str, ...] = grouping_data.NOTICE_PREFIXES
    administrative_suffixes: tuple[str, ...] = grouping_data.ADMINISTRATIVE_SUFFIXES
    confusable_characters: dict[str, str] = field(
        default_factory=lambda: dict(grouping_data.CONFUSABLE_CHARACTERS)
    )

    def __hash__(self) -> int:
        # confusable_characters is a dict; hash its items so rules can key caches
        values = []
        for f in fields(self):
            value = getattr(self, f.name)
            values.append(tuple(sorted(value.items())) if isinstance(value, dict) else value)
        return hash(tuple(values))

    def with_overrides(self, overrides: dict[str, Any]) -> GroupingRules:
        """Return a copy with the given lists replaced (validated)."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise GroupingRulesError(f"Unknown grouping rule keys: {', '.join(unknown)}")

        changes: dict[str, Any] = {}
        for name, value in overrides.items():
            if name == "min_root_length":
                if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                    raise GroupingRulesError("min_root_length must be a positive integer")
                changes[name] = value
            elif name == "confusable_characters":
                if not isinstance(value, dict) or not all(
                    isinstance(k, str) and len(k) == 1 and isinstance(v, str)
                    for k, v in value.items()
                ):
                    raise GroupingRulesError(
                        "confusable_characters must map single characters to strings"
                    )
                changes[name] = dict(value)
            else:
                if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                    raise GroupingRulesError(f"{name} must be a list of strings")
                changes[name] = tuple(v.strip().lower() for v in value if v.strip())
        return replace(self, **changes)


DEFAULT_RULES = GroupingRules()


def load_grouping_rules(path: str | Path | None) -> GroupingRules:
    """
    Load grouping rules, applying a YAML override file when one is given.

    A missing file is not fatal: the defaults are used and a warning logged.

    Raises:
        GroupingRulesError: If the file is not a YAML mapping or holds bad values
    """
    if path is None:
        return DEFAULT_RULES

    rules_path = Path(path)
    if not rules_path.exists():
        logger.warning("Grouping rules not found at %s, using defaults", rules_path)
        return DEFAULT_RULES

    try:
        with open(rules_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise GroupingRulesError(f"Invalid YAML in {rules_path}: {e}") from e

    if data is None:
        return DEFAULT_RULES
    if not isinstance(data, dict):
        raise GroupingRulesError(f"{rules_path} must contain a mapping at the top level")

    rules = DEFAULT_RULES.with_overrides(data)
    logger.info("Loaded grouping rules from %s (%d overrides)", rules_path, len(data))
    return rules
