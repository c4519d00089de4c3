"""Data contracts shared between the grouping code and the API layer."""

from jobtrail.contracts.email import RELEVANT_CATEGORIES, Category, EmailRecord

__all__ = ["Category", "EmailRecord", "RELEVANT_CATEGORIES"]
