"""JobTrail - conversation grouping and dashboards for job-application email"""

from __future__ import annotations

__version__ = "1.0.0"


# Lazy imports so `import jobtrail` stays light for the API worker
def __getattr__(name: str):
    """
    Lazy imports to avoid loading pydantic/bs4 when only importing lightweight modules.
    """
    if name in ("group_emails_by_thread", "count_unique_threads", "ThreadGrouper", "ThreadGroup"):
        from jobtrail import threads

        return getattr(threads, name)

    if name in ("EmailRecord", "Category"):
        from jobtrail.contracts import email

        return getattr(email, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "Category",
    "EmailRecord",
    "ThreadGroup",
    "ThreadGrouper",
    "count_unique_threads",
    "group_emails_by_thread",
]
