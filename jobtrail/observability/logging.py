"""
Logger setup for JobTrail.

JOBTRAIL_LOG_LEVEL sets the default level. JOBTRAIL_LOG_LEVELS narrows it
per logger, matching the most specific dotted prefix:

    JOBTRAIL_LOG_LEVELS="jobtrail.threads=DEBUG,jobtrail.telemetry=WARNING"
"""

from __future__ import annotations

import logging
import os
from typing import Final

_HANDLER_ATTACHED: bool = False
_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _parse_level(level_name: str, default: int = logging.INFO) -> int:
    return logging.getLevelNamesMapping().get(level_name.strip().upper(), default)


def _level_overrides() -> dict[str, int]:
    overrides: dict[str, int] = {}
    for item in os.getenv("JOBTRAIL_LOG_LEVELS", "").split(","):
        name, sep, level_name = item.partition("=")
        if sep and name.strip():
            overrides[name.strip()] = _parse_level(level_name)
    return overrides


def resolve_level(name: str) -> int:
    """Level for a logger: longest JOBTRAIL_LOG_LEVELS prefix, else JOBTRAIL_LOG_LEVEL."""
    overrides = _level_overrides()
    parts = name.split(".")
    for end in range(len(parts), 0, -1):
        prefix = ".".join(parts[:end])
        if prefix in overrides:
            return overrides[prefix]
    return _parse_level(os.getenv("JOBTRAIL_LOG_LEVEL", "INFO"))


def get_logger(name: str) -> logging.Logger:
    """Return a module logger; the root stream handler is attached on first use."""
    global _HANDLER_ATTACHED

    if not _HANDLER_ATTACHED:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root = logging.getLogger()
        root.addHandler(handler)
        root.setLevel(_parse_level(os.getenv("JOBTRAIL_LOG_LEVEL", "INFO")))
        _HANDLER_ATTACHED = True

    logger = logging.getLogger(name)
    logger.setLevel(resolve_level(name))
    return logger
