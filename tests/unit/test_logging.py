from __future__ import annotations

import logging

from jobtrail.observability.logging import get_logger, resolve_level


def test_default_level_comes_from_env(monkeypatch):
    monkeypatch.setenv("JOBTRAIL_LOG_LEVEL", "warning")
    monkeypatch.delenv("JOBTRAIL_LOG_LEVELS", raising=False)
    assert resolve_level("jobtrail.api.app") == logging.WARNING


def test_most_specific_prefix_wins(monkeypatch):
    monkeypatch.setenv("JOBTRAIL_LOG_LEVEL", "INFO")
    monkeypatch.setenv(
        "JOBTRAIL_LOG_LEVELS", "jobtrail=ERROR, jobtrail.threads=DEBUG,jobtrail.threads.rules=WARNING"
    )
    assert resolve_level("jobtrail.threads.grouper") == logging.DEBUG
    assert resolve_level("jobtrail.threads.rules") == logging.WARNING
    assert resolve_level("jobtrail.dashboard.stats") == logging.ERROR
    assert resolve_level("uvicorn") == logging.INFO


def test_unknown_level_names_fall_back_to_info(monkeypatch):
    monkeypatch.setenv("JOBTRAIL_LOG_LEVEL", "chatty")
    monkeypatch.setenv("JOBTRAIL_LOG_LEVELS", "jobtrail.threads=loud,malformed")
    assert resolve_level("jobtrail.threads.grouper") == logging.INFO
    assert resolve_level("jobtrail.api") == logging.INFO


def test_get_logger_applies_override(monkeypatch):
    monkeypatch.setenv("JOBTRAIL_LOG_LEVELS", "jobtrail.tests.sample=DEBUG")
    assert get_logger("jobtrail.tests.sample").level == logging.DEBUG
