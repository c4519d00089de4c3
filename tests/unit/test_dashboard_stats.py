"""Unit tests for dashboard statistics

Tests cover:
- Per-category conversation counts
- Application total reconciliation with the backend figure
- Response and success rates
- New applications window and recent emails
"""

from __future__ import annotations

import pytest

from jobtrail.dashboard.stats import compute_dashboard_stats, emails_for_category, percentage


@pytest.fixture
def categorized(make_email):
    return {
        "applied": [
            make_email(id="a1", sender="jane@acme.com", thread_id="t-1", date="2024-06-13T09:00:00Z"),
            make_email(id="a2", sender="bob@globex.com", thread_id="t-2", date="2024-06-05T09:00:00Z"),
            make_email(id="a3", sender="jane@acme.com", thread_id="t-1", date="2024-06-14T09:00:00Z"),
        ],
        "interviewed": [
            make_email(
                id="i1", sender="jane@acme.com", category="interviewed", date="2024-06-10T09:00:00Z"
            ),
            make_email(
                id="i2",
                sender="acme@myworkday.com",
                category="interviewed",
                date="2024-06-11T09:00:00Z",
            ),
        ],
        "offers": [
            make_email(
                id="o1",
                sender="amy@initech.com",
                category="offers",
                thread_id="t-9",
                date="2024-06-12T09:00:00Z",
            ),
        ],
        "rejected": [],
        "irrelevant": [
            make_email(
                id="x1",
                sender="news@weekly.com",
                category="irrelevant",
                date="2024-06-15T09:00:00Z",
            ),
        ],
    }


def test_category_counts_are_conversation_counts(categorized, now):
    stats = compute_dashboard_stats(categorized, now=now)
    assert stats.category_counts == {
        "applied": 2,
        "interviewed": 1,
        "offers": 1,
        "rejected": 0,
        "irrelevant": 1,
    }


def test_total_excludes_irrelevant(categorized, now):
    stats = compute_dashboard_stats(categorized, now=now)
    assert stats.total_applications == 4
    assert stats.interviews_and_offers == 2
    assert stats.response_rate == 50
    assert stats.success_rate == 25


def test_backend_total_wins_when_larger(categorized, now):
    stats = compute_dashboard_stats(categorized, total_processed=10, now=now)
    assert stats.total_applications == 10
    assert stats.response_rate == 20
    assert stats.success_rate == 10


def test_local_total_wins_when_backend_is_behind(categorized, now):
    stats = compute_dashboard_stats(categorized, total_processed=2, now=now)
    assert stats.total_applications == 4


def test_new_applications_this_week(categorized, now):
    stats = compute_dashboard_stats(categorized, now=now)
    assert stats.new_applications_this_week == 2


def test_recent_emails_newest_first_and_relevant_only(categorized, now):
    stats = compute_dashboard_stats(categorized, now=now)
    assert [email.id for email in stats.recent_emails] == ["a3", "a1", "o1", "i2", "i1"]


def test_capitalized_category_keys(make_email, now):
    stats = compute_dashboard_stats(
        {"Applied": [make_email(thread_id="t-1")], "Offers": [make_email(category="offers")]},
        now=now,
    )
    assert stats.category_counts["applied"] == 1
    assert stats.category_counts["offers"] == 1


def test_empty_input(now):
    stats = compute_dashboard_stats({}, now=now)
    assert stats.total_applications == 0
    assert stats.response_rate == 0
    assert stats.success_rate == 0
    assert stats.recent_emails == []


def test_to_dict_shape(categorized, now):
    data = compute_dashboard_stats(categorized, now=now).to_dict()
    assert data["totalApplications"] == 4
    assert data["interviewsAndOffers"] == 2
    assert data["categoryCounts"]["applied"] == 2
    assert data["recentEmails"][0]["id"] == "a3"


def test_emails_for_category_prefers_lowercase(make_email):
    lower = make_email(id="lower")
    upper = make_email(id="upper")
    assert [e.id for e in emails_for_category({"applied": [lower], "Applied": [upper]}, "applied")] == [
        "lower"
    ]
    assert emails_for_category({}, "applied") == []


@pytest.mark.parametrize(
    "part,whole,expected",
    [(0, 0, 0), (1, 3, 33), (2, 3, 67), (1, 8, 13), (5, 5, 100)],
)
def test_percentage_rounds_half_up(part, whole, expected):
    assert percentage(part, whole) == expected
