"""Same-Day Edit Window — tests for the pure editability rule.

Tests cover:
    - Same UTC day is editable, any later day is locked
    - Comparison happens in UTC, not in the caller's offset
    - Naive timestamps are treated as UTC
"""

from datetime import datetime, timedelta, timezone

from chickquita.core.enforce_edit_window import is_editable, utc_date

CREATED = datetime(2026, 5, 1, 8, 0, tzinfo=timezone.utc)


def test_same_day_is_editable():
    assert is_editable(CREATED, CREATED + timedelta(hours=15))


def test_next_day_is_locked():
    assert not is_editable(CREATED, CREATED + timedelta(days=1))


def test_lock_is_monotonic():
    for days in range(1, 40):
        assert not is_editable(CREATED, CREATED + timedelta(days=days))


def test_dates_compared_in_utc():
    # 01:00 on May 2nd at UTC+3 is still May 1st in UTC
    same_utc_day = datetime(2026, 5, 2, 1, 0, tzinfo=timezone(timedelta(hours=3)))
    assert is_editable(CREATED, same_utc_day)


def test_naive_timestamp_treated_as_utc():
    naive = datetime(2026, 5, 1, 8, 0)
    assert utc_date(naive) == CREATED.date()
    assert is_editable(naive, CREATED + timedelta(hours=1))
