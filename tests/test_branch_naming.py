"""
Tests for sync branch naming.
"""

from datetime import datetime, timedelta, timezone

from schemasync.core.reconcile.naming import BRANCH_PREFIX, timestamp_branch_name


def test_format():
    now = datetime(2024, 3, 7, 9, 5, 42, tzinfo=timezone.utc)

    assert timestamp_branch_name(now) == "update-schema-03-07_09-05"


def test_minute_resolution():
    a = datetime(2024, 12, 31, 23, 59, 0, tzinfo=timezone.utc)
    b = a.replace(second=59)

    assert timestamp_branch_name(a) == timestamp_branch_name(b)
    assert timestamp_branch_name(a) != timestamp_branch_name(a + timedelta(minutes=1))


def test_converts_to_utc():
    offset = timezone(timedelta(hours=2))
    now = datetime(2024, 3, 7, 11, 5, tzinfo=offset)

    assert timestamp_branch_name(now) == "update-schema-03-07_09-05"


def test_naive_is_utc():
    assert timestamp_branch_name(datetime(2024, 1, 2, 3, 4)) == "update-schema-01-02_03-04"


def test_custom_prefix():
    now = datetime(2024, 3, 7, 9, 5, tzinfo=timezone.utc)

    assert timestamp_branch_name(now, prefix="sync") == "sync-03-07_09-05"
    assert BRANCH_PREFIX == "update-schema"
