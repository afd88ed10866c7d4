"""Branch naming for sync branches."""

from __future__ import annotations

from datetime import datetime, timezone

BRANCH_PREFIX = "update-schema"


def timestamp_branch_name(now: datetime, prefix: str = BRANCH_PREFIX) -> str:
    """
    Derive a sync branch name from a point in time.

    The name has minute resolution, so repeated runs within the same minute
    share a branch while runs in different minutes get fresh ones. Naive
    datetimes are taken to be UTC.

    Example:
        >>> timestamp_branch_name(datetime(2024, 3, 7, 9, 5, tzinfo=timezone.utc))
        'update-schema-03-07_09-05'
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)
    return f"{prefix}-{now:%m-%d_%H-%M}"
