# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities for Eden Academy.

Timestamps in the curation stores are written by several producers, some
with an explicit offset and some without. These helpers keep comparisons
between them safe.

Design Decisions:
-----------------
1. New timestamps are always created in UTC
2. Naive timestamps read from storage are assumed to be UTC
3. Wall-clock fields (hour of day) are never shifted between zones

Usage:
------
    from eden_academy.utils.datetime import utc_now

    now = utc_now()
"""

from datetime import datetime, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Timezone-aware datetime representing current UTC time.

    Example:
        >>> now = utc_now()
        >>> now.tzinfo
        datetime.timezone.utc
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure a datetime is timezone-aware UTC.

    Args:
        dt: A datetime object (naive or aware) or None.

    Returns:
        Timezone-aware UTC datetime or None.

    Note:
        - If dt is None, returns None
        - If dt is naive, assumes UTC and adds tzinfo
        - If dt is aware, converts to UTC
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume UTC
        return dt.replace(tzinfo=timezone.utc)

    # Already aware - convert to UTC
    return dt.astimezone(timezone.utc)


def assume_utc(dt: datetime | None) -> datetime | None:
    """Attach UTC to a naive datetime, leaving aware values untouched.

    Unlike ensure_utc, an aware value keeps its own offset, so its
    wall-clock hour is what the producer recorded.

    Args:
        dt: A datetime object (naive or aware) or None.

    Returns:
        Timezone-aware datetime or None.
    """
    if dt is not None and dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt
