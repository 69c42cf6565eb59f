"""Canonical ID and timestamp factories for statements.

ID Rule
-------
Statement IDs are UUID v4 strings from ``uuid.uuid4`` (backed by
``os.urandom``), in canonical lower-case 8-4-4-4-12 layout.

Timestamp Rule
--------------
All timestamps are ``datetime`` with ``tzinfo=timezone.utc``, never naive.
On the wire they are ISO-8601 with microsecond precision and a ``Z``
suffix, e.g. ``2024-06-10T12:00:00.123456Z``. Nothing is truncated, so a
stamp is never earlier than the instant it was taken.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone


def generate_id() -> str:
    """Generate a new UUID v4 string for a statement ID."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def iso_timestamp(when: datetime | None = None) -> str:
    """Format *when* (default: now) as an ISO-8601 UTC instant.

    Naive datetimes are assumed to already be in UTC.
    """
    when = when or utc_now()
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    when = when.astimezone(timezone.utc)
    return when.isoformat(timespec="microseconds").replace("+00:00", "Z")
