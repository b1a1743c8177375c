"""Timestamp helpers.

Records carry timestamps as ISO-8601 strings in UTC so that they compare and
serialize the same way regardless of the backing store.
"""

from datetime import datetime, timedelta, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def now_iso() -> str:
    return utcnow().isoformat()


def iso_after(delta: timedelta, start: datetime | None = None) -> str:
    return ((start or utcnow()) + delta).isoformat()


def parse_iso(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, treating naive values as UTC.

    Raises:
        ValueError: If the string is not a valid ISO-8601 timestamp
    """
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
