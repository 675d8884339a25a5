"""Utility functions for working with dates and times."""

from datetime import datetime, timezone
from typing import Union

__all__ = [
    "get_current_timestamp",
    "parse_timestamp",
    "as_utc",
]

def get_current_timestamp() -> datetime:
    """Return the current UTC datetime with micro-second precision."""
    return datetime.now(tz=timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Return *value* as an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """Parse an ISO-8601 string (``Z`` suffix allowed) into an aware UTC datetime.

    Raises ``ValueError`` if *value* is not a valid ISO-8601 timestamp.
    """
    if isinstance(value, datetime):
        return as_utc(value)
    text = str(value).strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return as_utc(datetime.fromisoformat(text))
