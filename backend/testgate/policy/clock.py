from __future__ import annotations

from datetime import UTC, datetime
from typing import Any


def utcnow() -> datetime:
    return datetime.now(UTC)


def coerce_utc(value: Any) -> datetime | None:
    """
    Read a timestamp as an aware UTC datetime.

    Naive datetimes are taken to be UTC (SQLite hands them back without tzinfo).
    ISO-8601 strings are parsed. Anything else, including unparseable strings and
    bare dates, returns None so callers can fail closed.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
        return coerce_utc(parsed)
    return None
