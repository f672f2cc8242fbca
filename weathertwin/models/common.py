"""Common helpers shared across models."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def format_timestamp(dt: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def utc_now_iso() -> str:
    return format_timestamp(utc_now())


def format_coordinate(value: float | str) -> str:
    """Render a coordinate the way it appears in query strings and cache keys."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
