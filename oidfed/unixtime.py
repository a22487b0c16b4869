"""Helpers for UNIX timestamps and second-based durations as used in JWT claims."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

__all__ = [
    "TimeValidationError",
    "now",
    "from_json",
    "to_json",
    "until",
    "verify_time",
    "duration_from_json",
    "duration_to_json",
]


class TimeValidationError(ValueError):
    """Raised when an issued-at or expiration time is not valid right now."""


def _aware(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _check_number(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {type(value).__name__}")
    return float(value)


def now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def from_json(value: int | float) -> datetime:
    """Convert a (possibly fractional) number of seconds since the epoch to a datetime."""
    return datetime.fromtimestamp(_check_number(value), tz=timezone.utc)


def to_json(moment: datetime | None) -> int | float:
    """Convert a datetime to seconds since the epoch; an unset time becomes 0."""
    if moment is None:
        return 0
    return _aware(moment).timestamp()


def until(moment: datetime | None) -> timedelta:
    """Return the time left until ``moment``; an unset time lies in the far past."""
    if moment is None:
        return timedelta.min
    return _aware(moment) - now()


def verify_time(iat: datetime | None, exp: datetime | None) -> None:
    """Check that ``iat`` is not in the future and ``exp`` is not in the past.

    Unset times are not checked.
    """
    current = now()
    if iat is not None and _aware(iat) > current:
        raise TimeValidationError("not yet valid")
    if exp is not None and _aware(exp) < current:
        raise TimeValidationError("expired")


def duration_from_json(value: int | float) -> timedelta:
    """Convert a number of seconds to a duration, dropping any fractional part."""
    return timedelta(seconds=int(_check_number(value)))


def duration_to_json(duration: timedelta) -> float:
    """Convert a duration to a number of seconds."""
    return duration.total_seconds()