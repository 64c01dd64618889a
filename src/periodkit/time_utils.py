"""Shared time utilities for period evaluation.

Aware-datetime arithmetic in Python is wall-clock arithmetic when both
operands share a ``tzinfo``. Period windows are defined in elapsed time, so
every shift and difference here goes through UTC.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from periodkit.exceptions import ValidationError

#: Location used when none is given.
UTC = timezone.utc

#: One calendar day.
ONE_DAY = timedelta(days=1)

#: Length of a civil day without DST transitions; offsets must be below it.
DAY_LENGTH = timedelta(hours=24)

#: Anything :func:`to_instant` understands.
InstantInput = Union[datetime, int, float]

#: Anything :func:`resolve_location` understands.
LocationInput = Union[tzinfo, str, None]

#: Sentinels used for unbounded period edges.
MIN_INSTANT = datetime.min.replace(tzinfo=UTC)
MAX_INSTANT = datetime.max.replace(tzinfo=UTC)


def resolve_location(location: LocationInput) -> tzinfo:
    """Resolve a location to a ``tzinfo``.

    Args:
        location: A ``tzinfo`` instance, an IANA key such as
            ``"America/Chicago"``, or ``None`` for UTC.

    Returns:
        The resolved timezone.

    Raises:
        ValidationError: If the key cannot be resolved or the value is not a
            timezone.
    """
    if location is None:
        return UTC
    if isinstance(location, tzinfo):
        return location
    if isinstance(location, str):
        key = location.strip()
        if key.upper() == "UTC":
            return UTC
        try:
            return ZoneInfo(key)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValidationError("location", f"unknown timezone ({e})", location) from e
    raise ValidationError("location", "expected a tzinfo or an IANA timezone name", location)


def to_instant(value: InstantInput) -> datetime:
    """Coerce a value to an aware datetime.

    Naive datetimes are taken as UTC. Numbers are POSIX timestamps, so ``0``
    is the Unix epoch and is treated as an ordinary instant.

    Raises:
        TypeError: If the value is neither a datetime nor a number.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            return value.replace(tzinfo=UTC)
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=UTC)
    msg = f"Expected a datetime or POSIX timestamp, got {type(value).__name__}"
    raise TypeError(msg)


def as_utc(value: InstantInput) -> datetime:
    """Return the instant expressed in UTC."""
    return to_instant(value).astimezone(UTC)


def to_location(value: InstantInput, location: tzinfo) -> datetime:
    """Return the instant expressed in ``location``."""
    return to_instant(value).astimezone(location)


def local_midnight(d: date, location: tzinfo) -> datetime:
    """Return the start of the civil day ``d`` in ``location``.

    Where midnight falls in a DST gap the result is normalised to the first
    existing instant of that day.
    """
    naive = datetime(d.year, d.month, d.day, tzinfo=location)
    return naive.astimezone(UTC).astimezone(location)


def shift(dt: datetime, delta: timedelta) -> datetime:
    """Move an aware datetime by an elapsed duration, keeping its timezone."""
    return (dt.astimezone(UTC) + delta).astimezone(dt.tzinfo)


def elapsed(later: InstantInput, earlier: InstantInput) -> timedelta:
    """Return the real time between two instants."""
    return as_utc(later) - as_utc(earlier)


def time_since_midnight(value: InstantInput, location: tzinfo) -> timedelta:
    """Return how long after local midnight an instant falls in ``location``."""
    local = to_location(value, location)
    return elapsed(local, local_midnight(local.date(), location))


def validate_offset(value: object, field: str) -> timedelta:
    """Check that an offset is a ``timedelta`` within a single civil day.

    Raises:
        ValidationError: If the offset is negative, 24 hours or longer, or not
            a ``timedelta``.
    """
    if not isinstance(value, timedelta):
        raise ValidationError(field, "offset must be a timedelta", value)
    if value < timedelta(0) or value >= DAY_LENGTH:
        raise ValidationError(field, "offset must be within [00:00, 24:00)", value)
    return value


def format_offset(value: timedelta) -> str:
    """Format an offset as ``HH:MM`` (``HH:MM:SS`` when seconds are set)."""
    total = int(value.total_seconds())
    hours, rem = divmod(total, 3600)
    minutes, seconds = divmod(rem, 60)
    if seconds:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{hours:02d}:{minutes:02d}"
