"""Concrete periods of time.

A :class:`Period` is a span between two absolute instants. Either edge may be
``None``, meaning the period is unbounded on that side. All comparisons are
made on absolute time, so periods expressed in different timezones compare
as expected.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from periodkit.time_utils import MAX_INSTANT, MIN_INSTANT, InstantInput, as_utc, to_instant


def max_time(first: datetime, *others: datetime) -> datetime:
    """Return the latest of the given instants, or the first one if tied."""
    result = first
    for t in others:
        if as_utc(t) > as_utc(result):
            result = t
    return result


def min_time(first: datetime, *others: datetime) -> datetime:
    """Return the earliest of the given instants, or the first one if tied."""
    result = first
    for t in others:
        if as_utc(t) < as_utc(result):
            result = t
    return result


def _lower(t: datetime | None) -> datetime:
    return MIN_INSTANT if t is None else as_utc(t)


def _upper(t: datetime | None) -> datetime:
    return MAX_INSTANT if t is None else as_utc(t)


@dataclass(frozen=True, slots=True, eq=False, init=False)
class Period:
    """A block of time bounded by a start and an end.

    Containment of instants is inclusive on ``start`` and exclusive on
    ``end``. Naive datetimes are taken as UTC and numbers as POSIX
    timestamps.

    Attributes:
        start: First instant of the period, or ``None`` if unbounded.
        end: Instant at which the period ends, or ``None`` if unbounded.
    """

    start: datetime | None
    end: datetime | None

    def __init__(self, start: InstantInput | None, end: InstantInput | None) -> None:
        object.__setattr__(self, "start", None if start is None else to_instant(start))
        object.__setattr__(self, "end", None if end is None else to_instant(end))

    @property
    def duration(self) -> timedelta | None:
        """Length of the period, or ``None`` when either edge is unbounded."""
        if self.start is None or self.end is None:
            return None
        return as_utc(self.end) - as_utc(self.start)

    def intersects(self, other: Period) -> bool:
        """Return True if the two periods overlap.

        Periods that only touch (one ends where the other starts) do not
        intersect.
        """
        latest_start = max(_lower(self.start), _lower(other.start))
        earliest_end = min(_upper(self.end), _upper(other.end))
        return latest_start < earliest_end

    def contains(self, other: Period) -> bool:
        """Return True if ``other`` lies entirely within this period.

        Unlike :meth:`contains_time`, both edges are inclusive here, so a
        period contains itself.
        """
        return _lower(self.start) <= _lower(other.start) and _upper(other.end) <= _upper(self.end)

    def contains_any(self, other: Period) -> bool:
        """Return True if the start or the end of ``other`` falls within this period."""
        lo, hi = _lower(self.start), _upper(self.end)
        starts_inside = other.start is not None and lo <= as_utc(other.start) < hi
        ends_inside = other.end is not None and lo < as_utc(other.end) < hi
        return starts_inside or ends_inside

    def contains_time(self, t: InstantInput) -> bool:
        """Return True if ``start <= t < end``."""
        instant = as_utc(t)
        return _lower(self.start) <= instant < _upper(self.end)

    def less(self, d: timedelta) -> bool:
        """Return True if the period is shorter than ``d``.

        Unbounded periods are never shorter than anything.
        """
        duration = self.duration
        return duration is not None and duration < d

    def equals(self, other: Period) -> bool:
        """Return True if both periods cover the same span of absolute time."""
        return _lower(self.start) == _lower(other.start) and _upper(self.end) == _upper(other.end)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Period):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((_lower(self.start), _upper(self.end)))

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Period):
            return self.contains(item)
        return self.contains_time(item)  # type: ignore[arg-type]
