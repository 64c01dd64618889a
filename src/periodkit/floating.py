"""Floating periods.

A floating period is a daily window such as 22:00-02:00 on Mondays in
America/Chicago. It is bound to days of the week and a location but not to
any particular date, and resolves to concrete :class:`Period` windows on
demand.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date, timedelta, tzinfo
from typing import Union

from periodkit.days import ApplicableDays
from periodkit.exceptions import ValidationError
from periodkit.period import Period
from periodkit.recurring import occurrences
from periodkit.time_utils import (
    ONE_DAY,
    InstantInput,
    LocationInput,
    as_utc,
    format_offset,
    local_midnight,
    resolve_location,
    shift,
    time_since_midnight,
    to_location,
    validate_offset,
)
from periodkit.types import DAYS_IN_WEEK, WeekdayInput

DaysInput = Union[ApplicableDays, Iterable[WeekdayInput]]


def _coerce_days(days: DaysInput) -> ApplicableDays:
    if isinstance(days, ApplicableDays):
        return days
    if isinstance(days, (str, bytes)) or not isinstance(days, Iterable):
        raise ValidationError("days", "expected ApplicableDays or an iterable of weekdays", days)
    return ApplicableDays.of(*days)


@dataclass(frozen=True, slots=True, init=False)
class FloatingPeriod:
    """A recurring daily window on a set of applicable days.

    ``start`` and ``end`` are elapsed durations since local midnight in
    ``location``. Three shapes are possible:

    * ``start < end``: the window ``[start, end)`` on each applicable day.
    * ``start > end``: the window wraps past midnight and ends on the
      following day. It belongs to the day on which it starts, so the early
      morning part is covered only when the previous day is applicable.
    * ``start == end``: the whole civil day of each applicable day.

    Construction validates every input and raises
    :class:`~periodkit.exceptions.ValidationError` naming the bad one. The
    value is immutable afterwards and safe to share between threads.

    Attributes:
        start: Offset from midnight at which the window opens.
        end: Offset from midnight at which the window closes.
        days: Days of the week on which the window opens.
        location: Timezone in which offsets and weekdays are reckoned.

    Examples:
        >>> from datetime import datetime, timedelta, timezone
        >>> night = FloatingPeriod(timedelta(hours=22), timedelta(hours=2), ["mon"])
        >>> night.contains_time(datetime(2019, 1, 8, 1, 0, tzinfo=timezone.utc))  # Tuesday
        True
    """

    start: timedelta
    end: timedelta
    days: ApplicableDays
    location: tzinfo

    def __init__(
        self,
        start: timedelta,
        end: timedelta,
        days: DaysInput,
        location: LocationInput = None,
    ) -> None:
        applicable = _coerce_days(days)
        if not applicable.any_applicable():
            raise ValidationError("days", "floating period must have at least 1 applicable day")
        object.__setattr__(self, "start", validate_offset(start, "start"))
        object.__setattr__(self, "end", validate_offset(end, "end"))
        object.__setattr__(self, "days", applicable)
        object.__setattr__(self, "location", resolve_location(location))

    def __str__(self) -> str:
        return f"{format_offset(self.start)}-{format_offset(self.end)} {self.days} ({self.location})"

    def contiguous(self) -> bool:
        """Return True if start equals end. Applicable days are not considered."""
        return self.start == self.end

    def _wraps(self) -> bool:
        return self.start > self.end

    def _window(self, day: date) -> Period:
        """Return the concrete window opening on the civil day ``day``."""
        midnight = local_midnight(day, self.location)
        next_midnight = local_midnight(day + ONE_DAY, self.location)
        if self.contiguous():
            return Period(midnight, next_midnight)
        if self._wraps():
            return Period(shift(midnight, self.start), shift(next_midnight, self.end))
        return Period(shift(midnight, self.start), shift(midnight, self.end))

    def _next_applicable_day(self, day: date) -> date:
        """Return the first applicable day strictly after ``day``."""
        weekday = day.weekday()
        days_ahead = min((wd - weekday - 1) % DAYS_IN_WEEK + 1 for wd in self.days)
        return day + timedelta(days=days_ahead)

    def at_date(self, d: InstantInput) -> Period:
        """Return the window around the given instant.

        If the instant is contained in a window, that window is returned.
        Otherwise the next window after the instant is returned. Containment
        is inclusive on the window start and exclusive on its end.
        """
        local = to_location(d, self.location)
        day = local.date()
        since_midnight = time_since_midnight(local, self.location)

        if self.contiguous():
            scan_forward = not self.days.date_applicable(day)
        elif self._wraps():
            # Before the end offset we are still in the window that opened
            # on the previous day, if that day is applicable.
            if since_midnight < self.end:
                day -= ONE_DAY
            scan_forward = not self.days.date_applicable(day)
        else:
            scan_forward = not self.days.date_applicable(day) or since_midnight >= self.end

        if scan_forward:
            day = self._next_applicable_day(day)
        return self._window(day)

    def match(self, t: InstantInput) -> Period | None:
        """Return the concrete window containing ``t``, or None."""
        window = self.at_date(t)
        return window if window.contains_time(t) else None

    def from_time(self, t: InstantInput) -> Period | None:
        """Return the period from ``t`` to the end of its window, or None if ``t`` is not contained."""
        window = self.match(t)
        if window is None:
            return None
        return Period(t, window.end)

    def contains_time(self, t: InstantInput) -> bool:
        """Return True if the instant falls inside any window of this period."""
        return self.at_date(t).contains_time(t)

    def contains(self, period: Period) -> bool:
        """Return True if ``period`` lies entirely within a single window."""
        if period.start is None:
            return False
        return self.at_date(period.start).contains(period)

    def intersects(self, period: Period) -> bool:
        """Return True if ``period`` overlaps any window of this period.

        The window returned by :meth:`at_date` for the period start is the
        earliest window ending after it, so it is the only candidate.
        """
        if period.start is None:
            return True
        return self.at_date(period.start).intersects(period)

    def contains_start(self, period: Period) -> bool:
        """Return True if the start of ``period`` is contained."""
        if period.start is None:
            return False
        return self.contains_time(period.start)

    def contains_end(self, period: Period) -> bool:
        """Return True if ``period`` ends within the window around its start.

        The end is treated as the exclusive edge of ``period``, so a period
        ending exactly when the window closes counts as contained.
        """
        if period.start is None or period.end is None:
            return False
        window = self.at_date(period.start)
        end = as_utc(period.end)
        return as_utc(window.start) < end <= as_utc(window.end)  # type: ignore[arg-type]

    def day_applicable(self, t: InstantInput) -> bool:
        """Return True if the instant falls on an applicable day in this period's location."""
        return self.days.time_applicable(t, self.location)

    def occurrences(self, start: InstantInput, end: InstantInput | None = None) -> Iterator[Period]:
        """Yield concrete windows from the one around ``start`` up to ``end``."""
        return occurrences(self, start, end)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Period):
            return self.contains(item)
        return self.contains_time(item)  # type: ignore[arg-type]
