"""Continuous periods.

A continuous period is a weekly window that may span several days, such as
Friday 17:00 to Monday 08:00.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, timedelta, tzinfo

from periodkit.period import Period
from periodkit.recurring import occurrences
from periodkit.time_utils import (
    InstantInput,
    LocationInput,
    as_utc,
    format_offset,
    local_midnight,
    resolve_location,
    shift,
    to_location,
    validate_offset,
)
from periodkit.types import DAYS_IN_WEEK, Weekday, WeekdayInput, parse_weekday

_ONE_WEEK = timedelta(days=DAYS_IN_WEEK)


@dataclass(frozen=True, slots=True, init=False)
class ContinuousPeriod:
    """A block of time in a given location, bounded by a week.

    The window opens ``start`` after midnight on ``start_day`` and closes
    ``end`` after midnight on ``end_day``. When both days are the same and
    ``start >= end`` the window closes on that weekday of the following week.

    Attributes:
        start: Offset from midnight on the start day at which the window opens.
        end: Offset from midnight on the end day at which the window closes.
        start_day: Day of the week on which the window opens.
        end_day: Day of the week on which the window closes.
        location: Timezone in which offsets and weekdays are reckoned.
    """

    start: timedelta
    end: timedelta
    start_day: Weekday
    end_day: Weekday
    location: tzinfo

    def __init__(
        self,
        start: timedelta,
        end: timedelta,
        start_day: WeekdayInput,
        end_day: WeekdayInput,
        location: LocationInput = None,
    ) -> None:
        object.__setattr__(self, "start", validate_offset(start, "start"))
        object.__setattr__(self, "end", validate_offset(end, "end"))
        object.__setattr__(self, "start_day", parse_weekday(start_day, "start_day"))
        object.__setattr__(self, "end_day", parse_weekday(end_day, "end_day"))
        object.__setattr__(self, "location", resolve_location(location))

    def __str__(self) -> str:
        return (
            f"{self.start_day.short_name} {format_offset(self.start)}-"
            f"{self.end_day.short_name} {format_offset(self.end)} ({self.location})"
        )

    def _span_days(self) -> int:
        """Number of midnights between the opening and the closing of a window."""
        days = (self.end_day - self.start_day) % DAYS_IN_WEEK
        if days == 0 and self.start >= self.end:
            return DAYS_IN_WEEK
        return days

    def full_week(self) -> bool:
        """Return True if each window closes a week after the day it opens."""
        return self.start_day == self.end_day and self.start >= self.end

    def _window(self, opening_day: date) -> Period:
        """Return the concrete window opening on the civil day ``opening_day``."""
        closing_day = opening_day + timedelta(days=self._span_days())
        return Period(
            shift(local_midnight(opening_day, self.location), self.start),
            shift(local_midnight(closing_day, self.location), self.end),
        )

    def at_date(self, d: InstantInput) -> Period:
        """Return the window around the given instant.

        If the instant is contained in a window, that window is returned.
        Otherwise the next window after the instant is returned. Containment
        is inclusive on the window start and exclusive on its end.
        """
        local = to_location(d, self.location)
        instant = as_utc(local)

        # Most recent start day on or before the instant's civil day
        opening_day = local.date() - timedelta(days=(local.weekday() - self.start_day) % DAYS_IN_WEEK)
        window = self._window(opening_day)
        if as_utc(window.start) > instant:  # type: ignore[arg-type]
            opening_day -= _ONE_WEEK
            window = self._window(opening_day)
        if not window.contains_time(instant):
            window = self._window(opening_day + _ONE_WEEK)
        return window

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
        """Return True if the instant falls inside a window of this period."""
        return self.at_date(t).contains_time(t)

    def contains(self, period: Period) -> bool:
        """Return True if ``period`` lies entirely within a single window."""
        if period.start is None:
            return False
        return self.at_date(period.start).contains(period)

    def intersects(self, period: Period) -> bool:
        """Return True if ``period`` overlaps any occurrence of this period."""
        if period.start is None:
            return True
        return self.at_date(period.start).intersects(period)

    def day_applicable(self, t: InstantInput) -> bool:
        """Return True if the instant falls on a day covered by the period."""
        if self.full_week():
            return True
        weekday = to_location(t, self.location).weekday()
        return (weekday - self.start_day) % DAYS_IN_WEEK <= (self.end_day - self.start_day) % DAYS_IN_WEEK

    def occurrences(self, start: InstantInput, end: InstantInput | None = None) -> Iterator[Period]:
        """Yield concrete windows from the one around ``start`` up to ``end``."""
        return occurrences(self, start, end)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Period):
            return self.contains(item)
        return self.contains_time(item)  # type: ignore[arg-type]
