"""Applicable days of the week.

Provides :class:`ApplicableDays`, the weekday filter shared by floating
periods and the configuration parsers.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, fields
from datetime import date, tzinfo

from periodkit.exceptions import ValidationError
from periodkit.time_utils import InstantInput, to_location
from periodkit.types import DAYS_IN_WEEK, Weekday, WeekdayInput, parse_weekday


@dataclass(frozen=True, slots=True)
class ApplicableDays:
    """The days of the week on which something is valid.

    Field order matches :class:`~periodkit.types.Weekday`, Monday first.
    """

    monday: bool = False
    tuesday: bool = False
    wednesday: bool = False
    thursday: bool = False
    friday: bool = False
    saturday: bool = False
    sunday: bool = False

    @classmethod
    def of(cls, *days: WeekdayInput) -> ApplicableDays:
        """Build from weekday inputs, e.g. ``ApplicableDays.of("mon", "wed")``."""
        selected = {parse_weekday(d) for d in days}
        return cls(*(wd in selected for wd in Weekday))

    @classmethod
    def from_range(cls, start_day: WeekdayInput, end_day: WeekdayInput) -> ApplicableDays:
        """Build from an inclusive range of days (Monday=0, Sunday=6).

        The range wraps around the end of the week, so ``from_range(5, 1)``
        covers Saturday through Tuesday.
        """
        start = parse_weekday(start_day, "start_day")
        end = parse_weekday(end_day, "end_day")
        span = (end - start) % DAYS_IN_WEEK
        return cls(*((wd - start) % DAYS_IN_WEEK <= span for wd in Weekday))

    @classmethod
    def every_day(cls) -> ApplicableDays:
        """All seven days."""
        return cls(*([True] * DAYS_IN_WEEK))

    @property
    def weekdays(self) -> frozenset[Weekday]:
        """The applicable days as a set."""
        return frozenset(self)

    def any_applicable(self) -> bool:
        """Return True if at least one day is applicable."""
        return any(getattr(self, f.name) for f in fields(self))

    def weekday_applicable(self, day: WeekdayInput) -> bool:
        """Return True if the given day of the week is applicable."""
        return bool(getattr(self, fields(self)[parse_weekday(day)].name))

    def date_applicable(self, d: date) -> bool:
        """Return True if the calendar date falls on an applicable day."""
        return self.weekday_applicable(Weekday(d.weekday()))

    def time_applicable(self, t: InstantInput, location: tzinfo) -> bool:
        """Return True if the instant falls on an applicable day in ``location``."""
        return self.date_applicable(to_location(t, location).date())

    def __iter__(self) -> Iterator[Weekday]:
        for wd, f in zip(Weekday, fields(self)):
            if getattr(self, f.name):
                yield wd

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __contains__(self, day: object) -> bool:
        if not isinstance(day, (int, str)):
            return False
        try:
            return self.weekday_applicable(day)
        except ValidationError:
            return False

    def __str__(self) -> str:
        return ", ".join(wd.short_name for wd in self) or "(none)"
