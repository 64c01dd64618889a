"""Shared types and calendar constants.

Weekdays follow Python's own numbering (Monday=0, Sunday=6) so that
``Weekday(dt.weekday())`` is always valid.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Union

from periodkit.exceptions import ValidationError

#: Number of hours in a civil day.
HOURS_IN_DAY = 24

#: Number of days in a week.
DAYS_IN_WEEK = 7


class Weekday(IntEnum):
    """Day of the week, Monday first."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def short_name(self) -> str:
        """Three-letter English abbreviation (``"Mon"``)."""
        return self.name[:3].title()


#: Anything :func:`parse_weekday` understands.
WeekdayInput = Union[Weekday, int, str]

# Weekday name to enum (Monday=0)
_WEEKDAY_NAMES = {
    "monday": Weekday.MONDAY,
    "tuesday": Weekday.TUESDAY,
    "wednesday": Weekday.WEDNESDAY,
    "thursday": Weekday.THURSDAY,
    "friday": Weekday.FRIDAY,
    "saturday": Weekday.SATURDAY,
    "sunday": Weekday.SUNDAY,
    "mon": Weekday.MONDAY,
    "tue": Weekday.TUESDAY,
    "tues": Weekday.TUESDAY,
    "wed": Weekday.WEDNESDAY,
    "thu": Weekday.THURSDAY,
    "thur": Weekday.THURSDAY,
    "thurs": Weekday.THURSDAY,
    "fri": Weekday.FRIDAY,
    "sat": Weekday.SATURDAY,
    "sun": Weekday.SUNDAY,
}


def parse_weekday(value: WeekdayInput, field: str = "day") -> Weekday:
    """Parse a weekday from an enum, an index, or a name.

    Args:
        value: A :class:`Weekday`, an int from 0 (Monday) to 6 (Sunday), or
            a case-insensitive English name such as ``"Tuesday"`` or ``"tue"``.
        field: Field name reported in the validation error.

    Returns:
        The matching :class:`Weekday`.

    Raises:
        ValidationError: If the value does not name a day of the week.
    """
    if isinstance(value, Weekday):
        return value
    if isinstance(value, bool):
        raise ValidationError(field, "unknown day of week", value)
    if isinstance(value, int):
        if 0 <= value < DAYS_IN_WEEK:
            return Weekday(value)
        raise ValidationError(field, "unknown day of week", value)
    if isinstance(value, str):
        key = value.strip().lower()
        if key in _WEEKDAY_NAMES:
            return _WEEKDAY_NAMES[key]
        if key.isdigit():
            return parse_weekday(int(key), field)
    raise ValidationError(field, "unknown day of week", value)
