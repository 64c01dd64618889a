"""
periodkit: recurring time windows and period collections.

This package answers questions such as "is this instant inside the window
22:00-02:00 on Mondays in America/Chicago?" and "which stored bookings
overlap this interval?".

Basic usage:
    from datetime import datetime, timedelta, timezone
    from periodkit import FloatingPeriod

    overnight = FloatingPeriod(timedelta(hours=22), timedelta(hours=2), ["mon"], "America/Chicago")
    overnight.contains_time(datetime(2019, 1, 8, 7, 0, tzinfo=timezone.utc))  # Tue 01:00 CST -> True

    # Concrete window around an instant
    window = overnight.at_date(datetime(2019, 1, 8, 7, 0, tzinfo=timezone.utc))
"""

from __future__ import annotations

__version__ = "0.1.0"

# Core classes
from .collection import CollectionItem, PeriodCollection
from .config import load_periods, parse_days, parse_offset, period_from_dict
from .continuous import ContinuousPeriod
from .days import ApplicableDays

# Exceptions
from .exceptions import (
    DuplicateKeyError,
    KeyNotFoundError,
    PeriodkitError,
    ValidationError,
)
from .floating import FloatingPeriod
from .period import Period, max_time, min_time
from .recurring import RecurringPeriod, occurrences
from .types import DAYS_IN_WEEK, HOURS_IN_DAY, Weekday, parse_weekday

__all__ = [
    "DAYS_IN_WEEK",
    "HOURS_IN_DAY",
    "ApplicableDays",
    "CollectionItem",
    "ContinuousPeriod",
    "DuplicateKeyError",
    "FloatingPeriod",
    "KeyNotFoundError",
    "Period",
    "PeriodCollection",
    "PeriodkitError",
    "RecurringPeriod",
    "ValidationError",
    "Weekday",
    "__version__",
    "load_periods",
    "max_time",
    "min_time",
    "occurrences",
    "parse_days",
    "parse_offset",
    "parse_weekday",
    "period_from_dict",
]
