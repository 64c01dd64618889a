"""Shared fixtures for periodkit tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
from zoneinfo import ZoneInfo

import pytest

from periodkit import FloatingPeriod, Period, PeriodCollection
from periodkit.floating import DaysInput
from periodkit.testing import new_floating_period_for_test
from periodkit.time_utils import LocationInput


@pytest.fixture
def chicago() -> ZoneInfo:
    """America/Chicago, UTC-6 in winter and UTC-5 in summer."""
    return ZoneInfo("America/Chicago")


@pytest.fixture
def make_floating() -> Callable[..., FloatingPeriod]:
    """Build a FloatingPeriod from whole hours, failing the test if invalid."""

    def _make(
        start_hours: float,
        end_hours: float,
        days: DaysInput,
        location: LocationInput = None,
    ) -> FloatingPeriod:
        return new_floating_period_for_test(
            timedelta(hours=start_hours),
            timedelta(hours=end_hours),
            days,
            location,
        )

    return _make


@pytest.fixture
def collection() -> PeriodCollection:
    """Create a collection holding five periods measured in POSIX seconds.

    Layout (key: [start, end)):
        a: [0, 10)   b: [5, 15)   c: [20, 30)   d: [25, 100)   e: [40, None)
    """
    pc = PeriodCollection()
    pc.insert(Period(0, 10), "a", "A")
    pc.insert(Period(5, 15), "b", "B")
    pc.insert(Period(20, 30), "c", "C")
    pc.insert(Period(25, 100), "d", "D")
    pc.insert(Period(40, None), "e", "E")
    return pc
