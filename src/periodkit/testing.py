"""Helpers for tests that build periods.

The failure capability is injected rather than looked up globally: pass any
callable that marks the current test as failed and does not return.
``pytest.fail`` is used when none is given.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
from typing import Any

from periodkit.exceptions import ValidationError
from periodkit.floating import DaysInput, FloatingPeriod
from periodkit.time_utils import LocationInput

FailFunc = Callable[[str], Any]


def _pytest_fail() -> FailFunc:
    try:
        import pytest
    except ImportError:
        msg = "pytest is required when no fail function is given. Install with: pip install periodkit[test]"
        raise ImportError(msg) from None
    return pytest.fail


def new_floating_period_for_test(
    start: timedelta,
    end: timedelta,
    days: DaysInput,
    location: LocationInput = None,
    *,
    fail: FailFunc | None = None,
) -> FloatingPeriod:
    """Construct a FloatingPeriod, failing the calling test if it is invalid.

    Args:
        start: Offset from midnight at which the window opens.
        end: Offset from midnight at which the window closes.
        days: Applicable days.
        location: Timezone (default UTC).
        fail: Called with the error message when construction fails.
            Defaults to ``pytest.fail``.

    Returns:
        The constructed period.

    Raises:
        ValidationError: If ``fail`` returns instead of aborting the test.
    """
    __tracebackhide__ = True
    try:
        return FloatingPeriod(start, end, days, location)
    except ValidationError as e:
        reporter = fail if fail is not None else _pytest_fail()
        reporter(f"could not construct FloatingPeriod: {e}")
        raise
