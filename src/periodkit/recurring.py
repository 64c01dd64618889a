"""The recurring-period protocol and occurrence expansion."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from periodkit.time_utils import InstantInput, as_utc

if TYPE_CHECKING:
    from periodkit.period import Period


@runtime_checkable
class RecurringPeriod(Protocol):
    """A period that recurs and can be resolved to concrete periods.

    Implemented by :class:`~periodkit.floating.FloatingPeriod` and
    :class:`~periodkit.continuous.ContinuousPeriod`.
    """

    def at_date(self, d: InstantInput) -> Period: ...

    def from_time(self, t: InstantInput) -> Period | None: ...

    def contains(self, period: Period) -> bool: ...

    def contains_time(self, t: InstantInput) -> bool: ...

    def day_applicable(self, t: InstantInput) -> bool: ...

    def intersects(self, period: Period) -> bool: ...


def occurrences(
    period: RecurringPeriod,
    start: InstantInput,
    end: InstantInput | None = None,
) -> Iterator[Period]:
    """Yield consecutive concrete windows of a recurring period.

    The first window is ``period.at_date(start)``, i.e. the window containing
    ``start`` or else the next one. Iteration stops before the first window
    starting at or after ``end``; with no ``end`` it never stops.

    Args:
        period: The recurring period to expand.
        start: Instant to begin at.
        end: Exclusive upper bound for window starts.

    Yields:
        Concrete :class:`~periodkit.period.Period` windows in time order.
    """
    limit = None if end is None else as_utc(end)
    window = period.at_date(start)
    while limit is None or as_utc(window.start) < limit:  # type: ignore[arg-type]
        yield window
        # A window never contains its own end, so this always moves forward.
        window = period.at_date(window.end)  # type: ignore[arg-type]
