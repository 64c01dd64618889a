"""Pandas integration for recurring periods.

Provides to_frame() and to_series() to turn recurring periods into pandas
objects for plotting and analysis.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from periodkit.recurring import occurrences
from periodkit.time_utils import UTC, InstantInput, to_location

if TYPE_CHECKING:
    from periodkit.recurring import RecurringPeriod


def _import_pandas(func_name: str) -> Any:
    try:
        import pandas
    except ImportError:
        msg = f"pandas is required for {func_name}(). Install with: pip install periodkit[dataframes]"
        raise ImportError(msg) from None
    return pandas


def to_frame(
    period: RecurringPeriod,
    start: InstantInput,
    end: InstantInput,
) -> Any:  # pd.DataFrame, typed as Any for optional dependency
    """List the concrete windows of a recurring period as a DataFrame.

    Args:
        period: A floating or continuous period.
        start: Start of the range of interest.
        end: End of the range of interest (exclusive).

    Returns:
        DataFrame with ``start``, ``end`` and ``duration`` columns, one row
        per window overlapping ``[start, end)``, in time order.

    Raises:
        ImportError: If pandas is not installed.
    """
    pd = _import_pandas("to_frame")

    rows = [{"start": w.start, "end": w.end, "duration": w.duration} for w in occurrences(period, start, end)]
    return pd.DataFrame(rows, columns=["start", "end", "duration"])


def to_series(
    period: RecurringPeriod,
    start: InstantInput,
    end: InstantInput,
    freq: str = "h",
    name: str | None = None,
) -> Any:  # pd.Series, typed as Any for optional dependency
    """Sample whether a recurring period is active over a date range.

    Args:
        period: A floating or continuous period.
        start: First sample instant.
        end: End of the range (exclusive).
        freq: Pandas frequency string ("h" for hourly, "15min", etc.).
        name: Series name (defaults to ``str(period)``).

    Returns:
        Boolean pandas Series indexed by a timezone-aware DatetimeIndex in the
        period's location.

    Raises:
        ImportError: If pandas is not installed.
    """
    pd = _import_pandas("to_series")

    location = getattr(period, "location", UTC)
    index = pd.date_range(
        start=to_location(start, location),
        end=to_location(end, location),
        freq=freq,
        inclusive="left",
    )
    values = [period.contains_time(ts.to_pydatetime()) for ts in index]
    return pd.Series(values, index=index, name=name or str(period), dtype=bool)
