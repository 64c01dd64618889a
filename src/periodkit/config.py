"""Building periods from plain data.

Lets recurring periods be declared in mappings or JSON files instead of
code::

    {
        "location": "America/Chicago",
        "periods": {
            "overnight": {"start": "22:00", "end": "02:00", "days": "mon-fri"},
            "weekend": {
                "type": "continuous",
                "start_day": "fri", "start": "17:00",
                "end_day": "mon", "end": "08:00"
            }
        }
    }
"""

from __future__ import annotations

import json
import re
import warnings
from collections.abc import Iterable, Mapping
from datetime import timedelta
from pathlib import Path
from typing import Any, Union

from periodkit.continuous import ContinuousPeriod
from periodkit.days import ApplicableDays
from periodkit.exceptions import ValidationError
from periodkit.floating import FloatingPeriod
from periodkit.time_utils import LocationInput, validate_offset
from periodkit.types import Weekday, parse_weekday

RecurringPeriodType = Union[FloatingPeriod, ContinuousPeriod]

_OFFSET_PATTERN = re.compile(r"^(\d{1,2})(?::(\d{2}))?(?::(\d{2}))?$")

_DAY_GROUPS = {
    "all": ApplicableDays.every_day(),
    "daily": ApplicableDays.every_day(),
    "everyday": ApplicableDays.every_day(),
    "weekdays": ApplicableDays.from_range(Weekday.MONDAY, Weekday.FRIDAY),
    "weekends": ApplicableDays.from_range(Weekday.SATURDAY, Weekday.SUNDAY),
}

_FLOATING_FIELDS = frozenset(["type", "start", "end", "days", "location"])
_CONTINUOUS_FIELDS = frozenset(["type", "start", "end", "start_day", "end_day", "location"])


def parse_offset(value: str | timedelta, field: str = "offset") -> timedelta:
    """Parse a time-of-day offset.

    Formats: "HH:MM:SS", "HH:MM", "H:MM", or just "HH" (hour only).
    Special case: "24:00" means the following midnight and maps to an offset
    of zero, so ``"15:00"`` to ``"24:00"`` wraps exactly to midnight.

    Args:
        value: Offset string or a ``timedelta`` (validated and passed through).
        field: Field name reported in validation errors.

    Returns:
        The offset since midnight.

    Raises:
        ValidationError: If the value cannot be parsed or is out of range.
    """
    if isinstance(value, timedelta):
        return validate_offset(value, field)
    if not isinstance(value, str):
        raise ValidationError(field, "expected an offset string such as '09:30'", value)

    match = _OFFSET_PATTERN.match(value.strip())
    if not match:
        raise ValidationError(field, "cannot parse offset", value)
    hours = int(match[1])
    minutes = int(match[2] or 0)
    seconds = int(match[3] or 0)
    if minutes >= 60 or seconds >= 60:
        raise ValidationError(field, "cannot parse offset", value)

    # Handle "24:00" as midnight
    if hours == 24 and minutes == 0 and seconds == 0:
        return timedelta(0)
    return validate_offset(timedelta(hours=hours, minutes=minutes, seconds=seconds), field)


def _parse_day_token(token: str) -> ApplicableDays:
    """Parse a single day token: a group name, a range, or a weekday."""
    key = token.strip().lower()
    if key in _DAY_GROUPS:
        return _DAY_GROUPS[key]
    if "-" in key:
        first, _, last = key.partition("-")
        return ApplicableDays.from_range(parse_weekday(first, "days"), parse_weekday(last, "days"))
    return ApplicableDays.of(parse_weekday(key, "days"))


def _union(days: Iterable[ApplicableDays]) -> ApplicableDays:
    selected: set[Weekday] = set()
    for d in days:
        selected.update(d)
    return ApplicableDays.of(*selected)


def parse_days(value: Any) -> ApplicableDays:
    """Parse applicable days.

    Supported formats:
    - "all", "daily", "weekdays", "weekends" - named groups
    - "mon-fri" or "fri-mon" - inclusive ranges, wrapping past Sunday
    - "mon, wed, fri" - comma separated names or ranges
    - ["monday", 2, "fri"] - lists of weekday names or indexes (Monday=0)
    - {"monday": true, "tuesday": false} - mapping of day name to flag

    Raises:
        ValidationError: If any part does not name a day of the week.
    """
    if isinstance(value, ApplicableDays):
        return value
    if isinstance(value, str):
        return _union(_parse_day_token(token) for token in value.split(",") if token.strip())
    if isinstance(value, Mapping):
        return ApplicableDays.of(*(parse_weekday(day, "days") for day, flag in value.items() if flag))
    if isinstance(value, Iterable):
        return _union(
            _parse_day_token(item) if isinstance(item, str) else ApplicableDays.of(parse_weekday(item, "days"))
            for item in value
        )
    raise ValidationError("days", "expected a day name, range, list or mapping", value)


def _require(data: Mapping[str, Any], field: str) -> Any:
    if field not in data or data[field] is None:
        raise ValidationError(field, "is required")
    return data[field]


def period_from_dict(data: Mapping[str, Any], location: LocationInput = None) -> RecurringPeriodType:
    """Build a recurring period from a mapping.

    Args:
        data: Period definition. ``type`` is ``"floating"`` (default) or
            ``"continuous"``. Floating periods need ``start``, ``end`` and
            ``days``; continuous periods need ``start``, ``end``,
            ``start_day`` and ``end_day``. ``location`` is optional.
        location: Location used when ``data`` does not name one.

    Returns:
        A :class:`FloatingPeriod` or :class:`ContinuousPeriod`.

    Raises:
        ValidationError: If a required field is missing or invalid.
    """
    kind = str(data.get("type", "floating")).strip().lower()
    if kind not in ("floating", "continuous"):
        raise ValidationError("type", "expected 'floating' or 'continuous'", data.get("type"))

    known = _FLOATING_FIELDS if kind == "floating" else _CONTINUOUS_FIELDS
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        warnings.warn(
            f"Ignoring unknown field(s) in {kind} period definition: {', '.join(unknown)}",
            stacklevel=2,
        )

    start = parse_offset(_require(data, "start"), "start")
    end = parse_offset(_require(data, "end"), "end")
    loc = data.get("location") or location

    if kind == "continuous":
        return ContinuousPeriod(start, end, _require(data, "start_day"), _require(data, "end_day"), loc)
    return FloatingPeriod(start, end, parse_days(_require(data, "days")), loc)


def load_periods(path: Path | str) -> dict[str, RecurringPeriodType]:
    """Load named recurring periods from a JSON file.

    The file holds an object with an optional default ``location`` and a
    ``periods`` object mapping names to definitions accepted by
    :func:`period_from_dict`.

    Args:
        path: Path to the JSON file.

    Returns:
        Mapping of period name to period, in file order.

    Raises:
        ValidationError: If the document or any period in it is invalid.
            The message names the offending period.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValidationError("periods", f"{path.name} is not valid JSON ({e.msg} at line {e.lineno})") from e

    if not isinstance(document, Mapping) or not isinstance(document.get("periods"), Mapping):
        raise ValidationError("periods", f"{path.name} must contain a 'periods' object")

    default_location = document.get("location")
    periods: dict[str, RecurringPeriodType] = {}
    for name, entry in document["periods"].items():
        if not isinstance(entry, Mapping):
            raise ValidationError(f"periods.{name}", "expected an object", entry)
        try:
            periods[name] = period_from_dict(entry, default_location)
        except ValidationError as e:
            raise ValidationError(f"periods.{name}.{e.field}", e.reason, e.value) from e
    return periods
