"""Custom exceptions for periodkit."""

from __future__ import annotations

from typing import Any


class PeriodkitError(Exception):
    """Base exception for all periodkit errors."""

    pass


class ValidationError(PeriodkitError, ValueError):
    """Raised when a period cannot be constructed from the given inputs.

    Attributes:
        field: Name of the input that failed validation (e.g. ``"days"``).
        value: The offending value.
        reason: Human-readable explanation of what is wrong with it.
    """

    def __init__(self, field: str, reason: str, value: Any = None) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        msg = f"Invalid {field}: {reason}"
        if value is not None:
            msg += f" (got {value!r})"
        super().__init__(msg)


class DuplicateKeyError(PeriodkitError):
    """Raised when inserting a period under a key that is already stored."""

    def __init__(self, key: object) -> None:
        self.key = key
        super().__init__(f"Period with key {key!r} already exists")


class KeyNotFoundError(PeriodkitError):
    """Raised when a collection operation names a key that is not stored."""

    def __init__(self, key: object, action: str) -> None:
        self.key = key
        self.action = action
        super().__init__(f"Could not {action} period with key {key!r}: key does not exist")
