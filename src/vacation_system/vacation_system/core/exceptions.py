from __future__ import annotations

from typing import Iterable

from .enums import RejectionReason


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class MalformedDateError(ValidationError):
    """Raised when a date value cannot be parsed."""

    def __init__(self, value: object, field_name: str = "date"):
        self.value = value
        self.field_name = field_name
        super().__init__(f"Invalid {field_name}: {value!r}")


class NotFoundError(DomainError):
    """Raised when a referenced leave or cycle does not exist."""


class LeaveRejectedError(DomainError):
    """Raised when a leave commit would overlap another leave or overdraw the cycle.

    ``reasons`` lists every failed check so callers can report each one.
    """

    def __init__(self, reasons: Iterable[RejectionReason]):
        self.reasons = tuple(reasons)
        super().__init__("Leave rejected: " + ", ".join(r.value for r in self.reasons))


class StoreError(Exception):
    """Raised when the schedule store holds data the engine cannot use."""


class StoreUnavailableError(StoreError):
    """Raised when the schedule store cannot be reached. Safe to retry."""
