from __future__ import annotations

from datetime import date

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_date_order(start: date, end: date) -> None:
    if end < start:
        raise ValidationError("End date must be on or after start date")


def require_positive(value: int, field_name: str) -> int:
    if int(value) <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return int(value)
