from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_email(value: str) -> str:
    value = require_non_empty(value, "Email").lower()
    local, _, domain = value.partition("@")
    if not local or "." not in domain:
        raise ValidationError("Email is not valid")
    return value


def require_non_negative(value: int, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if number < 0:
        raise ValidationError(f"{field_name} must be zero or greater")
    return number


def require_date_order(start: Optional[date], end: Optional[date], *, strict: bool = False) -> None:
    if start is None or end is None:
        return
    if strict and start >= end:
        raise ValidationError("End date must be after start date")
    if not strict and start > end:
        raise ValidationError("End date must not be before start date")


def clean_note(note: Optional[str]) -> Optional[str]:
    return note.strip() if note and note.strip() else None


def require_max_span(start: date, end: date, max_days: int) -> None:
    if (end - start).days > max_days:
        raise ValidationError(f"Date range must not exceed {max_days} days")
