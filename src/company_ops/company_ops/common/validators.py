from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_date_order(start: date, end: Optional[date], *, strict: bool = False) -> None:
    if end is None:
        return
    if end < start or (strict and end == start):
        raise ValidationError("End date must be after start date")


def optional_text(value: Optional[str]) -> Optional[str]:
    text = (value or "").strip()
    return text or None
