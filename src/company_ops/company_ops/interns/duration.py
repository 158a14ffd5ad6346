"""Internship durations and lifecycle status.

Every function accepts ``date``, ``datetime`` or ISO-8601 strings. Durations
count calendar days when no datetime is involved. Status checks compare
moments, so a date-only value means the start of that day. None of these
functions raise; bad input degrades to a harmless default.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, time
from typing import Optional, Union

from ..core.enums import InternshipStatus

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime, str]

SECONDS_PER_DAY = 24 * 60 * 60


def _coerce(value: DateLike) -> Union[date, datetime]:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        return _coerce(datetime.fromisoformat(text.replace("Z", "+00:00")))
    raise TypeError(f"Unsupported date value: {value!r}")


def _as_datetime(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def _resolve(start: DateLike, end: Optional[DateLike], now: Optional[datetime]):
    """Coerce ``start``/``end`` plus the reference moment to one comparable type."""
    now = now or datetime.now()
    start_v = _coerce(start)
    end_v = _coerce(end) if end else None

    values = [v for v in (start_v, end_v) if v is not None]
    if not any(isinstance(v, datetime) for v in values):
        return start_v, end_v, now.date()
    return _as_datetime(start_v), _as_datetime(end_v) if end_v else None, now


def _resolve_moments(start: DateLike, end: Optional[DateLike], now: Optional[datetime]):
    now = now or datetime.now()
    start_v = _as_datetime(_coerce(start))
    end_v = _as_datetime(_coerce(end)) if end else None
    return start_v, end_v, now


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count > 1 else ''}"


def format_duration_from_days(days: int) -> str:
    if days < 0:
        return "Not started"
    if days == 0:
        return "Started today"
    if days < 7:
        return _plural(days, "day")

    if days < 30:
        weeks, remaining_days = divmod(days, 7)
        result = _plural(weeks, "week")
        if remaining_days > 0:
            result += f", {_plural(remaining_days, 'day')}"
        return result

    if days < 365:
        months, remaining_days = divmod(days, 30)
        result = _plural(months, "month")
        if remaining_days >= 7:
            result += f", {_plural(remaining_days // 7, 'week')}"
        return result

    years = days // 365
    remaining_months = (days % 365) // 30
    result = _plural(years, "year")
    if remaining_months > 0:
        result += f", {_plural(remaining_months, 'month')}"
    return result


def _elapsed_days(start: DateLike, end: Optional[DateLike], now: Optional[datetime]) -> int:
    start_v, end_v, now_v = _resolve(start, end, now)
    end_v = end_v if end_v is not None else now_v
    if isinstance(start_v, datetime):
        return math.ceil((end_v - start_v).total_seconds() / SECONDS_PER_DAY)
    return (end_v - start_v).days


def calculate_duration_in_days(
    start_date: DateLike,
    end_date: Optional[DateLike] = None,
    *,
    now: Optional[datetime] = None,
) -> int:
    """Whole days from start to end (default: now); partial days round up."""
    try:
        return _elapsed_days(start_date, end_date, now)
    except (TypeError, ValueError):
        logger.warning("Invalid internship dates start=%r end=%r", start_date, end_date)
        return 0


def calculate_internship_duration(
    start_date: DateLike,
    end_date: Optional[DateLike] = None,
    *,
    now: Optional[datetime] = None,
) -> str:
    try:
        days = _elapsed_days(start_date, end_date, now)
    except (TypeError, ValueError):
        logger.warning("Invalid internship dates start=%r end=%r", start_date, end_date)
        return "Invalid dates"
    return format_duration_from_days(days)


def is_internship_active(
    start_date: DateLike,
    end_date: Optional[DateLike] = None,
    *,
    now: Optional[datetime] = None,
) -> bool:
    try:
        start_v, end_v, now_v = _resolve_moments(start_date, end_date, now)
    except (TypeError, ValueError):
        logger.warning("Invalid internship dates start=%r end=%r", start_date, end_date)
        return False
    if now_v < start_v:
        return False
    if end_v is not None and now_v > end_v:
        return False
    return True


def get_internship_status(
    start_date: DateLike,
    end_date: Optional[DateLike] = None,
    current_status: Optional[Union[InternshipStatus, str]] = None,
    *,
    now: Optional[datetime] = None,
) -> InternshipStatus:
    """Derive the lifecycle status; Terminated is never overwritten."""
    if current_status == InternshipStatus.TERMINATED:
        return InternshipStatus.TERMINATED

    try:
        start_v, end_v, now_v = _resolve_moments(start_date, end_date, now)
    except (TypeError, ValueError):
        logger.warning("Invalid internship dates start=%r end=%r, defaulting to Active", start_date, end_date)
        return InternshipStatus.ACTIVE

    if now_v < start_v:
        return InternshipStatus.UPCOMING
    if end_v is not None and now_v > end_v:
        return InternshipStatus.COMPLETED
    return InternshipStatus.ACTIVE
