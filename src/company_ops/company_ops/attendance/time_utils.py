"""Parsing and formatting of punch-in/out times.

Stored times are free-form text in either 24-hour ("14:30", "14:30:00") or
12-hour ("2:30 PM") form. Normalisation happens here, at read time. None of
these helpers raise.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from ..core.constants import MINUTES_PER_DAY

logger = logging.getLogger(__name__)

_TWELVE_HOUR = re.compile(r"^(\d{1,2}):(\d{2})\s*(AM|PM)$", re.IGNORECASE)
_TWENTY_FOUR_HOUR = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


def parse_time_to_minutes(text: Optional[str]) -> Optional[int]:
    """Minutes since midnight, or None when ``text`` is not a valid time.

    12:00 AM is 0 and 12:00 PM is 720.
    """
    if not text or not isinstance(text, str):
        return None
    trimmed = text.strip()
    if not trimmed:
        return None

    match = _TWELVE_HOUR.match(trimmed)
    if match:
        hours, minutes = int(match.group(1)), int(match.group(2))
        if not 1 <= hours <= 12 or minutes > 59:
            logger.debug("Out of range 12-hour time %r", text)
            return None
        hours %= 12
        if match.group(3).upper() == "PM":
            hours += 12
        return hours * 60 + minutes

    match = _TWENTY_FOUR_HOUR.match(trimmed)
    if match:
        hours, minutes = int(match.group(1)), int(match.group(2))
        seconds = int(match.group(3) or 0)
        if hours > 23 or minutes > 59 or seconds > 59:
            logger.debug("Out of range 24-hour time %r", text)
            return None
        return hours * 60 + minutes

    logger.debug("Unparsable time %r", text)
    return None


def format_minutes(minutes: int) -> str:
    """Minutes since midnight as zero-padded ``HH:MM``."""
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_time_for_display(text: Optional[str]) -> Optional[str]:
    """Normalise to ``HH:MM``; unparsable values are returned unchanged."""
    minutes = parse_time_to_minutes(text)
    if minutes is None:
        return text
    return format_minutes(minutes)


def elapsed_minutes(check_in: Optional[str], check_out: Optional[str]) -> Optional[int]:
    """Minutes between two punches; a check-out earlier in the day means the next day."""
    start = parse_time_to_minutes(check_in)
    end = parse_time_to_minutes(check_out)
    if start is None or end is None:
        return None
    diff = end - start
    if diff < 0:
        diff += MINUTES_PER_DAY
    return diff


def calculate_total_hours(check_in: Optional[str], check_out: Optional[str]) -> str:
    """Worked time as ``H:MM`` (hours unpadded); ``0:00`` when either punch is missing or bad."""
    diff = elapsed_minutes(check_in, check_out)
    if diff is None:
        return "0:00"
    return f"{diff // 60}:{diff % 60:02d}"


def duration_to_decimal_hours(duration: Optional[str]) -> float:
    """``"8:30"`` -> ``8.5``. Garbage yields 0."""
    parts = (duration or "").strip().split(":")
    try:
        hours = int(parts[0])
    except ValueError:
        return 0.0
    try:
        minutes = int(parts[1]) if len(parts) > 1 else 0
    except ValueError:
        minutes = 0
    return hours + minutes / 60
