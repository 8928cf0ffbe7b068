from __future__ import annotations

"""
Calendar helpers shared by the aggregation and comparison services.

Scope
- Month labels ("January, 2025") and parsing of the many label formats the
  backend summary cache has used over time
- Inclusive month ranges and the history screen's date-range presets
- Pure functions; no I/O
"""

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import NamedTuple, Optional

from unitfin.config import FIRST_YEAR

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

_NUMERIC_KEY = re.compile(r"(\d{4})[-/](\d{1,2})")
_NAME_THEN_YEAR = re.compile(r"([A-Za-z]+),?\s+(\d{4})")
_YEAR_THEN_NAME = re.compile(r"(\d{4})\s+([A-Za-z]+)")
_BARE_YEAR = re.compile(r"(\d{4})")


class DateRange(NamedTuple):
    """Inclusive timestamp range used when fetching records."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        moment = as_utc(moment)
        return as_utc(self.start) <= moment <= as_utc(self.end)


def as_utc(moment: datetime) -> datetime:
    """Treat naive timestamps as UTC so they compare with aware ones."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def parse_timestamp(value) -> Optional[datetime]:
    """Coerce a record date into a datetime, or None when it cannot be read."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _clamp_month(month: int) -> int:
    return min(max(month, 1), 12)


def _month_index(name: str) -> Optional[int]:
    lowered = name.lower()
    for idx, month_name in enumerate(MONTH_NAMES):
        if month_name.lower() == lowered:
            return idx + 1
    return None


def label_for_month(year: int, month: int) -> str:
    """Human label for a month, e.g. ``label_for_month(2025, 2) == "February, 2025"``."""
    return f"{MONTH_NAMES[_clamp_month(month) - 1]}, {year}"


def parse_month_key(key: str) -> Optional[tuple[int, int]]:
    """Parse a summary-cache label into ``(year, month)``.

    Accepted formats, tried in order:
    - ``YYYY-MM`` or ``YYYY/M`` (month clamped to 1..12)
    - ``Month, YYYY`` / ``Month YYYY``
    - ``YYYY Month``
    - a bare year, which maps to January

    Returns:
        Tuple of (year, month), or None when no year can be found
    """
    if not key:
        return None

    m = _NUMERIC_KEY.search(key)
    if m:
        return int(m.group(1)), _clamp_month(int(m.group(2)))

    m = _NAME_THEN_YEAR.search(key)
    if m:
        idx = _month_index(m.group(1))
        if idx is not None:
            return int(m.group(2)), idx

    m = _YEAR_THEN_NAME.search(key)
    if m:
        idx = _month_index(m.group(2))
        if idx is not None:
            return int(m.group(1)), idx

    m = _BARE_YEAR.search(key)
    if m:
        return int(m.group(1)), 1
    return None


def previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def month_range(year: int, month: int) -> DateRange:
    """First instant to last microsecond of a calendar month, in UTC."""
    start = datetime(year, month, 1, tzinfo=timezone.utc)
    if month == 12:
        following = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    else:
        following = datetime(year, month + 1, 1, tzinfo=timezone.utc)
    return DateRange(start, following - timedelta(microseconds=1))


def year_range(year: int) -> DateRange:
    return DateRange(month_range(year, 1).start, month_range(year, 12).end)


def history_range(preset: str, now: datetime) -> Optional[DateRange]:
    """Translate a history filter preset into a date range.

    Args:
        preset: "7" or "30" (trailing days), "year" (calendar year of now) or "all"
        now: Reference timestamp

    Returns:
        DateRange, or None for "all"

    Raises:
        ValueError: If the preset is unknown
    """
    if preset == "all":
        return None
    if preset in ("7", "30"):
        return DateRange(now - timedelta(days=int(preset)), now)
    if preset == "year":
        return year_range(now.year)
    raise ValueError(f"Unknown range preset: {preset!r}")


def _ordinal_suffix(day: int) -> str:
    if day % 10 == 1 and day % 100 != 11:
        return "st"
    if day % 10 == 2 and day % 100 != 12:
        return "nd"
    if day % 10 == 3 and day % 100 != 13:
        return "rd"
    return "th"


def format_date_long(moment) -> str:
    """Render a record date as "1st January, 2025"; empty for unreadable dates."""
    parsed = parse_timestamp(moment)
    if parsed is None:
        return ""
    return f"{parsed.day}{_ordinal_suffix(parsed.day)} {MONTH_NAMES[parsed.month - 1]}, {parsed.year}"


def available_years(today: date, first_year: int = FIRST_YEAR) -> list[int]:
    """Years selectable in the summary view, most recent first."""
    return list(range(today.year, first_year - 1, -1))


__all__ = [
    "MONTH_NAMES",
    "DateRange",
    "as_utc",
    "available_years",
    "format_date_long",
    "history_range",
    "label_for_month",
    "month_range",
    "parse_month_key",
    "parse_timestamp",
    "previous_month",
    "year_range",
]
