from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (expected YYYY-MM-DD): {value!r}")


def parse_optional_date(value: Optional[str], default: date) -> date:
    if not value:
        return default
    return parse_iso_date(value)


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now().date()


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def normalize_mysql_date(value) -> Optional[date]:
    """Normalize DATE values across connector implementations."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_iso_date(value[:10])
    raise TypeError(f"Unsupported MySQL DATE value type: {type(value)!r}")


def parse_month(value: Optional[str]) -> tuple[int, int]:
    """Parse a YYYY-MM string into (year, month)."""
    try:
        year_s, month_s = str(value).split("-")
        year, month = int(year_s), int(month_s)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid month (expected YYYY-MM): {value!r}")
    if not 1 <= month <= 12 or not 1 <= year <= 9999:
        raise ValidationError(f"Invalid month (expected YYYY-MM): {value!r}")
    return year, month


def format_month(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"
