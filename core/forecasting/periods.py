"""
Calendar month helpers.

Month labels use the YYYY-MM form throughout the engine.
"""

import calendar
from datetime import date


def month_label(value: date) -> str:
    """YYYY-MM label for the calendar month containing a date."""
    return f"{value.year:04d}-{value.month:02d}"


def parse_month_label(label: str) -> tuple[int, int]:
    """Split a YYYY-MM label into (year, month)."""
    year_str, month_str = label.split("-", 1)
    year, month = int(year_str), int(month_str)
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month label: {label!r}")
    return year, month


def shift_month_label(label: str, months: int) -> str:
    """Advance (or rewind, for negative values) a month label."""
    year, month = parse_month_label(label)
    index = year * 12 + (month - 1) + months
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def subtract_months(value: date, months: int) -> date:
    """
    Same day-of-month, `months` calendar months earlier.

    The day is clamped to the length of the target month
    (e.g. 31 March minus 1 month is 28/29 February).
    """
    index = value.year * 12 + (value.month - 1) - months
    year, month = index // 12, index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(value.day, last_day))
