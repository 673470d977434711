"""
Appreciation Calculator for the Market Forecasting Engine.

Trailing simple percentage changes over 3, 6 and 12 month windows,
plus an average monthly rate over the whole series.
"""

from typing import Sequence

from .models import AppreciationResult, MonthlyStat


def percent_change(current: float, base: float) -> float:
    """Simple percentage change from base to current, 0 when base <= 0."""
    if base <= 0:
        return 0.0
    return ((current - base) / base) * 100


def _trailing_change(history: Sequence[MonthlyStat], months: int) -> float:
    """Change vs. the month `months` positions before the current one."""
    n = len(history)
    if n < months + 1:
        return 0.0
    current = float(history[n - 1].avg_price)
    base = float(history[n - 1 - months].avg_price)
    return percent_change(current, base)


def calculate_appreciation(history: Sequence[MonthlyStat]) -> AppreciationResult:
    """
    Calculate appreciation metrics.

    With fewer than 13 months the 12-month figure is extrapolated from
    the oldest month, scaling its change by 12 / months elapsed.

    Args:
        history: Ascending monthly statistics

    Returns:
        AppreciationResult (all zero with fewer than 2 months)
    """
    n = len(history)

    if n < 2:
        return AppreciationResult()

    current_price = float(history[-1].avg_price)
    oldest_price = float(history[0].avg_price)
    months_elapsed = n - 1
    total_change = percent_change(current_price, oldest_price)

    if n >= 13:
        twelve_month = _trailing_change(history, 12)
    else:
        twelve_month = total_change * (12 / months_elapsed)

    return AppreciationResult(
        three_month=_trailing_change(history, 3),
        six_month=_trailing_change(history, 6),
        twelve_month=twelve_month,
        average_monthly=total_change / months_elapsed,
    )
