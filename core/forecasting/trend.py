"""
Trend Estimator for the Market Forecasting Engine.

Fits an ordinary least squares line to the monthly average price series.
The x-axis is the sequence position of each included month, not the
calendar month: gaps left by dropped months are not re-indexed.
"""

import math
from typing import List, Sequence

from .models import MonthlyStat, TrendDirection, TrendResult


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0 for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def sample_stddev(values: Sequence[float]) -> float:
    """Sample standard deviation (n-1 denominator), 0 when n < 2."""
    n = len(values)
    if n < 2:
        return 0.0

    avg = sum(values) / n
    sum_squares = sum((v - avg) ** 2 for v in values)
    return math.sqrt(sum_squares / (n - 1))


def average_prices(history: Sequence[MonthlyStat]) -> List[float]:
    """The avg_price column of a monthly series."""
    return [float(stat.avg_price) for stat in history]


def calculate_linear_trend(history: Sequence[MonthlyStat]) -> TrendResult:
    """
    Fit a least squares trend line to monthly average prices.

    slope = sum((x - x_mean) * (y - y_mean)) / sum((x - x_mean)^2)
    intercept = y_mean - slope * x_mean
    r_squared = 1 - SS_res/SS_tot, clamped to [0, 1]

    Args:
        history: Ascending monthly statistics

    Returns:
        TrendResult (all zero and flat when fewer than 2 months;
        zero slope and flat for a constant series)
    """
    n = len(history)

    if n < 2:
        return TrendResult(
            slope=0.0,
            intercept=0.0,
            r_squared=0.0,
            annual_change_pct=0.0,
            direction=TrendDirection.FLAT,
        )

    prices = average_prices(history)
    avg_price = mean(prices)

    if max(prices) == min(prices):
        return TrendResult(
            slope=0.0,
            intercept=avg_price,
            r_squared=0.0,
            annual_change_pct=0.0,
            direction=TrendDirection.FLAT,
        )

    # Centered sums; raw sums leave rounding residue in the slope
    x_mean = (n - 1) / 2
    sum_xy = 0.0
    sum_x2 = 0.0
    for x, y in enumerate(prices):
        sum_xy += (x - x_mean) * (y - avg_price)
        sum_x2 += (x - x_mean) ** 2

    slope = sum_xy / sum_x2
    intercept = avg_price - slope * x_mean

    ss_tot = sum((y - avg_price) ** 2 for y in prices)
    ss_res = sum(
        (y - (slope * x + intercept)) ** 2
        for x, y in enumerate(prices)
    )
    r_squared = 1 - (ss_res / ss_tot) if ss_tot > 0 else 0.0

    annual_change_pct = (slope * 12 / avg_price) * 100 if avg_price > 0 else 0.0

    return TrendResult(
        slope=slope,
        intercept=intercept,
        # Floating noise can push a perfect fit slightly past 1
        r_squared=max(0.0, min(1.0, r_squared)),
        annual_change_pct=annual_change_pct,
        direction=TrendDirection.from_slope(slope),
    )
