"""
Forecaster for the Market Forecasting Engine.

Projects the fitted trend line forward to the canonical horizons and
attaches a symmetric band of two standard deviations, widened by
sqrt(1 + 1/n) for extrapolation. The band is an informal 95%-style
range, not a formal prediction interval; report numbers depend on it.
"""

import math
from typing import List, Sequence

from .models import ForecastPoint, MonthlyStat, TrendResult
from .periods import shift_month_label
from .trend import average_prices, sample_stddev


# Forecast horizons (months ahead) evaluated when within the requested range
FORECAST_HORIZONS = (3, 6, 12)


def confidence_range(history: Sequence[MonthlyStat]) -> float:
    """Half-width of the forecast band for a monthly series."""
    n = len(history)
    if n == 0:
        return 0.0
    stddev = sample_stddev(average_prices(history))
    return 2 * stddev * math.sqrt(1 + (1 / n))


def generate_forecast(
    history: Sequence[MonthlyStat],
    trend: TrendResult,
    months_ahead: int,
) -> List[ForecastPoint]:
    """
    Generate forecast points.

    Args:
        history: Ascending monthly statistics (at least one month)
        trend: Trend fitted on the same series
        months_ahead: Requested forecast horizon in months

    Returns:
        One ForecastPoint per canonical horizon <= months_ahead
    """
    if not history:
        return []

    last_index = len(history) - 1
    current_price = float(history[last_index].avg_price)
    current_month = history[last_index].month
    band = confidence_range(history)

    forecast = []
    for horizon in FORECAST_HORIZONS:
        if horizon > months_ahead:
            continue

        predicted_price = trend.predict(last_index + horizon)
        change = predicted_price - current_price
        change_pct = (change / current_price) * 100 if current_price > 0 else 0.0

        forecast.append(ForecastPoint(
            months_ahead=horizon,
            forecast_date=shift_month_label(current_month, horizon),
            predicted_price=predicted_price,
            low_estimate=predicted_price - band,
            high_estimate=predicted_price + band,
            change_from_current=change,
            change_pct=change_pct,
        ))

    return forecast
