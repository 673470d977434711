"""
Confidence Scorer for the Market Forecasting Engine.

Score starts at 100 and is reduced for:
- Poor fit (up to 40 points for r_squared = 0)
- Volatility (coefficient of variation > 10% / > 20%)
- Short history (< 12 / < 6 months)
"""

from typing import Sequence

from .models import ConfidenceLevel, ConfidenceResult, MonthlyStat, TrendResult
from .trend import average_prices, mean, sample_stddev


# =============================================================================
# Configuration Constants
# =============================================================================

MAX_FIT_PENALTY = 40

HIGH_VOLATILITY = 0.20
MODERATE_VOLATILITY = 0.10

SHORT_HISTORY_MONTHS = 6
PARTIAL_HISTORY_MONTHS = 12

HIGH_CONFIDENCE_SCORE = 80
MEDIUM_CONFIDENCE_SCORE = 60

CONFIDENCE_DESCRIPTIONS = {
    ConfidenceLevel.HIGH: "Strong data consistency supports reliable forecast",
    ConfidenceLevel.MEDIUM: "Moderate data consistency, forecast reasonably reliable",
    ConfidenceLevel.LOW: "Limited data or high volatility reduces forecast reliability",
}


def coefficient_of_variation(history: Sequence[MonthlyStat]) -> float:
    """
    Volatility of the monthly average price series.

    A non-positive mean is treated as maximal volatility (1.0).
    """
    prices = average_prices(history)
    avg = mean(prices)
    if avg <= 0:
        return 1.0
    return sample_stddev(prices) / avg


def confidence_level(score: float) -> ConfidenceLevel:
    """Bucket a confidence score."""
    if score >= HIGH_CONFIDENCE_SCORE:
        return ConfidenceLevel.HIGH
    if score >= MEDIUM_CONFIDENCE_SCORE:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def calculate_confidence(
    history: Sequence[MonthlyStat],
    trend: TrendResult,
) -> ConfidenceResult:
    """
    Calculate forecast confidence.

    Args:
        history: Ascending monthly statistics
        trend: Trend fitted on the same series

    Returns:
        ConfidenceResult with score clamped to [0, 100]
    """
    n = len(history)
    volatility = coefficient_of_variation(history)

    score = 100.0
    score -= (1 - trend.r_squared) * MAX_FIT_PENALTY

    if volatility > HIGH_VOLATILITY:
        score -= 20
    elif volatility > MODERATE_VOLATILITY:
        score -= 10

    if n < SHORT_HISTORY_MONTHS:
        score -= 20
    elif n < PARTIAL_HISTORY_MONTHS:
        score -= 10

    score = max(0.0, min(100.0, score))
    level = confidence_level(score)

    return ConfidenceResult(
        score=score,
        level=level,
        r_squared=trend.r_squared,
        volatility=volatility,
        data_points=n,
        description=CONFIDENCE_DESCRIPTIONS[level],
    )
