"""
Momentum Analyzer for the Market Forecasting Engine.

Compares the annualized trend of the last 3 months against the trend of
the last (up to) 12 months to classify acceleration or deceleration.
"""

from typing import Sequence

from .models import MomentumResult, MomentumStatus, MonthlyStat, TrendDirection
from .trend import calculate_linear_trend


# =============================================================================
# Configuration Constants
# =============================================================================

MIN_MOMENTUM_MONTHS = 6
RECENT_WINDOW_MONTHS = 3
LONGER_WINDOW_MONTHS = 12

# Classification thresholds (annualized percentage points)
STABLE_THRESHOLD = 2
STRONG_THRESHOLD = 5

MOMENTUM_DESCRIPTIONS = {
    MomentumStatus.INSUFFICIENT_DATA: "Not enough data to determine momentum",
    MomentumStatus.STABLE: "Market showing steady, consistent trends",
    MomentumStatus.ACCELERATING: "Prices accelerating upward",
    MomentumStatus.STRENGTHENING: "Price growth strengthening",
    MomentumStatus.DECLINING: "Prices declining more rapidly",
    MomentumStatus.WEAKENING: "Price growth weakening",
}


def classify_momentum(momentum_diff: float) -> MomentumStatus:
    """
    Classify a momentum difference. First match wins:

    |diff| < 2: Stable
    diff > 5: Accelerating
    diff > 2: Strengthening
    diff < -5: Declining
    otherwise: Weakening
    """
    if abs(momentum_diff) < STABLE_THRESHOLD:
        return MomentumStatus.STABLE
    if momentum_diff > STRONG_THRESHOLD:
        return MomentumStatus.ACCELERATING
    if momentum_diff > STABLE_THRESHOLD:
        return MomentumStatus.STRENGTHENING
    if momentum_diff < -STRONG_THRESHOLD:
        return MomentumStatus.DECLINING
    return MomentumStatus.WEAKENING


def calculate_momentum(history: Sequence[MonthlyStat]) -> MomentumResult:
    """
    Calculate the price momentum indicator.

    Args:
        history: Ascending monthly statistics

    Returns:
        MomentumResult (insufficient_data with fewer than 6 months)
    """
    n = len(history)

    if n < MIN_MOMENTUM_MONTHS:
        return MomentumResult(
            status=MomentumStatus.INSUFFICIENT_DATA,
            direction=TrendDirection.UNKNOWN,
            strength=0.0,
            description=MOMENTUM_DESCRIPTIONS[MomentumStatus.INSUFFICIENT_DATA],
        )

    recent_trend = calculate_linear_trend(history[-RECENT_WINDOW_MONTHS:])
    longer_trend = calculate_linear_trend(history[-min(n, LONGER_WINDOW_MONTHS):])

    momentum_diff = recent_trend.annual_change_pct - longer_trend.annual_change_pct
    status = classify_momentum(momentum_diff)

    return MomentumResult(
        status=status,
        direction=recent_trend.direction,
        strength=abs(recent_trend.annual_change_pct),
        description=MOMENTUM_DESCRIPTIONS[status],
        recent_change_pct=recent_trend.annual_change_pct,
        longer_term_change_pct=longer_trend.annual_change_pct,
        momentum_diff=momentum_diff,
    )
