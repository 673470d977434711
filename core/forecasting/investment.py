"""
Investment Analyzer for the Market Forecasting Engine.

Implements:
- Compound-growth value projections at 1/3/5/10 years
- Additive risk score from volatility, trend, momentum and confidence
- Risk level bands
"""

from typing import Dict

from .models import (
    ConfidenceLevel,
    ForecastResult,
    InvestmentResult,
    MomentumStatus,
    ProjectedValue,
    RiskAssessment,
    RiskLevel,
    TrendDirection,
)
from .confidence import HIGH_VOLATILITY, MODERATE_VOLATILITY


# =============================================================================
# Configuration Constants
# =============================================================================

PROJECTION_YEARS = (1, 3, 5, 10)

# Lookback/horizon the investment analysis always forecasts with
INVESTMENT_LOOKBACK_MONTHS = 24
INVESTMENT_FORECAST_MONTHS = 12

RISK_DESCRIPTIONS = {
    RiskLevel.LOW: "Stable market with consistent appreciation trends",
    RiskLevel.MEDIUM: "Moderate market volatility, typical for real estate",
    RiskLevel.ELEVATED: "Higher than average market uncertainty",
    RiskLevel.HIGH: "Significant market volatility or declining trends",
}


def project_value(current_value: float, annual_rate_pct: float, years: int) -> ProjectedValue:
    """
    Compound a value forward.

    value = current * (1 + rate/100) ^ years
    """
    compound_factor = (1 + annual_rate_pct / 100) ** years
    projected = current_value * compound_factor
    appreciation = projected - current_value

    return ProjectedValue(
        years=years,
        value=projected,
        appreciation=appreciation,
        appreciation_pct=(appreciation / current_value) * 100 if current_value else 0.0,
    )


def risk_level(score: int) -> RiskLevel:
    """Bucket a risk score."""
    if score < 20:
        return RiskLevel.LOW
    if score < 40:
        return RiskLevel.MEDIUM
    if score < 60:
        return RiskLevel.ELEVATED
    return RiskLevel.HIGH


def calculate_investment_risk(forecast: ForecastResult) -> RiskAssessment:
    """
    Calculate the investment risk assessment for a forecast.

    Volatility: +30 (> 20%) / +15 (> 10%)
    Trend: +25 (down) / +10 (flat)
    Momentum: +20 (declining) / +10 (weakening)
    Confidence: +15 (low) / +5 (medium)
    """
    score = 0

    volatility = forecast.confidence.volatility
    if volatility > HIGH_VOLATILITY:
        score += 30
    elif volatility > MODERATE_VOLATILITY:
        score += 15

    direction = forecast.trend.direction
    if direction == TrendDirection.DOWN:
        score += 25
    elif direction == TrendDirection.FLAT:
        score += 10

    momentum = forecast.momentum.status
    if momentum == MomentumStatus.DECLINING:
        score += 20
    elif momentum == MomentumStatus.WEAKENING:
        score += 10

    confidence = forecast.confidence.level
    if confidence == ConfidenceLevel.LOW:
        score += 15
    elif confidence == ConfidenceLevel.MEDIUM:
        score += 5

    level = risk_level(score)

    return RiskAssessment(
        score=score,
        level=level,
        description=RISK_DESCRIPTIONS[level],
        volatility=volatility,
        trend=direction,
        momentum=momentum,
    )


def analyze_investment(current_value: float, forecast: ForecastResult) -> InvestmentResult:
    """
    Project a property value using the market's annualized trend.

    Args:
        current_value: Current value of the subject property (> 0)
        forecast: Successful market forecast

    Returns:
        InvestmentResult with projections and risk assessment

    Raises:
        ValueError: If current_value is not positive
    """
    if current_value is None or current_value <= 0:
        raise ValueError("current_value must be positive")

    annual_rate = forecast.trend.annual_change_pct

    projected_values: Dict[int, ProjectedValue] = {
        years: project_value(current_value, annual_rate, years)
        for years in PROJECTION_YEARS
    }

    return InvestmentResult(
        current_value=current_value,
        annual_appreciation_rate=annual_rate,
        projected_values=projected_values,
        risk_assessment=calculate_investment_risk(forecast),
        momentum=forecast.momentum,
        confidence=forecast.confidence,
    )
