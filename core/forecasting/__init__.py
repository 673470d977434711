"""
Market Forecasting Engine v1.0

Time-series trend, forecast, appreciation, momentum and confidence
analysis over monthly aggregated closed-sale prices, plus investment
projections and risk ratings derived from the forecast.

Data Source: closed sales from the listings store (closed status only)
"""

from .models import (
    SaleRecord,
    SalesQuery,
    MonthlyStat,
    TrendDirection,
    TrendResult,
    ForecastPoint,
    AppreciationResult,
    MomentumStatus,
    MomentumResult,
    ConfidenceLevel,
    ConfidenceResult,
    ForecastResult,
    ForecastFailure,
    ProjectedValue,
    RiskLevel,
    RiskAssessment,
    InvestmentResult,
    MIN_FORECAST_MONTHS,
)
from .aggregation import MonthlyAggregator, MIN_SALES_PER_MONTH
from .trend import calculate_linear_trend
from .forecaster import generate_forecast, FORECAST_HORIZONS
from .appreciation import calculate_appreciation
from .momentum import calculate_momentum
from .confidence import calculate_confidence
from .investment import analyze_investment, calculate_investment_risk, PROJECTION_YEARS
from .engine import MarketForecastingEngine

__all__ = [
    # Models
    "SaleRecord",
    "SalesQuery",
    "MonthlyStat",
    "TrendDirection",
    "TrendResult",
    "ForecastPoint",
    "AppreciationResult",
    "MomentumStatus",
    "MomentumResult",
    "ConfidenceLevel",
    "ConfidenceResult",
    "ForecastResult",
    "ForecastFailure",
    "ProjectedValue",
    "RiskLevel",
    "RiskAssessment",
    "InvestmentResult",
    "MIN_FORECAST_MONTHS",
    # Components
    "MonthlyAggregator",
    "MIN_SALES_PER_MONTH",
    "calculate_linear_trend",
    "generate_forecast",
    "FORECAST_HORIZONS",
    "calculate_appreciation",
    "calculate_momentum",
    "calculate_confidence",
    "analyze_investment",
    "calculate_investment_risk",
    "PROJECTION_YEARS",
    # Engine
    "MarketForecastingEngine",
]

__version__ = "1.0"
