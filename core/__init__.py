"""
Market Forecast Engine - Core Business Logic

This module provides the forecasting pipeline used by CMA reports:
1. Closed sales source (injected, filterable by location/type/date)
2. Monthly aggregation (minimum sample size per month)
3. Least squares trend
4. Forecast, appreciation, momentum and confidence
5. Investment projection and risk rating
"""

# Forecasting Engine v1.0
from .forecasting import (
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
    MonthlyAggregator,
    MarketForecastingEngine,
)

# Closed sales source
from .sales_data import (
    SaleRecordSource,
    InMemorySaleRecordSource,
    load_sale_records_csv,
    parse_sale_record,
)

# Result cache
from .cache import ForecastCache

__all__ = [
    # Forecasting Engine v1.0
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
    "MonthlyAggregator",
    "MarketForecastingEngine",
    # Closed sales source
    "SaleRecordSource",
    "InMemorySaleRecordSource",
    "load_sale_records_csv",
    "parse_sale_record",
    # Result cache
    "ForecastCache",
]
