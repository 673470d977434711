"""
Data models for the Market Forecasting Engine.

Defines closed-sale input records, the monthly aggregate series and
every result produced by the trend, forecast, appreciation, momentum,
confidence and investment components.

Full precision is kept on the dataclasses. Display rounding is applied
only in to_dict(), which produces the shape consumed by report layers.
"""

import math
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Optional, Tuple


# Minimum qualifying months required for a forecast
MIN_FORECAST_MONTHS = 3

INSUFFICIENT_DATA_MESSAGE = "Insufficient historical data for forecasting"


class TrendDirection(Enum):
    """Direction of a fitted price trend."""
    UP = "up"
    DOWN = "down"
    FLAT = "flat"
    UNKNOWN = "unknown"  # Momentum only, when history is too short

    @classmethod
    def from_slope(cls, slope: float) -> "TrendDirection":
        """Classify a regression slope."""
        if slope > 0:
            return cls.UP
        if slope < 0:
            return cls.DOWN
        return cls.FLAT


class MomentumStatus(Enum):
    """
    Market momentum classification.

    Compares the short (3 month) trend with the longer (<= 12 month) trend.
    """
    INSUFFICIENT_DATA = "insufficient_data"
    STABLE = "stable"
    ACCELERATING = "accelerating"
    STRENGTHENING = "strengthening"
    DECLINING = "declining"
    WEAKENING = "weakening"


class ConfidenceLevel(Enum):
    """
    Forecast confidence level.

    High: score >= 80
    Medium: score >= 60
    Low: otherwise
    """
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RiskLevel(Enum):
    """
    Investment risk level.

    Low: score < 20
    Medium: score < 40
    Elevated: score < 60
    High: otherwise
    """
    LOW = "low"
    MEDIUM = "medium"
    ELEVATED = "elevated"
    HIGH = "high"


@dataclass(frozen=True)
class SaleRecord:
    """
    A closed sale from the listings store.

    Read-only input to the aggregator. Only closed sales belong here;
    active, pending and withdrawn listings are never supplied.
    """
    close_price: float
    close_date: date

    # Location and classification (equality filters)
    city: str = ""
    state: str = ""
    property_type: str = ""

    # Optional detail
    building_area: Optional[float] = None  # Square feet
    days_on_market: Optional[int] = None
    listing_contract_date: Optional[date] = None
    listing_id: str = ""

    @property
    def price_per_sqft(self) -> Optional[float]:
        """Close price per square foot, None when the area is unknown."""
        area = self.building_area
        if not area or not math.isfinite(area) or area <= 0:
            return None
        return self.close_price / area

    @property
    def effective_dom(self) -> Optional[int]:
        """
        Days on market.

        Falls back to the contract-to-close span when the reported
        value is missing or zero.
        """
        if self.days_on_market:
            return self.days_on_market
        if self.listing_contract_date is not None:
            span = (self.close_date - self.listing_contract_date).days
            return span or None
        return None


@dataclass(frozen=True)
class SalesQuery:
    """Query parameters for fetching closed sales from a record source."""
    city: str = ""
    state: str = ""
    property_type: str = "all"
    lookback_months: int = 24
    reference_date: Optional[date] = None

    @property
    def filters_property_type(self) -> bool:
        """Whether the property type filter is active ('all' disables it)."""
        return bool(self.property_type) and self.property_type != "all"


@dataclass(frozen=True)
class MonthlyStat:
    """Aggregate statistics for one calendar month of closed sales."""
    month: str  # YYYY-MM
    sales_count: int
    avg_price: float
    price_stddev: float
    min_price: float
    max_price: float
    avg_price_per_sqft: Optional[float]
    avg_dom: float

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "sales_count": self.sales_count,
            "avg_price": round(self.avg_price, 2),
            "price_stddev": round(self.price_stddev, 2),
            "min_price": self.min_price,
            "max_price": self.max_price,
            "avg_price_per_sqft": (
                round(self.avg_price_per_sqft, 2)
                if self.avg_price_per_sqft is not None else None
            ),
            "avg_dom": round(self.avg_dom, 1),
        }


@dataclass(frozen=True)
class TrendResult:
    """Ordinary least squares fit over the monthly average price series."""
    slope: float
    intercept: float
    r_squared: float
    annual_change_pct: float
    direction: TrendDirection

    @property
    def monthly_change(self) -> float:
        """Fitted price change per month (the slope)."""
        return self.slope

    def predict(self, index: float) -> float:
        """Price on the fitted line at a series position."""
        return self.slope * index + self.intercept

    def to_dict(self) -> dict:
        return {
            "slope": self.slope,
            "intercept": self.intercept,
            "r_squared": self.r_squared,
            "monthly_change": self.monthly_change,
            "annual_change_pct": self.annual_change_pct,
            "direction": self.direction.value,
        }


@dataclass(frozen=True)
class ForecastPoint:
    """Projected price at one forward horizon."""
    months_ahead: int
    forecast_date: str  # YYYY-MM
    predicted_price: float
    low_estimate: float
    high_estimate: float
    change_from_current: float
    change_pct: float

    def to_dict(self) -> dict:
        return {
            "months_ahead": self.months_ahead,
            "forecast_date": self.forecast_date,
            "predicted_price": round(self.predicted_price),
            "low_estimate": round(self.low_estimate),
            "high_estimate": round(self.high_estimate),
            "change_from_current": round(self.change_from_current),
            "change_pct": round(self.change_pct, 2),
        }


@dataclass(frozen=True)
class AppreciationResult:
    """Trailing percentage price changes (simple, not compounded)."""
    three_month: float = 0.0
    six_month: float = 0.0
    twelve_month: float = 0.0
    average_monthly: float = 0.0

    def to_dict(self) -> dict:
        return {
            "3_month": round(self.three_month, 2),
            "6_month": round(self.six_month, 2),
            "12_month": round(self.twelve_month, 2),
            "average_monthly": round(self.average_monthly, 2),
        }


@dataclass(frozen=True)
class MomentumResult:
    """Acceleration or deceleration of the price trend."""
    status: MomentumStatus
    direction: TrendDirection
    strength: float
    description: str
    recent_change_pct: float = 0.0
    longer_term_change_pct: float = 0.0
    momentum_diff: float = 0.0

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "direction": self.direction.value,
            "strength": round(self.strength, 1),
            "recent_change_pct": round(self.recent_change_pct, 2),
            "longer_term_change_pct": round(self.longer_term_change_pct, 2),
            "momentum_diff": round(self.momentum_diff, 2),
            "description": self.description,
        }


@dataclass(frozen=True)
class ConfidenceResult:
    """Forecast confidence from fit quality, volatility and sample size."""
    score: float
    level: ConfidenceLevel
    r_squared: float
    volatility: float  # Coefficient of variation
    data_points: int
    description: str

    def to_dict(self) -> dict:
        return {
            "score": round(self.score),
            "level": self.level.value,
            "r_squared": round(self.r_squared, 3),
            "volatility": round(self.volatility, 3),
            "data_points": self.data_points,
            "description": self.description,
        }


@dataclass(frozen=True)
class ForecastFailure:
    """
    Structured failure for a forecast that cannot be produced.

    Returned, never raised: callers may render a partial report
    without the market analysis section.
    """
    data_points: int
    message: str = INSUFFICIENT_DATA_MESSAGE
    min_required: int = MIN_FORECAST_MONTHS

    @property
    def success(self) -> bool:
        return False

    def to_dict(self) -> dict:
        return {
            "success": False,
            "message": self.message,
            "min_required": self.min_required,
            "data_points": self.data_points,
        }


@dataclass(frozen=True)
class ForecastResult:
    """
    Complete market forecast for one query.

    Immutable, so a cached instance can be shared between callers.
    """
    trend: TrendResult
    forecast: Tuple[ForecastPoint, ...]
    appreciation: AppreciationResult
    momentum: MomentumResult
    confidence: ConfidenceResult
    current_price: float
    current_month: str
    data_points: int

    # Request echo
    historical_months: int = 24
    forecast_months: int = 12

    # Monthly series the forecast was fitted on (audit trail)
    history: Tuple[MonthlyStat, ...] = ()

    @property
    def success(self) -> bool:
        return True

    def point_for(self, months_ahead: int) -> Optional[ForecastPoint]:
        """Forecast point at a horizon, None if it was not requested."""
        for point in self.forecast:
            if point.months_ahead == months_ahead:
                return point
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "success": True,
            "historical_months": self.historical_months,
            "forecast_months": self.forecast_months,
            "current_price": self.current_price,
            "current_month": self.current_month,
            "trend": self.trend.to_dict(),
            "forecast": [p.to_dict() for p in self.forecast],
            "appreciation": self.appreciation.to_dict(),
            "momentum": self.momentum.to_dict(),
            "confidence": self.confidence.to_dict(),
            "data_points": self.data_points,
        }


@dataclass(frozen=True)
class ProjectedValue:
    """Compound-growth projection of a property value."""
    years: int
    value: float
    appreciation: float
    appreciation_pct: float

    def to_dict(self) -> dict:
        return {
            "value": round(self.value),
            "appreciation": round(self.appreciation),
            "appreciation_pct": round(self.appreciation_pct, 2),
        }


@dataclass(frozen=True)
class RiskAssessment:
    """Additive investment risk score with its contributing factors."""
    score: int
    level: RiskLevel
    description: str
    volatility: float
    trend: TrendDirection
    momentum: MomentumStatus

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "level": self.level.value,
            "description": self.description,
            "factors": {
                "volatility": round(self.volatility, 3),
                "trend": self.trend.value,
                "momentum": self.momentum.value,
            },
        }


@dataclass(frozen=True)
class InvestmentResult:
    """Value projections and risk rating for a subject property."""
    current_value: float
    annual_appreciation_rate: float
    projected_values: Dict[int, ProjectedValue]
    risk_assessment: RiskAssessment
    momentum: MomentumResult
    confidence: ConfidenceResult

    @property
    def success(self) -> bool:
        return True

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "success": True,
            "current_value": self.current_value,
            "annual_appreciation_rate": round(self.annual_appreciation_rate, 2),
            "projected_values": {
                f"{years}_year": projection.to_dict()
                for years, projection in sorted(self.projected_values.items())
            },
            "momentum": self.momentum.to_dict(),
            "risk_assessment": self.risk_assessment.to_dict(),
            "confidence": self.confidence.to_dict(),
        }
