"""
Market Forecasting Engine

Public entry point combining the pipeline:
1. FETCH - Closed sales from the injected record source
2. AGGREGATE - Monthly statistics (>= 3 sales per month)
3. TREND - Least squares fit over the monthly series
4. PROJECT - Forecast, appreciation, momentum, confidence
5. INVEST - Compound projections and risk for a subject value
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Optional, Union

from .aggregation import MonthlyAggregator
from .appreciation import calculate_appreciation
from .confidence import calculate_confidence
from .forecaster import generate_forecast
from .investment import (
    INVESTMENT_FORECAST_MONTHS,
    INVESTMENT_LOOKBACK_MONTHS,
    analyze_investment,
)
from .models import (
    MIN_FORECAST_MONTHS,
    ForecastFailure,
    ForecastResult,
    InvestmentResult,
    SalesQuery,
)
from .momentum import calculate_momentum
from .trend import calculate_linear_trend

if TYPE_CHECKING:
    from ..cache import ForecastCache
    from ..sales_data import SaleRecordSource


logger = logging.getLogger(__name__)


DEFAULT_LOOKBACK_MONTHS = 24
DEFAULT_FORECAST_MONTHS = 12


class MarketForecastingEngine:
    """
    Price forecasting and investment analysis for a market.

    Stateless per call apart from the optional, caller-owned cache,
    so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        source: SaleRecordSource,
        cache: Optional[ForecastCache] = None,
        reference_date: Optional[date] = None,
        aggregator: Optional[MonthlyAggregator] = None,
    ):
        """
        Initialize the engine.

        Args:
            source: SaleRecordSource supplying closed sales
            cache: Optional ForecastCache for successful forecasts
            reference_date: End of every lookback window (default: today,
                resolved on each call)
            aggregator: Monthly aggregator (default: 3 sales per month minimum)
        """
        self._source = source
        self._cache = cache
        self._reference_date = reference_date
        self._aggregator = aggregator or MonthlyAggregator()

    @property
    def reference_date(self) -> date:
        return self._reference_date or date.today()

    def get_price_forecast(
        self,
        city: str,
        state: str = "",
        property_type: str = "all",
        lookback_months: int = DEFAULT_LOOKBACK_MONTHS,
        forecast_months: int = DEFAULT_FORECAST_MONTHS,
    ) -> Union[ForecastResult, ForecastFailure]:
        """
        Get the price forecast for a market.

        Args:
            city: City name (empty for all cities)
            state: State abbreviation (empty for all states)
            property_type: Property type ('all' for every type)
            lookback_months: Historical months to analyze
            forecast_months: Months to forecast ahead

        Returns:
            ForecastResult, or ForecastFailure when fewer than 3 months
            of qualifying history exist

        Raises:
            ValueError: If a window is not positive
        """
        if lookback_months < 1:
            raise ValueError("lookback_months must be at least 1")
        if forecast_months < 1:
            raise ValueError("forecast_months must be at least 1")

        cache_key = None
        if self._cache is not None:
            cache_key = self._cache.make_key(
                city, state, property_type, lookback_months, forecast_months
            )
            cached = self._cache.get(cache_key)
            if cached is not None:
                logger.debug("Forecast cache hit for %s", cache_key)
                return cached

        query = SalesQuery(
            city=city or "",
            state=state or "",
            property_type=property_type or "all",
            lookback_months=lookback_months,
            reference_date=self.reference_date,
        )
        records = self._source.fetch_closed_sales(query)
        history = self._aggregator.aggregate(records, query)

        if len(history) < MIN_FORECAST_MONTHS:
            logger.warning(
                "Insufficient history for %s/%s/%s: %d qualifying months",
                city, state, property_type, len(history),
            )
            return ForecastFailure(data_points=len(history))

        trend = calculate_linear_trend(history)
        current = history[-1]

        result = ForecastResult(
            trend=trend,
            forecast=tuple(generate_forecast(history, trend, forecast_months)),
            appreciation=calculate_appreciation(history),
            momentum=calculate_momentum(history),
            confidence=calculate_confidence(history, trend),
            current_price=current.avg_price,
            current_month=current.month,
            data_points=len(history),
            historical_months=lookback_months,
            forecast_months=forecast_months,
            history=tuple(history),
        )

        logger.info(
            "Forecast for %s/%s/%s: %d months, trend %s %.2f%%/yr, confidence %s",
            city, state, property_type, len(history),
            trend.direction.value, trend.annual_change_pct,
            result.confidence.level.value,
        )

        if cache_key is not None:
            self._cache.set(cache_key, result)

        return result

    def get_investment_analysis(
        self,
        current_value: float,
        city: str,
        state: str = "",
        property_type: str = "all",
    ) -> Union[InvestmentResult, ForecastFailure]:
        """
        Get the investment analysis for a property.

        Args:
            current_value: Current property value (> 0)
            city: City name
            state: State abbreviation
            property_type: Property type

        Returns:
            InvestmentResult, or the ForecastFailure of the underlying forecast

        Raises:
            ValueError: If current_value is not positive
        """
        if current_value is None or current_value <= 0:
            raise ValueError("current_value must be positive")

        forecast = self.get_price_forecast(
            city,
            state,
            property_type,
            INVESTMENT_LOOKBACK_MONTHS,
            INVESTMENT_FORECAST_MONTHS,
        )

        if not forecast.success:
            return forecast

        return analyze_investment(current_value, forecast)

    def clear_cache(self) -> bool:
        """Clear cached forecasts. Returns False when no cache is attached."""
        if self._cache is None:
            return False
        self._cache.clear()
        return True
