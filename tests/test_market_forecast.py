"""
Tests for the Market Forecasting Engine pipeline

End-to-end forecasts over closed sales, insufficient data handling,
investment projections, risk scoring and the result cache.
"""

from dataclasses import FrozenInstanceError

import pytest

from core import (
    ForecastCache,
    ForecastFailure,
    InMemorySaleRecordSource,
    MarketForecastingEngine,
)
from core.forecasting import (
    ConfidenceLevel,
    MomentumStatus,
    RiskLevel,
    TrendDirection,
    analyze_investment,
    calculate_investment_risk,
)
from core.forecasting.investment import project_value


class CountingSource(InMemorySaleRecordSource):
    """In-memory source that counts fetches."""

    def __init__(self, records):
        super().__init__(records)
        self.fetch_count = 0

    def fetch_closed_sales(self, query):
        self.fetch_count += 1
        return super().fetch_closed_sales(query)


@pytest.fixture
def linear_records(make_records, linear_prices):
    return make_records(linear_prices)


@pytest.fixture
def engine(reference_date, linear_records):
    """Engine over 12 months of steadily rising Boston sales."""
    return MarketForecastingEngine(
        InMemorySaleRecordSource(linear_records),
        reference_date=reference_date,
    )


# =============================================================================
# Test: Price Forecast
# =============================================================================

class TestPriceForecast:
    """End-to-end forecast over a linear market."""

    def test_linear_market_forecast(self, engine):
        result = engine.get_price_forecast("Boston", "MA")

        assert result.success is True
        assert result.data_points == 12
        assert result.current_month == "2024-12"
        assert result.current_price == pytest.approx(311000)
        assert result.trend.direction == TrendDirection.UP
        assert result.trend.annual_change_pct == pytest.approx(4.0, abs=0.1)
        assert result.confidence.level == ConfidenceLevel.HIGH

    def test_twelve_month_prediction_within_band(self, engine):
        result = engine.get_price_forecast("Boston", "MA")

        twelve = result.point_for(12)
        assert twelve.predicted_price == pytest.approx(323000)
        assert twelve.low_estimate < 323000 < twelve.high_estimate
        assert twelve.forecast_date == "2025-12"

    def test_forecast_horizon_respected(self, engine):
        result = engine.get_price_forecast("Boston", forecast_months=6)

        assert [p.months_ahead for p in result.forecast] == [3, 6]
        assert result.point_for(12) is None

    def test_result_dict_shape(self, engine):
        data = engine.get_price_forecast("Boston", "MA").to_dict()

        assert data["success"] is True
        assert data["historical_months"] == 24
        assert data["forecast_months"] == 12
        assert data["trend"]["direction"] == "up"
        assert data["trend"]["monthly_change"] == pytest.approx(1000)
        assert set(data["appreciation"]) == {"3_month", "6_month", "12_month", "average_monthly"}
        assert data["momentum"]["status"] == "stable"
        assert data["confidence"]["level"] == "high"
        assert len(data["forecast"]) == 3

    def test_identical_input_identical_output(self, reference_date, linear_records):
        first = MarketForecastingEngine(
            InMemorySaleRecordSource(linear_records), reference_date=reference_date
        )
        second = MarketForecastingEngine(
            InMemorySaleRecordSource(list(reversed(linear_records))), reference_date=reference_date
        )

        assert first.get_price_forecast("Boston").to_dict() == second.get_price_forecast("Boston").to_dict()

    def test_invalid_windows_raise(self, engine):
        with pytest.raises(ValueError):
            engine.get_price_forecast("Boston", lookback_months=0)
        with pytest.raises(ValueError):
            engine.get_price_forecast("Boston", forecast_months=0)


# =============================================================================
# Test: Insufficient Data
# =============================================================================

class TestInsufficientData:
    """Fewer than 3 qualifying months is a structured failure, not an exception."""

    def test_two_qualifying_months(self, reference_date, make_records):
        records = make_records([300000, 301000], start="2024-10")
        # December has only 2 sales and is dropped
        records += make_records([302000], start="2024-12", sales_per_month=2)
        engine = MarketForecastingEngine(
            InMemorySaleRecordSource(records), reference_date=reference_date
        )

        result = engine.get_price_forecast("Boston")

        assert isinstance(result, ForecastFailure)
        assert result.success is False
        assert result.to_dict() == {
            "success": False,
            "message": "Insufficient historical data for forecasting",
            "min_required": 3,
            "data_points": 2,
        }

    def test_unknown_market(self, engine):
        result = engine.get_price_forecast("Springfield")

        assert result.success is False
        assert result.data_points == 0

    def test_investment_passes_failure_through(self, engine):
        result = engine.get_investment_analysis(500000, "Springfield")

        assert isinstance(result, ForecastFailure)
        assert result.min_required == 3

    def test_three_months_short_history_degrades(self, reference_date, make_records):
        """Three months forecast successfully with neutral momentum."""
        records = make_records([300000, 303000, 306000], start="2024-10")
        engine = MarketForecastingEngine(
            InMemorySaleRecordSource(records), reference_date=reference_date
        )

        result = engine.get_price_forecast("Boston")

        assert result.success is True
        assert result.momentum.status == MomentumStatus.INSUFFICIENT_DATA
        assert result.appreciation.three_month == 0
        assert result.confidence.level == ConfidenceLevel.HIGH  # 100 - 20 (short history)


# =============================================================================
# Test: Investment Analysis
# =============================================================================

class TestInvestmentAnalysis:
    """Tests for compound projections and risk scoring."""

    def test_compounding_one_year_ten_percent(self):
        projection = project_value(100000, 10.0, 1)

        assert projection.value == pytest.approx(110000)
        assert projection.appreciation == pytest.approx(10000)
        assert projection.appreciation_pct == pytest.approx(10.0)

    def test_compounding_multi_year(self):
        projection = project_value(100000, 10.0, 3)

        assert projection.value == pytest.approx(133100)

    def test_engine_investment_analysis(self, engine):
        result = engine.get_investment_analysis(600000, "Boston", "MA")

        rate = 1000 * 12 / 305500 * 100
        assert result.success is True
        assert result.annual_appreciation_rate == pytest.approx(rate)
        assert sorted(result.projected_values) == [1, 3, 5, 10]
        assert result.projected_values[5].value == pytest.approx(600000 * (1 + rate / 100) ** 5)

    def test_steady_market_is_low_risk(self, engine):
        result = engine.get_investment_analysis(600000, "Boston")

        risk = result.risk_assessment
        assert risk.score == 0
        assert risk.level == RiskLevel.LOW
        assert risk.description == "Stable market with consistent appreciation trends"

    def test_investment_dict_shape(self, engine):
        data = engine.get_investment_analysis(600000, "Boston").to_dict()

        assert set(data["projected_values"]) == {"1_year", "3_year", "5_year", "10_year"}
        assert data["risk_assessment"]["factors"] == {
            "volatility": pytest.approx(0.012, abs=0.001),
            "trend": "up",
            "momentum": "stable",
        }

    def test_non_positive_value_rejected(self, engine):
        with pytest.raises(ValueError):
            engine.get_investment_analysis(0, "Boston")

    def test_declining_volatile_market_is_high_risk(self, reference_date, make_records):
        prices = [420000, 300000, 410000, 290000, 400000, 280000,
                  390000, 270000, 380000, 300000, 260000, 240000]
        engine = MarketForecastingEngine(
            InMemorySaleRecordSource(make_records(prices)), reference_date=reference_date
        )

        forecast = engine.get_price_forecast("Boston")
        risk = calculate_investment_risk(forecast)

        assert forecast.trend.direction == TrendDirection.DOWN
        assert forecast.confidence.volatility > 0.10
        assert risk.score >= 40
        assert risk.level in (RiskLevel.ELEVATED, RiskLevel.HIGH)
        assert risk.trend == TrendDirection.DOWN

    def test_analyze_investment_requires_positive_value(self, engine):
        forecast = engine.get_price_forecast("Boston")

        with pytest.raises(ValueError):
            analyze_investment(-1, forecast)


# =============================================================================
# Test: Result Cache
# =============================================================================

class TestForecastCache:
    """Tests for the caller-owned forecast cache."""

    def test_cache_hit_skips_source(self, reference_date, linear_records):
        source = CountingSource(linear_records)
        engine = MarketForecastingEngine(
            source, cache=ForecastCache(), reference_date=reference_date
        )

        first = engine.get_price_forecast("Boston", "MA")
        second = engine.get_price_forecast("boston", "ma")

        assert second.to_dict() == first.to_dict()
        assert source.fetch_count == 1

    def test_cached_result_cannot_be_altered_by_a_caller(self, reference_date, linear_records):
        engine = MarketForecastingEngine(
            InMemorySaleRecordSource(linear_records),
            cache=ForecastCache(),
            reference_date=reference_date,
        )

        first = engine.get_price_forecast("Boston")
        with pytest.raises(AttributeError):
            first.forecast.clear()
        with pytest.raises(FrozenInstanceError):
            first.forecast = ()
        with pytest.raises(AttributeError):
            first.history.sort()

        second = engine.get_price_forecast("Boston")

        assert [p.months_ahead for p in second.forecast] == [3, 6, 12]
        assert len(second.history) == 12

    def test_different_parameters_miss(self, reference_date, linear_records):
        source = CountingSource(linear_records)
        engine = MarketForecastingEngine(
            source, cache=ForecastCache(), reference_date=reference_date
        )

        engine.get_price_forecast("Boston", forecast_months=12)
        engine.get_price_forecast("Boston", forecast_months=6)

        assert source.fetch_count == 2

    def test_failures_not_cached(self, reference_date, linear_records):
        source = CountingSource(linear_records)
        cache = ForecastCache()
        engine = MarketForecastingEngine(source, cache=cache, reference_date=reference_date)

        engine.get_price_forecast("Springfield")
        engine.get_price_forecast("Springfield")

        assert source.fetch_count == 2
        assert len(cache) == 0

    def test_clear_cache(self, reference_date, linear_records):
        source = CountingSource(linear_records)
        engine = MarketForecastingEngine(
            source, cache=ForecastCache(), reference_date=reference_date
        )

        engine.get_price_forecast("Boston")
        assert engine.clear_cache() is True
        engine.get_price_forecast("Boston")

        assert source.fetch_count == 2

    def test_clear_without_cache(self, engine):
        assert engine.clear_cache() is False

    def test_investment_reuses_cached_forecast(self, reference_date, linear_records):
        source = CountingSource(linear_records)
        engine = MarketForecastingEngine(
            source, cache=ForecastCache(), reference_date=reference_date
        )

        engine.get_price_forecast("Boston", lookback_months=24, forecast_months=12)
        engine.get_investment_analysis(500000, "Boston")

        assert source.fetch_count == 1
