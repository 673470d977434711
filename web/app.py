"""
FastAPI application for the forecast engine.

Exposes the price forecast and investment analysis operations as JSON
endpoints for the report generators. Insufficient data is a normal
response (success: false), not an HTTP error.

Production deployment configuration via environment variables.
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from core import (
    ForecastCache,
    InMemorySaleRecordSource,
    MarketForecastingEngine,
    MonthlyAggregator,
)
from utils.config import Config

logger = logging.getLogger(__name__)

# =============================================================================
# Environment Configuration
# =============================================================================

IS_PRODUCTION = os.getenv("PRODUCTION", "").lower() == "true"

# CORS configuration - locked down for production
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "").split(",") if os.getenv("ALLOWED_ORIGINS") else []
if not ALLOWED_ORIGINS and not IS_PRODUCTION:
    # Development fallback only
    ALLOWED_ORIGINS = ["http://localhost:8000", "http://127.0.0.1:8000"]

APP_VERSION = "1.0.0"


class InvestmentRequest(BaseModel):
    """Request body for investment analysis."""
    current_value: float = Field(..., gt=0)
    city: str
    state: str = ""
    property_type: str = "all"


def build_engine(config: Config) -> MarketForecastingEngine:
    """
    Construct the engine the application owns.

    The record source and cache are created here and injected;
    nothing is reached through module globals.
    """
    if config.sales_data_path:
        source = InMemorySaleRecordSource.from_csv(config.sales_data_path)
    else:
        logger.warning("SALES_DATA_PATH not set; forecasts will report insufficient data")
        source = InMemorySaleRecordSource()

    cache = ForecastCache(
        ttl_seconds=config.cache_ttl_seconds,
        max_entries=config.cache_max_entries,
    )
    aggregator = MonthlyAggregator(
        min_price=config.min_price,
        max_price=config.max_price,
    )
    return MarketForecastingEngine(source, cache=cache, aggregator=aggregator)


def create_app(
    engine: Optional[MarketForecastingEngine] = None,
    config: Optional[Config] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    config = config or Config.load()
    engine = engine or build_engine(config)

    app = FastAPI(
        title="Market Forecast Engine",
        description="Price forecasting and investment analysis for CMA reports",
        version=APP_VERSION,
        docs_url=None if IS_PRODUCTION else "/docs",
        redoc_url=None if IS_PRODUCTION else "/redoc",
        openapi_url=None if IS_PRODUCTION else "/openapi.json",
        debug=config.debug and not IS_PRODUCTION,
    )
    app.state.engine = engine

    @app.get("/health", include_in_schema=False)
    def health():
        """Health endpoint. No dependencies, no IO."""
        return {"status": "healthy"}

    if ALLOWED_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=ALLOWED_ORIGINS,
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    @app.get("/api/forecast")
    def price_forecast(
        city: str = Query(""),
        state: str = Query(""),
        property_type: str = Query("all"),
        lookback_months: int = Query(config.default_lookback_months, ge=1, le=120),
        forecast_months: int = Query(config.default_forecast_months, ge=1, le=60),
    ):
        """
        Price forecast for a market.

        Returns:
            - success: true with trend, forecast, appreciation, momentum, confidence
            - success: false with message, min_required, data_points
        """
        try:
            result = engine.get_price_forecast(
                city, state, property_type, lookback_months, forecast_months
            )
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return result.to_dict()

    @app.post("/api/investment")
    def investment_analysis(request_data: InvestmentRequest):
        """Investment projections and risk assessment for a property value."""
        try:
            result = engine.get_investment_analysis(
                request_data.current_value,
                request_data.city,
                request_data.state,
                request_data.property_type,
            )
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return result.to_dict()

    @app.post("/api/cache/clear")
    def clear_cache():
        """Drop cached forecasts."""
        return {"success": engine.clear_cache()}

    @app.get("/api/health")
    def api_health():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": APP_VERSION,
            "environment": "production" if IS_PRODUCTION else "development",
        }

    return app
