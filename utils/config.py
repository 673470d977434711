"""
Configuration management.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name, "").strip()
    return float(value) if value else None


@dataclass
class Config:
    """
    Application configuration.

    Loads from environment variables with sensible defaults.
    """

    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    # Data
    sales_data_path: str = field(default_factory=lambda: os.getenv("SALES_DATA_PATH", ""))

    # Cache
    cache_ttl_hours: float = field(
        default_factory=lambda: float(os.getenv("CACHE_TTL_HOURS", "6"))
    )
    cache_max_entries: int = field(
        default_factory=lambda: int(os.getenv("CACHE_MAX_ENTRIES", "1024"))
    )

    # Forecasting
    default_lookback_months: int = field(
        default_factory=lambda: int(os.getenv("DEFAULT_LOOKBACK_MONTHS", "24"))
    )
    default_forecast_months: int = field(
        default_factory=lambda: int(os.getenv("DEFAULT_FORECAST_MONTHS", "12"))
    )
    min_price: Optional[float] = field(default_factory=lambda: _optional_float("MIN_PRICE"))
    max_price: Optional[float] = field(default_factory=lambda: _optional_float("MAX_PRICE"))

    @property
    def cache_ttl_seconds(self) -> float:
        return self.cache_ttl_hours * 3600

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment."""
        return cls()

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "log_level": self.log_level,
            "sales_data_path": self.sales_data_path,
            "cache_ttl_hours": self.cache_ttl_hours,
            "cache_max_entries": self.cache_max_entries,
            "default_lookback_months": self.default_lookback_months,
            "default_forecast_months": self.default_forecast_months,
            "min_price": self.min_price,
            "max_price": self.max_price,
        }
