"""
Shared fixtures for the forecast engine tests.
"""

import sys
from datetime import date
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.forecasting import MonthlyStat, SaleRecord
from core.forecasting.periods import parse_month_label, shift_month_label


@pytest.fixture
def reference_date():
    """Fixed reference date for deterministic tests."""
    return date(2024, 12, 31)


@pytest.fixture
def linear_prices():
    """12 months rising $1,000 per month from $300,000."""
    return [300000 + 1000 * i for i in range(12)]


@pytest.fixture
def make_history():
    """Factory fixture for monthly series with given average prices."""
    def _create(prices, start: str = "2024-01", sales_count: int = 10):
        return [
            MonthlyStat(
                month=shift_month_label(start, i),
                sales_count=sales_count,
                avg_price=float(price),
                price_stddev=0.0,
                min_price=float(price),
                max_price=float(price),
                avg_price_per_sqft=None,
                avg_dom=30.0,
            )
            for i, price in enumerate(prices)
        ]
    return _create


@pytest.fixture
def make_records():
    """
    Factory fixture for closed sales whose monthly mean equals the given prices.

    Prices within a month are spread symmetrically around the mean.
    """
    def _create(
        monthly_prices,
        start: str = "2024-01",
        sales_per_month: int = 10,
        city: str = "Boston",
        state: str = "MA",
        property_type: str = "Residential",
        building_area: float = 1500.0,
    ):
        records = []
        for i, mean_price in enumerate(monthly_prices):
            year, month = parse_month_label(shift_month_label(start, i))
            for j in range(sales_per_month):
                offset = (j - (sales_per_month - 1) / 2) * 100
                records.append(SaleRecord(
                    close_price=mean_price + offset,
                    close_date=date(year, month, 1 + j % 28),
                    city=city,
                    state=state,
                    property_type=property_type,
                    building_area=building_area,
                    days_on_market=20 + j,
                    listing_id=f"L-{year}{month:02d}-{j}",
                ))
        return records
    return _create
