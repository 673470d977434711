"""
Closed sale filters shared by record sources and the monthly aggregator.

A record matches a query when:
- Its close price is a positive, finite number
- It closed inside the lookback window ending at the reference date
- City, state and property type match (case-insensitive; empty or 'all'
  disables a filter)
"""

import math
from datetime import date
from typing import Optional

from .models import SaleRecord, SalesQuery
from .periods import subtract_months


def _matches(value: str, wanted: str) -> bool:
    """Case-insensitive equality; an empty filter matches everything."""
    if not wanted:
        return True
    return (value or "").strip().casefold() == wanted.strip().casefold()


def has_valid_price(record: SaleRecord) -> bool:
    """Close price is set, finite and positive."""
    price = record.close_price
    return price is not None and math.isfinite(price) and price > 0


def matches_query(
    record: SaleRecord,
    query: SalesQuery,
    reference_date: Optional[date] = None,
) -> bool:
    """
    Check a closed sale against a query.

    Args:
        record: Closed sale
        query: Location/type filters and lookback window
        reference_date: Window end when the query carries none (default: today)

    Returns:
        True if the record belongs to the query
    """
    if not has_valid_price(record):
        return False

    window_end = query.reference_date or reference_date or date.today()
    window_start = subtract_months(window_end, query.lookback_months)
    if not window_start <= record.close_date <= window_end:
        return False

    if not _matches(record.city, query.city):
        return False
    if not _matches(record.state, query.state):
        return False
    if query.filters_property_type and not _matches(
        record.property_type, query.property_type
    ):
        return False

    return True
