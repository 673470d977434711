"""
Monthly Aggregator for the Market Forecasting Engine.

Turns closed-sale records into an ascending series of monthly statistics:
- Equality filters (city, state, property type)
- Lookback window relative to a reference date
- Per-month count, mean, sample stddev, min, max, price/sqft, DOM
- Months with too few sales are dropped, not zero-filled
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional

from .filters import matches_query
from .models import MonthlyStat, SaleRecord, SalesQuery
from .periods import month_label
from .trend import mean, sample_stddev


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Constants
# =============================================================================

# Months with fewer closed sales than this are excluded from the series
MIN_SALES_PER_MONTH = 3


class MonthlyAggregator:
    """
    Groups closed sales by calendar month of close date.

    The x-axis of every downstream regression is the position of a month
    in the returned series, so the series must stay ascending and unique.
    """

    def __init__(
        self,
        reference_date: date = None,
        min_sales_per_month: int = MIN_SALES_PER_MONTH,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
    ):
        """
        Initialize aggregator.

        Args:
            reference_date: End of the lookback window (default: today)
            min_sales_per_month: Minimum sample size for a month to be kept
            min_price: Exclusive lower price bound (None disables)
            max_price: Exclusive upper price bound (None disables)
        """
        self._reference_date = reference_date
        self._min_sales_per_month = min_sales_per_month
        self._min_price = min_price
        self._max_price = max_price

    def select(
        self,
        records: Iterable[SaleRecord],
        query: SalesQuery,
    ) -> List[SaleRecord]:
        """Apply the query filters, lookback window and price bounds."""
        selected = []
        for record in records:
            if not matches_query(record, query, self._reference_date):
                continue
            if self._min_price is not None and record.close_price <= self._min_price:
                continue
            if self._max_price is not None and record.close_price >= self._max_price:
                continue
            selected.append(record)

        return selected

    def aggregate(
        self,
        records: Iterable[SaleRecord],
        query: SalesQuery,
    ) -> List[MonthlyStat]:
        """
        Build the monthly statistics series for a query.

        Args:
            records: Closed sales (may be unfiltered)
            query: Location/type filters and lookback window

        Returns:
            Ascending MonthlyStat list; every element has
            sales_count >= min_sales_per_month
        """
        by_month: Dict[str, List[SaleRecord]] = defaultdict(list)
        for record in self.select(records, query):
            by_month[month_label(record.close_date)].append(record)

        results = []
        for month in sorted(by_month):
            month_records = by_month[month]
            if len(month_records) < self._min_sales_per_month:
                logger.debug(
                    "Dropping %s: %d sales (minimum %d)",
                    month,
                    len(month_records),
                    self._min_sales_per_month,
                )
                continue
            results.append(self._summarise(month, month_records))

        return results

    @staticmethod
    def _summarise(month: str, records: List[SaleRecord]) -> MonthlyStat:
        """Statistics for one month of sales."""
        prices = [float(r.close_price) for r in records]
        ppsf = [r.price_per_sqft for r in records if r.price_per_sqft is not None]
        dom = [r.effective_dom for r in records if r.effective_dom]

        return MonthlyStat(
            month=month,
            sales_count=len(prices),
            avg_price=mean(prices),
            price_stddev=sample_stddev(prices),
            min_price=min(prices),
            max_price=max(prices),
            avg_price_per_sqft=mean(ppsf) if ppsf else None,
            avg_dom=mean(dom),
        )
