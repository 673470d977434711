"""
Closed Sales Data Source

Read interface over closed-sale records, filterable by location, property
type and date range. The engine only depends on SaleRecordSource; the
listings store behind it (database, API, flat file) is interchangeable.
"""

import csv
import logging
import math
from abc import ABC, abstractmethod
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .forecasting.filters import matches_query
from .forecasting.models import SaleRecord, SalesQuery


logger = logging.getLogger(__name__)


class SaleRecordSource(ABC):
    """
    Abstract source of closed sales.

    Implementations may push the query filters down to their store.
    Records outside the query are tolerated: the aggregator re-applies
    every filter.
    """

    @abstractmethod
    def fetch_closed_sales(self, query: SalesQuery) -> List[SaleRecord]:
        """
        Fetch closed sales for a query.

        Args:
            query: Location/type filters and lookback window

        Returns:
            Closed sales (empty if none found)
        """


class InMemorySaleRecordSource(SaleRecordSource):
    """Source backed by a list of records held in memory."""

    def __init__(self, records: Iterable[SaleRecord] = ()):
        self._records = list(records)

    def __len__(self) -> int:
        return len(self._records)

    def add(self, record: SaleRecord) -> None:
        """Append a closed sale."""
        self._records.append(record)

    def fetch_closed_sales(self, query: SalesQuery) -> List[SaleRecord]:
        return [r for r in self._records if matches_query(r, query)]

    @classmethod
    def from_csv(cls, path: Union[str, Path]) -> "InMemorySaleRecordSource":
        """Load a source from a CSV export of closed sales."""
        return cls(load_sale_records_csv(path))


def _text(value) -> str:
    return str(value).strip() if value is not None else ""


def _parse_date(value) -> Optional[date]:
    text = _text(value)
    if not text:
        return None
    # Accepts plain dates and full timestamps
    return datetime.fromisoformat(text).date()


def _parse_float(value) -> Optional[float]:
    text = _text(value).replace(",", "")
    if not text:
        return None
    number = float(text)
    if not math.isfinite(number):
        raise ValueError(f"non-finite number: {text!r}")
    return number


def _parse_int(value) -> Optional[int]:
    number = _parse_float(value)
    return int(number) if number is not None else None


def parse_sale_record(row: dict) -> SaleRecord:
    """
    Convert one CSV/JSON row into a SaleRecord.

    Raises:
        ValueError: If close_price or close_date is missing or malformed
    """
    close_price = _parse_float(row.get("close_price"))
    close_date = _parse_date(row.get("close_date"))
    if close_price is None or close_date is None:
        raise ValueError("close_price and close_date are required")

    return SaleRecord(
        close_price=close_price,
        close_date=close_date,
        city=_text(row.get("city")),
        state=_text(row.get("state")),
        property_type=_text(row.get("property_type")),
        building_area=_parse_float(row.get("building_area")),
        days_on_market=_parse_int(row.get("days_on_market")),
        listing_contract_date=_parse_date(row.get("listing_contract_date")),
        listing_id=_text(row.get("listing_id")),
    )


def load_sale_records_csv(path: Union[str, Path]) -> List[SaleRecord]:
    """
    Load closed sales from a CSV file with a header row.

    Malformed rows are skipped and logged.
    """
    path = Path(path)
    records = []

    with path.open(newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        for line_number, row in enumerate(reader, start=2):
            try:
                records.append(parse_sale_record(row))
            except ValueError as exc:
                logger.warning("Skipping %s line %d: %s", path.name, line_number, exc)

    logger.info("Loaded %d closed sales from %s", len(records), path)
    return records
