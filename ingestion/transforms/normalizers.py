"""
Normalizers for transforming stock service data to canonical shape.
Pure functions - no IO, network, or side effects.
"""

import logging
from typing import Any, Dict, List, Tuple

from dateutil import parser as date_parser

from analysis.models import PriceSample
from ingestion.transforms.validators import (
    validate_price_sample,
    validate_stock_listing
)

logger = logging.getLogger(__name__)


def normalize_price_samples(raw_rows: List[Dict[str, Any]]) -> List[PriceSample]:
    """
    Transform raw price rows into PriceSample objects.

    Order is preserved as delivered - samples are consumed positionally,
    so no re-sorting or deduplication by timestamp happens here.
    Invalid rows are skipped with a warning.

    Args:
        raw_rows: List of {'price': ..., 'lastUpdatedAt': ...} dictionaries

    Returns:
        List of PriceSample in delivery order
    """
    if not raw_rows:
        return []

    samples = []

    for index, raw in enumerate(raw_rows):
        try:
            validate_price_sample(raw)
            observed_at = date_parser.isoparse(raw['lastUpdatedAt'])
        except ValueError as e:
            # ValidationError and dateutil parse failures are both ValueErrors
            logger.warning(f"Skipping invalid price sample at position {index}: {e}")
            continue

        samples.append(PriceSample(price=float(raw['price']), observed_at=observed_at))

    return samples


def normalize_stock_listing(raw: Dict[str, Any]) -> List[Tuple[str, str]]:
    """
    Transform the listing response into (company name, ticker) pairs.

    Tickers are unique in the output: when several names map to the same
    ticker, the first listed name is kept and the rest are dropped with a
    warning.

    Args:
        raw: Decoded listing response {'stocks': {name: ticker}}

    Returns:
        List of (name, ticker) tuples in listing order, one per ticker

    Raises:
        ValidationError: If the listing is malformed
    """
    validate_stock_listing(raw)

    listing = []
    seen = {}

    for name, ticker in raw['stocks'].items():
        if ticker in seen:
            logger.warning(f"Duplicate ticker {ticker} for {name!r}, keeping {seen[ticker]!r}")
            continue
        seen[ticker] = name
        listing.append((name, ticker))

    return listing
