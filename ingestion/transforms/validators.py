"""
Core validators for raw price samples.
Pure functions - no IO, network, or side effects.
"""

import math
from typing import Dict, Any


class ValidationError(ValueError):
    """Raised when data validation fails."""
    pass


def validate_price_sample(raw: Dict[str, Any]) -> None:
    """
    Validate a raw price sample from the stock service.

    Args:
        raw: Dictionary with 'price' and 'lastUpdatedAt' keys

    Raises:
        ValidationError: If validation fails
    """
    if not isinstance(raw, dict):
        raise ValidationError(f"price sample must be dict, got {type(raw)}")

    required_keys = {'price', 'lastUpdatedAt'}

    missing = required_keys - set(raw.keys())
    if missing:
        raise ValidationError(f"Missing required keys: {missing}")

    price = raw['price']

    # bool is an int subclass, but never a price
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        raise ValidationError(f"price must be numeric, got {type(price)}")

    if not math.isfinite(price):
        raise ValidationError(f"price must be finite, got {price}")

    if not isinstance(raw['lastUpdatedAt'], str) or not raw['lastUpdatedAt'].strip():
        raise ValidationError("lastUpdatedAt must be non-empty string")


def validate_stock_listing(raw: Any) -> None:
    """
    Validate the stock listing response.

    Args:
        raw: Decoded JSON from the listing endpoint

    Raises:
        ValidationError: If the listing is malformed
    """
    if not isinstance(raw, dict) or 'stocks' not in raw:
        raise ValidationError("listing response missing 'stocks' section")

    stocks = raw['stocks']
    if not isinstance(stocks, dict):
        raise ValidationError(f"'stocks' must be a mapping, got {type(stocks)}")

    for name, ticker in stocks.items():
        if not isinstance(ticker, str) or not ticker:
            raise ValidationError(f"ticker for {name!r} must be non-empty string")
