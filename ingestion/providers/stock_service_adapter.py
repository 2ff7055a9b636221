"""
Stock service adapter - fetch instrument listings and price history.
Network IO allowed here, but minimal business logic.
"""

import os
import logging
from typing import Any, Dict, List, Optional

import requests
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'http://20.244.56.144/evaluation-service'


class StockServiceError(Exception):
    """Raised when stock service operations fail."""
    pass


def fetch_stock_listing(session: Optional[requests.Session] = None) -> Dict[str, Any]:
    """
    Fetch the list of available stocks.
    Returns raw data in provider format - no normalization.

    Returns:
        Decoded response, e.g. {'stocks': {'Apple Inc.': 'AAPL', ...}}

    Raises:
        StockServiceError: If the request fails or the body is not JSON
    """
    url = f"{_base_url()}/stocks"
    return _get_json(url, params=None, session=session)


def fetch_price_history(
    ticker: str,
    minutes: int,
    session: Optional[requests.Session] = None
) -> List[Dict[str, Any]]:
    """
    Fetch price samples for a ticker over the last ``minutes`` minutes.
    Returns raw data in provider format - no normalization.

    Args:
        ticker: Stock ticker symbol (e.g., 'NVDA')
        minutes: Lookback window in minutes
        session: Optional requests session to reuse connections

    Returns:
        List of raw {'price': ..., 'lastUpdatedAt': ...} dictionaries

    Raises:
        StockServiceError: If validation or the fetch fails
    """
    _validate_ticker(ticker)
    _validate_minutes(minutes)

    url = f"{_base_url()}/stocks/{ticker}"
    data = _get_json(url, params={'minutes': minutes}, session=session)

    # Service answers with a single object when only the latest price exists
    if isinstance(data, dict):
        if 'stock' in data and isinstance(data['stock'], dict):
            return [data['stock']]
        return [data]

    if not isinstance(data, list):
        raise StockServiceError(f"Unexpected price history payload for {ticker}: {type(data)}")

    return data


def _get_json(url: str, params: Optional[Dict[str, Any]], session: Optional[requests.Session]) -> Any:
    """Issue a GET request and decode the JSON body."""
    timeout = int(os.getenv('REQUESTS_TIMEOUT_S', '30'))
    http = session or requests

    logger.debug(f"GET {url} params={params}")

    try:
        response = http.get(url, params=params, headers=_headers(), timeout=timeout)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as e:
        raise StockServiceError(f"Request to {url} failed: {e}") from e
    except ValueError as e:
        raise StockServiceError(f"Invalid JSON from {url}: {e}") from e


def _base_url() -> str:
    return os.getenv('STOCK_SERVICE_BASE_URL', DEFAULT_BASE_URL).rstrip('/')


def _headers() -> Dict[str, str]:
    headers = {'Accept': 'application/json'}

    token = os.getenv('STOCK_SERVICE_TOKEN')
    if token:
        headers['Authorization'] = f"Bearer {token}"

    return headers


def _validate_ticker(ticker: str) -> None:
    """
    Basic ticker validation.

    Raises:
        StockServiceError: If ticker is invalid
    """
    if not ticker or not isinstance(ticker, str):
        raise StockServiceError("Ticker must be non-empty string")

    if len(ticker) > 10:
        raise StockServiceError("Ticker too long (max 10 characters)")

    allowed_chars = set('ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789.-')
    if not set(ticker.upper()).issubset(allowed_chars):
        raise StockServiceError(f"Ticker contains invalid characters: {ticker}")


def _validate_minutes(minutes: int) -> None:
    if isinstance(minutes, bool) or not isinstance(minutes, int):
        raise StockServiceError(f"minutes must be integer, got {type(minutes)}")

    if minutes <= 0:
        raise StockServiceError(f"minutes must be positive, got {minutes}")
