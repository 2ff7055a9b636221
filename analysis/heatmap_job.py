"""
Orchestrated heatmap job - stock service to correlation summary.
Fetches series concurrently, calls the pure matrix builder, optionally
persists the summary JSON.
"""

import os
import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv

from analysis.models import InstrumentSeries
from analysis.matrix_builder import build_correlation_matrix
from analysis.calculations.descriptive import calculate_descriptive_stats
from ingestion.providers.stock_service_adapter import (
    fetch_stock_listing,
    fetch_price_history,
    StockServiceError
)
from ingestion.transforms.normalizers import normalize_price_samples, normalize_stock_listing
from ingestion.transforms.validators import ValidationError

load_dotenv()

logger = logging.getLogger(__name__)

PRESET_INTERVALS = (15, 30, 60, 120, 240)


class HeatmapJobError(Exception):
    """Raised when the heatmap job cannot proceed."""
    pass


class IntervalError(ValueError):
    """Raised when a custom interval cannot be parsed."""
    pass


def parse_interval(text: str) -> int:
    """
    Parse a custom lookback interval in minutes.

    Args:
        text: User input such as '45'

    Returns:
        Positive number of minutes

    Raises:
        IntervalError: If the input is not a positive integer
    """
    try:
        value = int(str(text).strip())
    except ValueError:
        raise IntervalError(f"Interval must be a whole number of minutes, got {text!r}")

    if value <= 0:
        raise IntervalError(f"Interval must be positive, got {value}")

    return value


@dataclass
class HeatmapConfig:
    """Configuration for the correlation heatmap job."""
    minutes: Optional[int] = None
    max_instruments: Optional[int] = None
    fetch_workers: Optional[int] = None
    output_path: Optional[Path] = None

    def __post_init__(self):
        """Validate and fill defaults from the environment."""
        if self.minutes is None:
            self.minutes = int(os.getenv('HEATMAP_DEFAULT_MINUTES', '60'))

        if self.max_instruments is None:
            self.max_instruments = int(os.getenv('HEATMAP_MAX_INSTRUMENTS', '10'))

        if self.fetch_workers is None:
            self.fetch_workers = int(os.getenv('HEATMAP_FETCH_WORKERS', '8'))

        if self.minutes <= 0:
            raise ValueError("minutes must be positive")

        # 0 means no limit on the number of instruments
        if self.max_instruments < 0:
            raise ValueError("max_instruments must be >= 0")

        if self.fetch_workers < 1:
            raise ValueError("fetch_workers must be >= 1")

        if self.output_path is not None:
            self.output_path = Path(self.output_path)


def fetch_instruments(
    listing: List[Tuple[str, str]],
    minutes: int,
    workers: int = 8
) -> Tuple[List[InstrumentSeries], List[str]]:
    """
    Fetch and normalize price history for every listed instrument.

    Failed fetches are substituted by an empty series so the instrument
    keeps its position in the output.

    Args:
        listing: (company name, ticker) pairs in display order
        minutes: Lookback window passed through to the stock service
        workers: Number of concurrent fetches

    Returns:
        Tuple of (instruments in listing order, tickers whose fetch failed)
    """
    def fetch_one(entry: Tuple[str, str]) -> InstrumentSeries:
        name, ticker = entry
        raw_rows = fetch_price_history(ticker, minutes)
        return InstrumentSeries(id=ticker, samples=normalize_price_samples(raw_rows), name=name)

    instruments = []
    failed = []

    with ThreadPoolExecutor(max_workers=max(1, workers)) as executor:
        futures = [executor.submit(fetch_one, entry) for entry in listing]

        # Collect in submission order to keep positions stable
        for (name, ticker), future in zip(listing, futures):
            try:
                instruments.append(future.result())
            except StockServiceError as e:
                logger.warning(f"Price fetch failed for {ticker}, using empty series: {e}")
                failed.append(ticker)
                instruments.append(InstrumentSeries(id=ticker, samples=[], name=name))

    return instruments, failed


def run_heatmap(config: HeatmapConfig) -> Dict[str, Any]:
    """
    Run the complete correlation heatmap job.

    Stages:
    1. Fetch and normalize the stock listing
    2. Keep the first ``max_instruments`` entries
    3. Fetch every price series concurrently
    4. Build statistics and the correlation matrix
    5. Optionally write the summary JSON

    Args:
        config: Job configuration

    Returns:
        Job summary dictionary

    Raises:
        HeatmapJobError: If the stock listing cannot be fetched
    """
    start_time = datetime.now()

    try:
        listing = normalize_stock_listing(fetch_stock_listing())
    except (StockServiceError, ValidationError) as e:
        logger.error(f"Stock listing unavailable: {e}")
        raise HeatmapJobError(f"Failed to fetch stock listing: {e}") from e

    if config.max_instruments:
        listing = listing[:config.max_instruments]

    logger.info(f"Fetching {len(listing)} instruments over last {config.minutes} minutes")

    instruments, failed = fetch_instruments(listing, config.minutes, config.fetch_workers)
    result = build_correlation_matrix(instruments)

    summary = {
        'status': 'completed',
        'minutes': config.minutes,
        'tickers': [inst.id for inst in instruments],
        'names': {inst.id: inst.name for inst in instruments},
        'stats': result.to_dict()['stats'],
        'matrix': result.matrix,
        'sample_counts': {inst.id: len(inst) for inst in instruments},
        'failed_tickers': failed,
        'output_path': None,
        'calculated_at': datetime.now().isoformat(),
    }

    if config.output_path is not None:
        config.output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config.output_path, 'w') as f:
            json.dump(summary, f, indent=2, default=str)
        summary['output_path'] = str(config.output_path)
        logger.info(f"Heatmap summary written to {config.output_path}")

    summary['duration_seconds'] = (datetime.now() - start_time).total_seconds()

    return summary


def analyze_stock(ticker: str, minutes: int) -> Dict[str, Any]:
    """
    Descriptive statistics for a single instrument.

    Args:
        ticker: Stock ticker symbol
        minutes: Lookback window in minutes

    Returns:
        Dictionary with ticker, minutes, stats and normalized points

    Raises:
        StockServiceError: If the price history cannot be fetched
    """
    samples = normalize_price_samples(fetch_price_history(ticker, minutes))
    prices = [s.price for s in samples]

    return {
        'ticker': ticker,
        'minutes': minutes,
        'stats': calculate_descriptive_stats(prices),
        'points': [
            {'price': s.price, 'observed_at': s.observed_at.isoformat()}
            for s in samples
        ]
    }
