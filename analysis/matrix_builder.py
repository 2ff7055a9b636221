"""
Matrix builder - composes descriptive statistics and pairwise correlation
across a list of instruments.
Pure function: no IO, no state kept between calls.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, List, Optional, Union

from analysis.models import CorrelationResult, InstrumentSeries, InstrumentStats, PriceSample
from analysis.calculations.descriptive import average, standard_deviation
from analysis.calculations.correlation import correlation

logger = logging.getLogger(__name__)


InstrumentInput = Union[InstrumentSeries, dict, tuple]


def build_correlation_matrix(
    instruments: Iterable[InstrumentInput],
    max_workers: Optional[int] = None
) -> CorrelationResult:
    """
    Compute per-instrument statistics and the full correlation matrix.

    Every ordered pair (i, j) is computed on its own; the diagonal is fixed
    to 1. Empty or single-sample series never raise - they resolve to 0
    through the descriptive and correlation policies.

    Args:
        instruments: Ordered instruments as InstrumentSeries objects,
            (id, prices) tuples or dicts with 'id' and 'prices'/'priceSeries';
            price elements may be numbers, PriceSample objects or raw rows
        max_workers: Compute matrix rows on a thread pool when > 1

    Returns:
        CorrelationResult with stats and matrix in input order
    """
    ids, price_lists = _extract_price_lists(instruments)

    stats = [
        InstrumentStats(
            id=instrument_id,
            average=average(prices),
            std_dev=standard_deviation(prices)
        )
        for instrument_id, prices in zip(ids, price_lists)
    ]

    def build_row(i: int) -> List[float]:
        row = []
        for j in range(len(price_lists)):
            if i == j:
                row.append(1.0)
            else:
                row.append(correlation(price_lists[i], price_lists[j]))
        return row

    if max_workers is not None and max_workers > 1 and len(price_lists) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            # map() yields rows in submission order
            matrix = list(executor.map(build_row, range(len(price_lists))))
    else:
        matrix = [build_row(i) for i in range(len(price_lists))]

    logger.debug(f"Built {len(matrix)}x{len(matrix)} correlation matrix")

    return CorrelationResult(stats=stats, matrix=matrix)


def _extract_price_lists(instruments: Iterable[InstrumentInput]):
    """Split instrument inputs into parallel id and price lists."""
    ids = []
    price_lists = []

    for instrument in instruments:
        instrument_id, prices = _instrument_prices(instrument)
        ids.append(instrument_id)
        price_lists.append(prices)

    return ids, price_lists


def _instrument_prices(instrument: InstrumentInput):
    """Drop timestamps and return (id, prices) for one instrument."""
    if isinstance(instrument, InstrumentSeries):
        return instrument.id, instrument.prices()

    if isinstance(instrument, dict):
        if 'prices' in instrument:
            return instrument['id'], [_sample_price(p) for p in instrument['prices']]
        series = instrument.get('priceSeries') or []
        return instrument['id'], [_sample_price(s) for s in series]

    if isinstance(instrument, tuple) and len(instrument) == 2:
        instrument_id, prices = instrument
        return instrument_id, [_sample_price(p) for p in prices]

    raise TypeError(f"Unsupported instrument input: {type(instrument)}")


def _sample_price(sample: Any) -> float:
    """Price of a plain number, a PriceSample or a raw {'price': ...} row."""
    if isinstance(sample, PriceSample):
        return sample.price
    if isinstance(sample, dict):
        return float(sample['price'])
    return float(sample)
