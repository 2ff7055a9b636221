"""
Tests for normalizer functions - stock service data to canonical shape.
"""

from datetime import datetime, timezone

import pytest

from analysis.models import PriceSample
from ingestion.transforms.normalizers import (
    normalize_price_samples,
    normalize_stock_listing
)
from ingestion.transforms.validators import ValidationError


class TestNormalizePriceSamples:
    """Tests for normalize_price_samples function."""

    def test_normalize_basic(self):
        raw = [
            {'price': 231.95, 'lastUpdatedAt': '2025-05-08T04:11:42Z'},
            {'price': 232.10, 'lastUpdatedAt': '2025-05-08T04:12:42Z'}
        ]

        result = normalize_price_samples(raw)

        assert result == [
            PriceSample(price=231.95, observed_at=datetime(2025, 5, 8, 4, 11, 42, tzinfo=timezone.utc)),
            PriceSample(price=232.10, observed_at=datetime(2025, 5, 8, 4, 12, 42, tzinfo=timezone.utc))
        ]

    def test_delivery_order_kept(self):
        """Samples are consumed positionally, so no re-sorting happens."""
        raw = [
            {'price': 2.0, 'lastUpdatedAt': '2025-05-08T04:15:00Z'},
            {'price': 1.0, 'lastUpdatedAt': '2025-05-08T04:10:00Z'}
        ]

        result = normalize_price_samples(raw)

        assert [s.price for s in result] == [2.0, 1.0]

    def test_integer_price_becomes_float(self):
        result = normalize_price_samples([{'price': 100, 'lastUpdatedAt': '2025-05-08T04:11:42Z'}])

        assert isinstance(result[0].price, float)

    def test_invalid_rows_skipped(self, caplog):
        """Bad rows are dropped with a warning, good rows survive."""
        raw = [
            {'price': 'n/a', 'lastUpdatedAt': '2025-05-08T04:11:42Z'},
            {'price': 10.0, 'lastUpdatedAt': 'not a timestamp'},
            {'price': 11.0, 'lastUpdatedAt': '2025-05-08T04:12:42Z'}
        ]

        with caplog.at_level('WARNING'):
            result = normalize_price_samples(raw)

        assert [s.price for s in result] == [11.0]
        assert 'position 0' in caplog.text
        assert 'position 1' in caplog.text

    def test_empty(self):
        assert normalize_price_samples([]) == []


class TestNormalizeStockListing:
    """Tests for normalize_stock_listing function."""

    def test_listing_order(self):
        raw = {
            'stocks': {
                'Advanced Micro Devices, Inc.': 'AMD',
                'Nvidia Corporation': 'NVDA',
                'Apple Inc.': 'AAPL'
            }
        }

        assert normalize_stock_listing(raw) == [
            ('Advanced Micro Devices, Inc.', 'AMD'),
            ('Nvidia Corporation', 'NVDA'),
            ('Apple Inc.', 'AAPL')
        ]

    def test_duplicate_ticker_keeps_first_name(self, caplog):
        """Each ticker appears once; the first listed name wins."""
        raw = {
            'stocks': {
                'Alphabet Inc. Class A': 'GOOGL',
                'Nvidia Corporation': 'NVDA',
                'Alphabet Inc.': 'GOOGL'
            }
        }

        with caplog.at_level('WARNING'):
            result = normalize_stock_listing(raw)

        assert result == [
            ('Alphabet Inc. Class A', 'GOOGL'),
            ('Nvidia Corporation', 'NVDA')
        ]
        assert 'Duplicate ticker GOOGL' in caplog.text

    def test_malformed_listing(self):
        with pytest.raises(ValidationError):
            normalize_stock_listing({'stocks': None})
