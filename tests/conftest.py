"""Shared test fixtures."""
import os
import sys
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import date, timedelta
from models.simulation import PricePoint


@pytest.fixture
def three_month_series():
    """Month-end closes growing 10% a month."""
    return [
        PricePoint(date(2020, 1, 31), 100.0),
        PricePoint(date(2020, 2, 29), 110.0),
        PricePoint(date(2020, 3, 31), 121.0),
    ]


@pytest.fixture
def daily_series():
    """Weekday closes from 2020-01-01 through 2021-12-31.

    Simulates a decline then recovery so neither strategy trivially wins.
    """
    points = []
    d = date(2020, 1, 1)
    i = 0
    while d <= date(2021, 12, 31):
        if d.weekday() < 5:
            if i < 250:
                price = 1000 - i * 2
            else:
                price = 500 + (i - 250) * 3
            points.append(PricePoint(d, float(price)))
            i += 1
        d += timedelta(days=1)
    return points


class FakeSource:
    """Price source returning canned points or raising."""

    def __init__(self, name, points=None, error=None):
        self.name = name
        self.points = points or []
        self.error = error
        self.calls = []

    def get_daily_prices(self, symbol, start_date, end_date):
        self.calls.append((symbol, start_date, end_date))
        if self.error:
            raise self.error
        return [p for p in self.points if start_date <= p.date <= end_date]


@pytest.fixture
def fake_source():
    return FakeSource


@pytest.fixture
def test_config():
    return {
        "provider": {"symbol": "^NSEI", "sources": [], "min_points": 10, "seed": 123456789},
        "simulation": {
            "lump_sum_amount": 1000,
            "dca_amount": 100,
            "frequency": "monthly",
            "start_date": "2020-01-01",
            "currency_symbol": "₹",
        },
        "web": {"host": "127.0.0.1", "port": 5000},
        "logging": {"level": "INFO", "file": None},
    }
