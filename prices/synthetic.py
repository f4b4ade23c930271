"""Deterministic synthetic index series.

Weekdays only, starting at 5000 with a daily move drawn from a seeded linear
congruential generator in roughly [-1.3%, +1.7%]. The same seed and date range
always give the same series.
"""
import logging
from datetime import timedelta

from models.simulation import PricePoint
from utils.constants import (
    SYNTHETIC_START_PRICE, SYNTHETIC_SEED,
    LCG_MULTIPLIER, LCG_INCREMENT, LCG_MODULUS,
)

logger = logging.getLogger("dcasim.prices.synthetic")


class SeededRandom:
    """Linear congruential generator yielding floats in [0, 1)."""

    def __init__(self, seed=SYNTHETIC_SEED):
        self.state = seed

    def random(self):
        self.state = (self.state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self.state / LCG_MODULUS


def generate_series(start_date, end_date, seed=SYNTHETIC_SEED, start_price=SYNTHETIC_START_PRICE):
    rng = SeededRandom(seed)
    price = start_price
    points = []
    current = start_date
    while current <= end_date:
        if current.weekday() < 5:
            daily_change = (rng.random() * 3 - 1.3) / 100
            price = price * (1 + daily_change)
            points.append(PricePoint(current, round(price, 2)))
        current += timedelta(days=1)
    logger.debug(f"Generated {len(points)} synthetic points (seed={seed})")
    return points
