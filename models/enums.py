"""Enums for strategies, investment frequency, display windows, and price sources."""
from enum import Enum


class Frequency(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"

    @property
    def months(self):
        """Number of month-end samples between two investments."""
        return {"monthly": 1, "quarterly": 3, "yearly": 12}[self.value]


class StrategyType(str, Enum):
    LUMP_SUM = "lump_sum"
    DCA = "dca"
    BOTH = "both"

    @property
    def includes_lump_sum(self):
        return self in (StrategyType.LUMP_SUM, StrategyType.BOTH)

    @property
    def includes_dca(self):
        return self in (StrategyType.DCA, StrategyType.BOTH)


class Timeframe(str, Enum):
    FULL = "full"
    FIVE_YEARS = "5y"
    ONE_YEAR = "1y"

    @property
    def years(self):
        return {"full": None, "5y": 5, "1y": 1}[self.value]


class PriceSource(str, Enum):
    YFINANCE = "yfinance"
    YAHOO_CHART = "yahoo_chart"
    SYNTHETIC = "synthetic"
