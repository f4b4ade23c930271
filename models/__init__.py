"""Data models."""
from models.enums import Frequency, StrategyType, Timeframe, PriceSource
from models.simulation import (
    PricePoint, ValuationPoint, InvestmentEvent, StrategyMetrics, SimulationResult, PriceSeries,
)
