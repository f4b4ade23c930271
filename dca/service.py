"""Simulation runs wired to a price provider.

This is the engine's caller: it decides between live and synthetic data and
hands the chosen series to the pure engine.
"""
import logging
from dataclasses import dataclass
from datetime import date

from dca.engine import simulate, parse_date
from dca.errors import InvalidInputError
from dca.scheduler import get_investment_dates
from models.enums import Frequency, StrategyType
from models.simulation import PriceSeries, SimulationResult
from utils.constants import DEFAULT_DCA_AMOUNT, DEFAULT_LUMP_SUM, DEFAULT_START_DATE

logger = logging.getLogger("dcasim.dca.service")


@dataclass(frozen=True)
class SimulationRun:
    result: SimulationResult
    series: PriceSeries

    def to_dict(self, include_points=True):
        data = self.result.to_dict(include_points=include_points)
        data["source"] = self.series.source.value
        data["symbol"] = self.series.symbol
        data["used_fallback"] = self.series.used_fallback
        data["fallback_reason"] = self.series.reason
        return data


class SimulationService:
    def __init__(self, provider, config=None):
        self.provider = provider
        self.defaults = (config or {}).get("simulation", {})

    def _load_series(self, start_date, end_date, symbol=None, synthetic=False, seed=None):
        if synthetic:
            return self.provider.get_deterministic_fallback_series(start_date, end_date, seed=seed)
        return self.provider.get_series_with_fallback(symbol, start_date, end_date)

    def _dates(self, start_date, end_date):
        start_date = parse_date(start_date or self.defaults.get("start_date", DEFAULT_START_DATE), "start_date")
        end_date = parse_date(end_date, "end_date") if end_date else date.today()
        if start_date >= end_date:
            raise InvalidInputError("Start date must be before end date")
        return start_date, end_date

    def run(self, start_date, end_date=None, lump_sum_amount=None, dca_amount=None,
            frequency=None, strategy=StrategyType.BOTH, symbol=None, synthetic=False, seed=None):
        start_date, end_date = self._dates(start_date, end_date)
        if lump_sum_amount is None:
            lump_sum_amount = self.defaults.get("lump_sum_amount", DEFAULT_LUMP_SUM)
        if dca_amount is None:
            dca_amount = self.defaults.get("dca_amount", DEFAULT_DCA_AMOUNT)
        frequency = frequency or self.defaults.get("frequency", Frequency.MONTHLY.value)

        series = self._load_series(start_date, end_date, symbol, synthetic, seed)
        if series.used_fallback:
            logger.info(f"Simulation uses synthetic prices ({series.reason})")
        result = simulate(lump_sum_amount, dca_amount, frequency, start_date, end_date,
                          series.points, strategy=strategy)
        return SimulationRun(result=result, series=series)

    def schedule(self, start_date, end_date=None, frequency=None, symbol=None, synthetic=False, seed=None):
        """Investment dates that a run with the same arguments would buy on."""
        start_date, end_date = self._dates(start_date, end_date)
        frequency = frequency or self.defaults.get("frequency", Frequency.MONTHLY.value)
        try:
            Frequency(frequency)
        except ValueError:
            raise InvalidInputError(f"Unknown frequency: {frequency!r}")
        series = self._load_series(start_date, end_date, symbol, synthetic, seed)
        points = [p for p in series.points if start_date <= p.date <= end_date]
        return get_investment_dates(points, frequency), series
