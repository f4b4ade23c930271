"""Lump Sum vs DCA simulation engine."""
import logging
import math
from datetime import date

from dca.errors import InvalidInputError, PriceIntegrityError
from dca.metrics import MetricsCalculator
from dca.scheduler import InvestmentScheduler
from models.enums import Frequency, StrategyType
from models.simulation import InvestmentEvent, SimulationResult, ValuationPoint

logger = logging.getLogger("dcasim.dca.engine")


def parse_date(value, name):
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{name} must be a date or YYYY-MM-DD string, got {value!r}")


def _is_finite_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def validate_price_series(points):
    """Reject series that are unordered, duplicated, or carry a non-positive close."""
    previous = None
    for point in points:
        if not _is_finite_number(point.close) or point.close <= 0:
            raise PriceIntegrityError(f"Invalid close {point.close!r} on {point.date}", point.date)
        if previous is not None and point.date <= previous.date:
            raise PriceIntegrityError(
                f"Price dates must be strictly ascending: {point.date} follows {previous.date}",
                point.date,
            )
        previous = point


class StrategySimulator:
    def __init__(self, frequency=Frequency.MONTHLY, strategy=StrategyType.BOTH):
        try:
            self.frequency = Frequency(frequency)
        except ValueError:
            raise InvalidInputError(f"Unknown frequency: {frequency!r}")
        try:
            self.strategy = StrategyType(strategy)
        except ValueError:
            raise InvalidInputError(f"Unknown strategy: {strategy!r}")
        self.scheduler = InvestmentScheduler(self.frequency)

    def _validate_amounts(self, lump_sum_amount, dca_amount):
        if not _is_finite_number(lump_sum_amount) or lump_sum_amount <= 0:
            raise InvalidInputError("Investment amount must be greater than zero")
        if not _is_finite_number(dca_amount) or dca_amount < 0:
            raise InvalidInputError("DCA amount cannot be negative")
        if self.strategy.includes_dca and dca_amount <= 0:
            raise InvalidInputError("DCA amount must be greater than zero")

    def simulate_lump_sum(self, points, lump_sum_amount):
        """Buy once at the first close; returns (units, values)."""
        units = lump_sum_amount / points[0].close
        return units, [units * p.close for p in points]

    def simulate_dca(self, points, dca_amount):
        """Single ascending pass accumulating units on scheduled dates.

        Returns (events, per-point (value, units, invested) tuples). Entries
        before the first scheduled date are None.
        """
        scheduled = {p.date for p in self.scheduler.get_investment_dates(points)}
        events = []
        units = 0.0
        invested = 0.0
        started = False
        states = []

        for point in points:
            if point.date in scheduled:
                started = True
                if dca_amount > 0:
                    event = InvestmentEvent(point.date, dca_amount, dca_amount / point.close)
                    events.append(event)
                    units += event.units_acquired
                    invested += event.amount_invested
            if started:
                states.append((units * point.close, units, invested))
            else:
                states.append(None)
        return events, states

    def simulate(self, lump_sum_amount, dca_amount, start_date, end_date, price_series):
        start_date = parse_date(start_date, "start_date")
        end_date = parse_date(end_date, "end_date")
        if start_date >= end_date:
            raise InvalidInputError("Start date must be before end date")
        self._validate_amounts(lump_sum_amount, dca_amount)
        if not price_series:
            raise InvalidInputError("Price series is empty")

        validate_price_series(price_series)
        points = [p for p in price_series if start_date <= p.date <= end_date]
        if not points:
            raise InvalidInputError(f"No price data between {start_date} and {end_date}")

        _, lump_values = self.simulate_lump_sum(points, lump_sum_amount)
        events, dca_states = self.simulate_dca(points, dca_amount)

        valuations = []
        for point, lump_value, state in zip(points, lump_values, dca_states):
            if state is None:
                valuations.append(ValuationPoint(point.date, point.close, lump_value))
            else:
                value, units, invested = state
                valuations.append(ValuationPoint(point.date, point.close, lump_value,
                                                 dca_value=value, dca_units=units, dca_invested=invested))
        valuations = tuple(valuations)

        calc = MetricsCalculator(valuations)
        result = SimulationResult(
            points=valuations,
            lump_sum=calc.lump_sum_metrics(lump_sum_amount),
            dca=calc.dca_metrics(events, dca_amount),
            frequency=self.frequency,
            start_date=start_date,
            end_date=end_date,
        )
        logger.info(f"Simulated {len(valuations)} days ({points[0].date} to {points[-1].date}), "
                    f"{len(events)} {self.frequency.value} DCA buys")
        return result


def simulate(lump_sum_amount, dca_amount, frequency, start_date, end_date, price_series,
             strategy=StrategyType.BOTH):
    """Run both strategies over ``price_series`` and return a SimulationResult."""
    simulator = StrategySimulator(frequency, strategy)
    return simulator.simulate(lump_sum_amount, dca_amount, start_date, end_date, price_series)
