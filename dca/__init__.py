"""Lump Sum vs DCA simulation engine."""
from dca.engine import StrategySimulator, simulate
from dca.scheduler import InvestmentScheduler, get_investment_dates
from dca.metrics import MetricsCalculator, calculate_cagr
from dca.errors import SimulationError, InvalidInputError, PriceIntegrityError
