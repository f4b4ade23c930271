"""Summary statistics for simulated strategies.

Years are measured as elapsed calendar days / 365.25 for both strategies.
Ill-posed ratios (no elapsed time, nothing invested, nothing left) return 0
instead of raising.
"""
import logging

from models.simulation import StrategyMetrics
from utils.constants import DAYS_PER_YEAR

logger = logging.getLogger("dcasim.dca.metrics")


def years_between(start_date, end_date):
    return (end_date - start_date).days / DAYS_PER_YEAR


def calculate_cagr(total_invested, final_value, years):
    """Compound annual growth rate as a percentage."""
    if years <= 0 or total_invested <= 0 or final_value <= 0:
        return 0.0
    return ((final_value / total_invested) ** (1 / years) - 1) * 100


def calculate_roi(total_invested, final_value):
    if total_invested <= 0:
        return 0.0
    return (final_value - total_invested) / total_invested * 100


class MetricsCalculator:
    def __init__(self, points):
        if not points:
            raise ValueError("Cannot compute metrics for an empty valuation series")
        self.points = points
        self.first = points[0]
        self.last = points[-1]
        self.years = years_between(self.first.date, self.last.date)

    def _build(self, final_value, total_invested, num_investments, periodic_amount=None):
        # Units derived from the final mark-to-market value
        total_units = final_value / self.last.close
        return StrategyMetrics(
            final_value=final_value,
            total_units=total_units,
            cagr=calculate_cagr(total_invested, final_value, self.years),
            total_invested=total_invested,
            roi_pct=calculate_roi(total_invested, final_value),
            num_investments=num_investments,
            periodic_amount=periodic_amount,
        )

    def lump_sum_metrics(self, lump_sum_amount):
        return self._build(self.last.lump_sum_value, lump_sum_amount, 1)

    def dca_metrics(self, events, dca_amount):
        final_value = self.last.dca_value if self.last.dca_value is not None else 0.0
        total_invested = sum(e.amount_invested for e in events)
        metrics = self._build(final_value, total_invested, len(events), periodic_amount=dca_amount)
        logger.debug(f"DCA: {len(events)} buys, invested {total_invested:,.2f}, "
                     f"CAGR {metrics.cagr:.2f}% over {self.years:.2f}y")
        return metrics
