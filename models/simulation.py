"""Dataclasses for price series, valuations, and simulation results.

Every record here is frozen and every sequence is a tuple, so a result handed
to the CLI or web layer cannot be changed by its consumer.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from models.enums import Frequency, PriceSource


@dataclass(frozen=True)
class PricePoint:
    date: date
    close: float

    def to_dict(self):
        return {"date": self.date.isoformat(), "close": self.close}


@dataclass(frozen=True)
class ValuationPoint:
    """Mark-to-market value of both strategies on one date.

    The three ``dca_*`` fields are None until the first scheduled DCA purchase.
    From that date on they are numbers, even when the position is worth 0.
    """
    date: date
    close: float
    lump_sum_value: float
    dca_value: Optional[float] = None
    dca_units: Optional[float] = None
    dca_invested: Optional[float] = None

    @property
    def has_dca_position(self):
        return self.dca_value is not None

    def to_dict(self):
        return {
            "date": self.date.isoformat(),
            "close": self.close,
            "lump_sum_value": self.lump_sum_value,
            "dca_value": self.dca_value,
            "dca_units": self.dca_units,
            "dca_invested": self.dca_invested,
        }


@dataclass(frozen=True)
class InvestmentEvent:
    date: date
    amount_invested: float
    units_acquired: float


@dataclass(frozen=True)
class StrategyMetrics:
    final_value: float = 0.0
    total_units: float = 0.0
    cagr: float = 0.0
    total_invested: float = 0.0
    roi_pct: float = 0.0
    num_investments: int = 0
    periodic_amount: Optional[float] = None

    def to_dict(self):
        data = {
            "final_value": self.final_value,
            "total_units": self.total_units,
            "cagr": self.cagr,
            "total_invested": self.total_invested,
            "roi_pct": self.roi_pct,
            "num_investments": self.num_investments,
        }
        if self.periodic_amount is not None:
            data["periodic_amount"] = self.periodic_amount
        return data


@dataclass(frozen=True)
class SimulationResult:
    points: tuple = ()
    lump_sum: StrategyMetrics = field(default_factory=StrategyMetrics)
    dca: StrategyMetrics = field(default_factory=StrategyMetrics)
    frequency: Frequency = Frequency.MONTHLY
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def dca_advantage_pct(self):
        """DCA ROI minus Lump Sum ROI, in percentage points."""
        return self.dca.roi_pct - self.lump_sum.roi_pct

    @property
    def first_investment_date(self):
        for point in self.points:
            if point.has_dca_position:
                return point.date
        return None

    def to_dict(self, include_points=True):
        data = {
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "frequency": self.frequency.value,
            "lump_sum": self.lump_sum.to_dict(),
            "dca": self.dca.to_dict(),
            "dca_advantage_pct": self.dca_advantage_pct,
            "num_points": len(self.points),
        }
        if include_points:
            data["points"] = [p.to_dict() for p in self.points]
        return data


@dataclass(frozen=True)
class PriceSeries:
    """Provider output, tagged with where it came from."""
    points: tuple = ()
    source: PriceSource = PriceSource.SYNTHETIC
    symbol: Optional[str] = None
    used_fallback: bool = False
    reason: Optional[str] = None

    def __len__(self):
        return len(self.points)
