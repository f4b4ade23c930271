"""
Chart data preparation for the comparison view.

Functions here take a SimulationResult and return plain dicts/lists for a
chart client. Slicing to a display window happens here, never in the engine.
"""
import logging
from datetime import date

from models.enums import StrategyType, Timeframe

logger = logging.getLogger("dcasim.web.chart_data")


def _years_before(d, years):
    try:
        return d.replace(year=d.year - years)
    except ValueError:
        # Feb 29 in a leap year
        return date(d.year - years, 2, 28)


def filter_timeframe(points, timeframe=Timeframe.FULL):
    """Keep points inside the window ending at the last point's date."""
    timeframe = Timeframe(timeframe)
    if not points or timeframe.years is None:
        return tuple(points)
    cutoff = _years_before(points[-1].date, timeframe.years)
    return tuple(p for p in points if p.date >= cutoff)


def prepare_comparison_data(result, timeframe=Timeframe.FULL, strategy=StrategyType.BOTH):
    """
    Build the series for a Lump Sum vs DCA chart.

    Args:
        result: SimulationResult from the engine
        timeframe: full, 5y or 1y window
        strategy: which strategy lines to include

    Returns:
        dict with keys: dates, close, timeframe, and lump_sum / dca series for
        the selected strategies. DCA values are None before the first purchase.
    """
    strategy = StrategyType(strategy)
    points = filter_timeframe(result.points, timeframe)

    data = {
        "timeframe": Timeframe(timeframe).value,
        "dates": [p.date.isoformat() for p in points],
        "close": [p.close for p in points],
    }
    if strategy.includes_lump_sum:
        data["lump_sum"] = {
            "values": [p.lump_sum_value for p in points],
            "final_value": result.lump_sum.final_value,
            "cagr": result.lump_sum.cagr,
        }
    if strategy.includes_dca:
        data["dca"] = {
            "values": [p.dca_value for p in points],
            "invested": [p.dca_invested for p in points],
            "final_value": result.dca.final_value,
            "cagr": result.dca.cagr,
        }
    logger.debug(f"Prepared {len(points)} chart points ({data['timeframe']})")
    return data
