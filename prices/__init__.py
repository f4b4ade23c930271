"""Price series sources and live-to-synthetic fallback."""
import logging

from models.enums import PriceSource
from models.simulation import PriceSeries
from prices.errors import PriceDataUnavailable
from prices.synthetic import generate_series
from prices.yahoo_chart import YahooChartClient
from prices.yfinance_client import YFinanceClient
from utils.constants import DEFAULT_SYMBOL, MIN_LIVE_POINTS, SYNTHETIC_SEED

logger = logging.getLogger("dcasim.prices")

SOURCE_FACTORIES = {
    PriceSource.YFINANCE: lambda cfg: YFinanceClient(),
    PriceSource.YAHOO_CHART: lambda cfg: YahooChartClient(timeout=cfg.get("timeout", 15)),
}


class PriceSeriesProvider:
    def __init__(self, config=None, sources=None):
        cfg = (config or {}).get("provider", {})
        self.symbol = cfg.get("symbol", DEFAULT_SYMBOL)
        self.min_points = cfg.get("min_points", MIN_LIVE_POINTS)
        self.seed = cfg.get("seed", SYNTHETIC_SEED)
        if sources is None:
            names = cfg.get("sources", [PriceSource.YFINANCE.value, PriceSource.YAHOO_CHART.value])
            sources = [SOURCE_FACTORIES[PriceSource(n)](cfg) for n in names]
        self.sources = sources

    def get_price_series(self, symbol, start_date, end_date):
        """Return the first live series any source yields; raise if none does."""
        errors = []
        for source in self.sources:
            try:
                points = source.get_daily_prices(symbol, start_date, end_date)
            except PriceDataUnavailable as e:
                logger.warning(f"{source.name} unavailable: {e}")
                errors.append(f"{source.name}: {e}")
                continue
            if points:
                return PriceSeries(points=tuple(points), source=PriceSource(source.name), symbol=symbol)
            errors.append(f"{source.name}: empty series")
        raise PriceDataUnavailable(f"No live data for {symbol}: {'; '.join(errors) or 'no sources'}")

    def get_deterministic_fallback_series(self, start_date, end_date, seed=None):
        seed = self.seed if seed is None else seed
        return PriceSeries(
            points=tuple(generate_series(start_date, end_date, seed=seed)),
            source=PriceSource.SYNTHETIC,
        )

    def get_series_with_fallback(self, symbol, start_date, end_date):
        """Prefer live data; substitute the synthetic series on failure or too few points."""
        symbol = symbol or self.symbol
        try:
            series = self.get_price_series(symbol, start_date, end_date)
        except PriceDataUnavailable as e:
            reason = str(e)
        else:
            if len(series) >= self.min_points:
                return series
            reason = f"Insufficient data from {series.source.value}: {len(series)} points (< {self.min_points})"

        logger.warning(f"Using synthetic series for {symbol}: {reason}")
        fallback = self.get_deterministic_fallback_series(start_date, end_date)
        return PriceSeries(
            points=fallback.points,
            source=PriceSource.SYNTHETIC,
            symbol=symbol,
            used_fallback=True,
            reason=reason,
        )
