"""Yahoo Finance client for daily index closes via the yfinance library.

No API key required. The end date passed to yfinance is exclusive, so one day
is added to make the requested range inclusive.
"""
import logging
import math
from datetime import timedelta

import yfinance as yf

from models.simulation import PricePoint
from prices.errors import PriceDataUnavailable

logger = logging.getLogger("dcasim.prices.yfinance")


class YFinanceClient:
    name = "yfinance"

    def get_daily_prices(self, symbol, start_date, end_date):
        """Fetch daily closes for ``symbol`` as ascending PricePoints."""
        if end_date <= start_date:
            return []

        try:
            df = yf.Ticker(symbol).history(
                start=start_date.isoformat(),
                end=(end_date + timedelta(days=1)).isoformat(),
                interval="1d",
            )
            if df is None or df.empty:
                raise PriceDataUnavailable(f"yfinance returned no rows for {symbol}", source=self.name)

            by_date = {}
            for idx, row in df.iterrows():
                dt = idx.date() if hasattr(idx, "date") else idx
                close = float(row["Close"])
                if math.isnan(close) or close <= 0:
                    continue
                by_date[dt] = PricePoint(dt, close)
        except PriceDataUnavailable:
            raise
        except Exception as e:
            raise PriceDataUnavailable(f"yfinance fetch failed for {symbol}: {e}", source=self.name) from e

        points = [by_date[d] for d in sorted(by_date)]
        logger.info(f"yfinance: fetched {len(points)} days of {symbol} ({start_date} to {end_date})")
        return points
