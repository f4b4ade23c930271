"""Yahoo Finance v8 chart endpoint client.

Queries query1 first and query2 as a backup host. Rows with a null close are
dropped; dates are shifted by the exchange's GMT offset so each sample lands
on its local trading day.
"""
import logging
from datetime import datetime, time, timedelta, timezone

from models.simulation import PricePoint
from prices.errors import PriceDataUnavailable
from utils.constants import YAHOO_CHART_HOSTS
from utils.http_client import HTTPClient, APIError

logger = logging.getLogger("dcasim.prices.yahoo_chart")


def _epoch(d):
    return int(datetime.combine(d, time.min, tzinfo=timezone.utc).timestamp())


def parse_chart_response(data):
    """Convert a chart API payload into ascending, de-duplicated PricePoints.

    Any payload that does not have the expected shape raises PriceDataUnavailable.
    """
    try:
        chart = (data or {}).get("chart") or {}
        results = chart.get("result") or []
        if not results:
            error = chart.get("error") or {}
            raise PriceDataUnavailable(f"No chart result: {error.get('description', 'empty response')}",
                                       source="yahoo_chart")

        result = results[0]
        timestamps = result.get("timestamp") or []
        quotes = ((result.get("indicators") or {}).get("quote") or [{}])[0] or {}
        closes = quotes.get("close") or []
        offset = timedelta(seconds=(result.get("meta") or {}).get("gmtoffset") or 0)

        by_date = {}
        for ts, close in zip(timestamps, closes):
            if close is None or close <= 0:
                continue
            d = (datetime.fromtimestamp(ts, tz=timezone.utc) + offset).date()
            by_date[d] = PricePoint(d, float(close))
    except (KeyError, IndexError, TypeError, AttributeError, ValueError, OverflowError, OSError) as e:
        raise PriceDataUnavailable(f"Malformed chart response: {e}", source="yahoo_chart") from e
    return [by_date[d] for d in sorted(by_date)]


class YahooChartClient:
    name = "yahoo_chart"

    def __init__(self, hosts=YAHOO_CHART_HOSTS, timeout=15):
        self.clients = [HTTPClient(base_url=host, timeout=timeout) for host in hosts]

    def get_daily_prices(self, symbol, start_date, end_date):
        if end_date <= start_date:
            return []

        params = {
            "period1": _epoch(start_date),
            "period2": _epoch(end_date + timedelta(days=1)),
            "interval": "1d",
            "events": "history",
        }
        errors = []
        for client in self.clients:
            try:
                data = client.get(f"/v8/finance/chart/{symbol}", params=params)
                points = parse_chart_response(data)
            except APIError as e:
                logger.warning(f"Chart request to {client.base_url} failed: {e}")
                errors.append(str(e))
                continue
            logger.info(f"yahoo_chart: fetched {len(points)} days of {symbol} from {client.base_url}")
            return points

        raise PriceDataUnavailable(f"All chart hosts failed for {symbol}: {'; '.join(errors)}",
                                   source=self.name)
