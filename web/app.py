"""
Flask JSON API for the Lump Sum vs DCA simulator.

API endpoints (consumed by a chart front end):
  GET /api/simulate   Run a simulation; result, metrics and chart series
  GET /api/schedule   DCA investment dates for a range and frequency
  GET /api/health     Liveness and configured price source

Started via: python main.py web [--port 5000] [--host 127.0.0.1]
"""
import logging
from datetime import datetime, timezone

from flask import Flask, jsonify, request

from __version__ import __version__
from dca.errors import InvalidInputError, PriceIntegrityError
from web.chart_data import prepare_comparison_data

logger = logging.getLogger("dcasim.web.app")


def create_app(config: dict, engines: dict) -> Flask:
    """
    Factory function. Receives initialized engines from main.py CLI.

    Args:
        config: Application config dict
        engines: dict with "service" (SimulationService) and "provider" (PriceSeriesProvider)
    """
    app = Flask(__name__)
    defaults = config.get("simulation", {})
    service = engines["service"]

    def _float_arg(name, default):
        raw = request.args.get(name)
        if raw is None or raw == "":
            return default
        try:
            return float(raw)
        except ValueError:
            raise InvalidInputError(f"{name} must be a number, got {raw!r}")

    def _int_arg(name):
        raw = request.args.get(name)
        if raw is None or raw == "":
            return None
        try:
            return int(raw)
        except ValueError:
            raise InvalidInputError(f"{name} must be an integer, got {raw!r}")

    def _bool_arg(name):
        return request.args.get(name, "").lower() in ("1", "true", "yes")

    @app.errorhandler(InvalidInputError)
    def handle_invalid_input(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(PriceIntegrityError)
    def handle_price_integrity(e):
        logger.error(f"Rejected price series: {e}")
        return jsonify({"error": str(e)}), 422

    @app.route("/api/health")
    def api_health():
        return jsonify({
            "status": "ok",
            "version": __version__,
            "symbol": engines["provider"].symbol,
            "sources": [s.name for s in engines["provider"].sources],
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })

    @app.route("/api/simulate")
    def api_simulate():
        strategy = request.args.get("strategy", "both")
        timeframe = request.args.get("timeframe", "full")

        run = service.run(
            start_date=request.args.get("start", defaults.get("start_date")),
            end_date=request.args.get("end") or None,
            lump_sum_amount=_float_arg("lump_sum", defaults.get("lump_sum_amount")),
            dca_amount=_float_arg("dca_amount", defaults.get("dca_amount")),
            frequency=request.args.get("frequency", defaults.get("frequency", "monthly")),
            strategy=strategy,
            symbol=request.args.get("symbol") or None,
            synthetic=_bool_arg("synthetic"),
            seed=_int_arg("seed"),
        )
        try:
            chart = prepare_comparison_data(run.result, timeframe, strategy)
        except ValueError:
            raise InvalidInputError(f"Unknown timeframe: {timeframe!r}")

        resp = run.to_dict(include_points=_bool_arg("points"))
        resp["chart"] = chart
        return jsonify(resp)

    @app.route("/api/schedule")
    def api_schedule():
        dates, series = service.schedule(
            start_date=request.args.get("start", defaults.get("start_date")),
            end_date=request.args.get("end") or None,
            frequency=request.args.get("frequency", defaults.get("frequency", "monthly")),
            symbol=request.args.get("symbol") or None,
            synthetic=_bool_arg("synthetic"),
            seed=_int_arg("seed"),
        )
        return jsonify({
            "dates": [p.date.isoformat() for p in dates],
            "closes": [p.close for p in dates],
            "count": len(dates),
            "source": series.source.value,
            "used_fallback": series.used_fallback,
        })

    return app
