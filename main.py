#!/usr/bin/env python3
"""Lump Sum vs DCA Simulator - CLI Entry Point."""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

import click
from rich.console import Console
from rich.table import Table

from __version__ import __version__

console = Console()

FREQUENCIES = ["monthly", "quarterly", "yearly"]
STRATEGIES = ["lump_sum", "dca", "both"]
TIMEFRAMES = ["full", "5y", "1y"]


def _init_components(config_path=None, verbose=False):
    """Lazy initialization of all components."""
    from utils.logger import setup_logging
    from config import load_config
    from prices import PriceSeriesProvider
    from dca.service import SimulationService

    config = load_config(config_path)
    log_cfg = config.get("logging", {})
    setup_logging("DEBUG" if verbose else log_cfg.get("level", "INFO"), log_cfg.get("file"))

    provider = PriceSeriesProvider(config)
    service = SimulationService(provider, config)
    return {"config": config, "provider": provider, "service": service}


@click.group()
@click.option("--config", "config_path", default=None, help="Path to config YAML")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.version_option(__version__, prog_name="dcasim")
@click.pass_context
def cli(ctx, config_path, verbose):
    """Lump Sum vs DCA Simulator - compare investing all at once with periodic buying."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose


def _get_components(ctx):
    if "_components" not in ctx.obj:
        ctx.obj["_components"] = _init_components(ctx.obj.get("config_path"), ctx.obj.get("verbose"))
    return ctx.obj["_components"]


def _source_note(series):
    if series.used_fallback:
        console.print(f"[yellow]Using synthetic prices:[/yellow] [dim]{series.reason}[/dim]")
    else:
        label = series.symbol or "synthetic"
        console.print(f"[dim]Prices: {label} via {series.source.value} ({len(series)} days)[/dim]")


# ──────────────────────────────────────────────────────
# SIMULATE
# ──────────────────────────────────────────────────────
@cli.command()
@click.option("--start", default=None, help="Start date (YYYY-MM-DD)")
@click.option("--end", default=None, help="End date (default: today)")
@click.option("--lump-sum", "lump_sum", default=None, type=float, help="Lump sum amount")
@click.option("--dca-amount", default=None, type=float, help="Amount per DCA purchase")
@click.option("--frequency", default=None, type=click.Choice(FREQUENCIES))
@click.option("--strategy", default="both", type=click.Choice(STRATEGIES))
@click.option("--symbol", default=None, help="Ticker symbol (default from config)")
@click.option("--synthetic", is_flag=True, help="Skip live data and use the seeded synthetic series")
@click.option("--seed", default=None, type=int, help="Seed for the synthetic series")
@click.option("--timeframe", default="full", type=click.Choice(TIMEFRAMES), help="Window for --show-points")
@click.option("--show-points", is_flag=True, help="Print month-end valuations")
@click.pass_context
def simulate(ctx, start, end, lump_sum, dca_amount, frequency, strategy, symbol, synthetic, seed,
             timeframe, show_points):
    """Run a Lump Sum vs DCA simulation."""
    c = _get_components(ctx)
    from dca.errors import SimulationError
    from utils.formatters import format_money, format_pct, format_units

    sim_cfg = c["config"]["simulation"]
    try:
        run = c["service"].run(
            start or sim_cfg["start_date"], end, lump_sum, dca_amount, frequency,
            strategy=strategy, symbol=symbol, synthetic=synthetic, seed=seed,
        )
    except SimulationError as e:
        console.print(f"[red]Error: {e}[/red]")
        ctx.exit(1)

    _source_note(run.series)
    result = run.result
    cur = sim_cfg.get("currency_symbol", "₹")
    show_ls = strategy in ("lump_sum", "both")
    show_dca = strategy in ("dca", "both")

    table = Table(title=f"Lump Sum vs DCA: {result.start_date} to {result.end_date}", show_header=True)
    table.add_column("Metric", style="dim")
    if show_ls:
        table.add_column("Lump Sum")
    if show_dca:
        table.add_column(f"DCA ({result.frequency.value})")

    def row(label, ls_value, dca_value):
        cells = [label]
        if show_ls:
            cells.append(ls_value)
        if show_dca:
            cells.append(dca_value)
        table.add_row(*cells)

    ls, dca = result.lump_sum, result.dca
    row("Total Invested", format_money(ls.total_invested, cur), format_money(dca.total_invested, cur))
    row("Final Value", format_money(ls.final_value, cur), format_money(dca.final_value, cur))
    row("ROI", format_pct(ls.roi_pct, with_color=True), format_pct(dca.roi_pct, with_color=True))
    row("CAGR", format_pct(ls.cagr, with_color=True), format_pct(dca.cagr, with_color=True))
    row("Units Held", format_units(ls.total_units), format_units(dca.total_units))
    row("# Buys", str(ls.num_investments), str(dca.num_investments))
    console.print(table)

    if show_ls and show_dca:
        adv = result.dca_advantage_pct
        console.print(f"DCA {'wins' if adv > 0 else 'loses'} by {abs(adv):.1f} ROI points")

    if show_points:
        _print_month_ends(result, timeframe, cur, show_ls, show_dca)


def _print_month_ends(result, timeframe, cur, show_ls, show_dca):
    from dca.scheduler import month_end_samples
    from web.chart_data import filter_timeframe
    from utils.formatters import format_money

    points = month_end_samples(filter_timeframe(result.points, timeframe))
    table = Table(title=f"Month-end valuations ({timeframe})", show_header=True)
    table.add_column("Date", style="dim")
    table.add_column("Close")
    if show_ls:
        table.add_column("Lump Sum")
    if show_dca:
        table.add_column("DCA")
    for p in points:
        cells = [p.date.isoformat(), f"{p.close:,.2f}"]
        if show_ls:
            cells.append(format_money(p.lump_sum_value, cur))
        if show_dca:
            cells.append(format_money(p.dca_value, cur) if p.has_dca_position else "[dim]-[/dim]")
        table.add_row(*cells)
    console.print(table)


# ──────────────────────────────────────────────────────
# SCHEDULE
# ──────────────────────────────────────────────────────
@cli.command()
@click.option("--start", required=True, help="Start date (YYYY-MM-DD)")
@click.option("--end", default=None, help="End date (default: today)")
@click.option("--frequency", default=None, type=click.Choice(FREQUENCIES))
@click.option("--symbol", default=None, help="Ticker symbol")
@click.option("--synthetic", is_flag=True, help="Use the seeded synthetic series")
@click.option("--seed", default=None, type=int)
@click.pass_context
def schedule(ctx, start, end, frequency, symbol, synthetic, seed):
    """List DCA investment dates (last trading day of each period)."""
    c = _get_components(ctx)
    from dca.errors import SimulationError

    try:
        dates, series = c["service"].schedule(start, end, frequency, symbol, synthetic, seed)
    except SimulationError as e:
        console.print(f"[red]Error: {e}[/red]")
        ctx.exit(1)

    _source_note(series)
    table = Table(title=f"Investment dates ({len(dates)})", show_header=True)
    table.add_column("#", style="dim")
    table.add_column("Date")
    table.add_column("Close")
    for i, p in enumerate(dates, 1):
        table.add_row(str(i), p.date.isoformat(), f"{p.close:,.2f}")
    console.print(table)


# ──────────────────────────────────────────────────────
# PRICES
# ──────────────────────────────────────────────────────
@cli.command()
@click.option("--start", required=True, help="Start date (YYYY-MM-DD)")
@click.option("--end", default=None, help="End date (default: today)")
@click.option("--symbol", default=None, help="Ticker symbol")
@click.option("--synthetic", is_flag=True, help="Use the seeded synthetic series")
@click.option("--seed", default=None, type=int)
@click.pass_context
def prices(ctx, start, end, symbol, synthetic, seed):
    """Summarize the price series a simulation would use."""
    c = _get_components(ctx)
    from datetime import date
    from dca.engine import parse_date
    from dca.errors import SimulationError

    try:
        start_d = parse_date(start, "start")
        end_d = parse_date(end, "end") if end else date.today()
    except SimulationError as e:
        console.print(f"[red]Error: {e}[/red]")
        ctx.exit(1)

    provider = c["provider"]
    if synthetic:
        series = provider.get_deterministic_fallback_series(start_d, end_d, seed=seed)
    else:
        series = provider.get_series_with_fallback(symbol, start_d, end_d)
    _source_note(series)

    if not series.points:
        console.print("[dim]No price data in range.[/dim]")
        return
    closes = [p.close for p in series.points]
    console.print(f"  First: {series.points[0].date} {closes[0]:,.2f}")
    console.print(f"  Last:  {series.points[-1].date} {closes[-1]:,.2f}")
    console.print(f"  Min: {min(closes):,.2f}  Max: {max(closes):,.2f}  Days: {len(closes)}")


# ──────────────────────────────────────────────────────
# WEB
# ──────────────────────────────────────────────────────
@cli.command()
@click.option("--host", default=None, help="Bind address")
@click.option("--port", default=None, type=int, help="Port")
@click.option("--debug", is_flag=True, help="Flask debug mode")
@click.pass_context
def web(ctx, host, port, debug):
    """Start the JSON API server."""
    c = _get_components(ctx)
    from web.app import create_app

    web_cfg = c["config"].get("web", {})
    host = host or web_cfg.get("host", "127.0.0.1")
    port = port or web_cfg.get("port", 5000)
    app = create_app(c["config"], {"service": c["service"], "provider": c["provider"]})
    console.print(f"[bold]Serving on http://{host}:{port}[/bold]")
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    cli()
