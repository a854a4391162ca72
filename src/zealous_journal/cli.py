"""CLI entry point for the trading journal."""

from __future__ import annotations

import json
from datetime import date, datetime, tzinfo
from typing import Any

import click

from .core.config import Settings, load_settings
from .core.enums import InstrumentCategory
from .core.errors import JournalError
from .core.models import TradeRecord
from .observability.logger import bind_context, get_logger, setup_logging, start_run


def _echo_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, allow_nan=False))


def _parse_month(ctx: click.Context, param: click.Parameter, value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m").date()
    except ValueError:
        raise click.BadParameter(f"expected YYYY-MM, got {value!r}") from None


def _load_trades(settings: Settings, trades_file: str | None, account: str | None) -> list[TradeRecord]:
    from .storage.json_source import JsonTradeSource

    source = JsonTradeSource(trades_file or settings.trades_path)
    try:
        return source.list_trades(account)
    except JournalError as exc:
        raise click.ClickException(str(exc)) from exc


def _resolve_tz(settings: Settings) -> tzinfo | None:
    try:
        return settings.calendar.resolve_tz()
    except JournalError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="TOML config file",
)
@click.option("--log-level", default=None, help="Override the configured log level")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, log_level: str | None) -> None:
    """Zealous trading journal: position sizing and performance analytics."""
    try:
        settings = load_settings(config_path)
    except JournalError as exc:
        raise click.ClickException(str(exc)) from exc

    obs = settings.observability
    try:
        setup_logging(log_level or obs.log_level, obs.log_format)
    except JournalError as exc:
        raise click.ClickException(str(exc)) from exc
    start_run(ctx.invoked_subcommand or "main")
    ctx.obj = settings


@main.command()
@click.option("--symbol", required=True, help="Instrument symbol, e.g. EUR/USD")
@click.option("--account", "account_size", required=True, type=float, help="Account size")
@click.option("--risk", "risk_percentage", required=True, type=float, help="Risk per trade in percent")
@click.option("--entry", "entry_price", required=True, type=float, help="Entry price")
@click.option("--stop", "stop_loss", required=True, type=float, help="Stop-loss price")
@click.option("--exit", "exit_price", default=None, type=float, help="Take-profit price")
def calc(
    symbol: str,
    account_size: float,
    risk_percentage: float,
    entry_price: float,
    stop_loss: float,
    exit_price: float | None,
) -> None:
    """Size a position from account risk and price levels."""
    bind_context(symbol=symbol)
    from .sizing.calculator import compute_position_sizing
    from .core.instruments import get_instrument

    try:
        instrument = get_instrument(symbol)
    except JournalError as exc:
        raise click.ClickException(str(exc)) from exc

    result = compute_position_sizing(
        account_size, risk_percentage, entry_price, stop_loss, exit_price, instrument
    )
    _echo_json({"symbol": instrument.symbol, **result.to_dict()})


@main.command()
@click.argument("trades_file", required=False, type=click.Path(dir_okay=False))
@click.option("--account", default=None, help="Only trades of this account id")
@click.pass_obj
def stats(settings: Settings, trades_file: str | None, account: str | None) -> None:
    """Dashboard statistics for a trade file."""
    from .journal import (
        compute_advanced_metrics,
        compute_composite_score,
        compute_dashboard_stats,
        compute_expectancy,
    )

    bind_context(account=account)
    trades = _load_trades(settings, trades_file, account)
    tz = _resolve_tz(settings)

    dashboard = compute_dashboard_stats(trades, config=settings.analytics, tz=tz)
    get_logger(__name__).info(
        "stats_computed", trades=dashboard.total_trades, win_rate=dashboard.win_rate
    )
    _echo_json({
        "stats": dashboard.to_dict(),
        "expectancy": compute_expectancy(trades),
        "composite_score": compute_composite_score(dashboard, settings.score),
        "advanced_metrics": compute_advanced_metrics(trades, settings.analytics).to_dict(),
    })


@main.command()
@click.argument("trades_file", required=False, type=click.Path(dir_okay=False))
@click.option("--month", default=None, callback=_parse_month, help="Month to show (YYYY-MM), default current")
@click.option("--account", default=None, help="Only trades of this account id")
@click.pass_obj
def calendar(
    settings: Settings,
    trades_file: str | None,
    month: date | None,
    account: str | None,
) -> None:
    """Profit calendar for one month."""
    from .journal import compute_calendar, summarize_month, weekly_rows

    bind_context(account=account)
    trades = _load_trades(settings, trades_file, account)
    tz = _resolve_tz(settings)

    reference = month or datetime.now(tz).date()
    days = compute_calendar(trades, reference, tz=tz)
    _echo_json({
        "month": f"{reference.year:04d}-{reference.month:02d}",
        "days": [d.to_dict() for d in days],
        "summary": summarize_month(days).to_dict(),
        "weeks": [w.to_dict() for w in weekly_rows(days)],
    })


@main.command()
@click.option(
    "--category",
    default="All",
    type=click.Choice(["All", *(c.value for c in InstrumentCategory)], case_sensitive=False),
    help="Instrument category",
)
@click.option("--search", default=None, help="Substring of symbol or name")
def instruments(category: str, search: str | None) -> None:
    """List supported instruments."""
    from .core.instruments import list_instruments

    _echo_json([
        {**spec.model_dump(mode="json"), "position_unit": spec.position_unit}
        for spec in list_instruments(category, search)
    ])


if __name__ == "__main__":
    main()
