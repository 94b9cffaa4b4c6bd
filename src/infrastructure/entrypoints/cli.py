"""
Command-line entry point.

Examples:
    stock-report generate AAPL TSLA NVDA
    stock-report generate MSFT --format json
    stock-report generate --demo
    stock-report demo
"""

import json

import click
from dotenv import load_dotenv

from src.domain.entities.report import ReportMode
from src.domain.entities.stock_price import DateRange
from src.domain.entities.ticker import MAX_TICKERS, TickerSet
from src.domain.errors import EmptyTickerSet
from src.infrastructure.config import Settings
from src.infrastructure.entrypoints.composition import build_services, load_secrets
from src.infrastructure.logging_config import configure_logging
from src.infrastructure.presentation.report_format import render_text, to_payload


def _build_ticker_set(symbols) -> TickerSet:
    ticker_set = TickerSet()
    for symbol in symbols:
        if not ticker_set.add(symbol) and ticker_set.is_full:
            click.echo(
                f"Ignoring {symbol.strip().upper()}: at most {MAX_TICKERS} tickers per report",
                err=True,
            )
    return ticker_set


def _echo_report(report, output_format: str) -> None:
    if output_format == "json":
        click.echo(json.dumps(to_payload(report), indent=2))
    else:
        click.echo(render_text(report))


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL (DEBUG, INFO, WARNING...)")
@click.pass_context
def cli(ctx, log_level):
    """AI stock report generator

    Select up to three tickers and get a price summary plus an AI analysis
    for each of them.
    """
    load_dotenv()
    settings = Settings.from_env()
    configure_logging(log_level or settings.log_level)
    ctx.ensure_object(dict)
    ctx.obj.setdefault("settings", settings)


def _services(ctx):
    services = ctx.obj.get("services")
    if services is None:
        services = build_services(load_secrets(ctx.obj["settings"]))
        ctx.obj["services"] = services
        ctx.call_on_close(services.close)
    return services


@cli.command("generate")
@click.argument("tickers", nargs=-1)
@click.option("--demo", is_flag=True, help="Use cached sample analyses only (no network calls)")
@click.option("--start", "start_date", default=None, help="Start date (YYYY-MM-DD)")
@click.option("--end", "end_date", default=None, help="End date (YYYY-MM-DD)")
@click.option("--format", "-f", "output_format", type=click.Choice(["text", "json"]), default="text")
@click.pass_context
def generate(ctx, tickers, demo, start_date, end_date, output_format):
    """Generate a report for up to three TICKERS

    Examples:
        stock-report generate AAPL TSLA
        stock-report generate NVDA --start 2025-01-02 --end 2025-01-31
    """
    if bool(start_date) != bool(end_date):
        raise click.UsageError("--start and --end must be given together")
    try:
        date_range = DateRange.parse(start_date, end_date) if start_date else None
    except ValueError as exc:
        raise click.BadParameter("dates must be YYYY-MM-DD") from exc

    ticker_set = _build_ticker_set(tickers)
    mode = ReportMode.DEMO if demo else ReportMode.LIVE
    try:
        report = _services(ctx).generate_report.execute(ticker_set, date_range, mode=mode)
    except EmptyTickerSet as exc:
        raise click.UsageError(str(exc)) from exc
    _echo_report(report, output_format)


@cli.command("demo")
@click.option("--format", "-f", "output_format", type=click.Choice(["text", "json"]), default="text")
@click.pass_context
def demo(ctx, output_format):
    """Generate the demo report for the sample tickers (AAPL, TSLA, NVDA)"""
    report = _services(ctx).demo.generate(TickerSet())
    _echo_report(report, output_format)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
