"""
Transaction summary CLI - Inspect wallet transaction summaries and history dumps.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import typer
from loguru import logger
from pydantic import ValidationError

from txsummary.addresses import shorten_address
from txsummary.aggregator import CalculatedTransaction, calculate_transaction, entries_as_dict
from txsummary.config import get_settings
from txsummary.history import FlowSide, net_flows, write_csv
from txsummary.models import SummaryParseError, TransactionRecord, load_records, load_summary
from txsummary.units import FormattingContext, format_amount

app = typer.Typer(
    name="txsummary",
    help="Chia wallet transaction summaries",
    add_completion=False,
)


def setup_logging(level: str = "INFO") -> None:
    """Configure loguru logging."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )


def _context(ticker: str | None, decimals: int | None, locale: str | None) -> FormattingContext:
    base = get_settings().formatting_context()
    overrides = {
        key: value
        for key, value in (("ticker", ticker), ("decimals", decimals), ("locale", locale))
        if value is not None
    }
    try:
        return FormattingContext(**{**base.model_dump(), **overrides})
    except ValidationError as e:
        logger.error(f"Invalid formatting options: {e}")
        raise typer.Exit(1)


def _read(path: Path) -> bytes:
    if not path.exists():
        logger.error(f"File not found: {path}")
        raise typer.Exit(1)
    try:
        return path.read_bytes()
    except OSError as e:
        logger.error(f"Failed to read {path}: {e}")
        raise typer.Exit(1)


def format_calculated(calculated: CalculatedTransaction) -> str:
    """Render spent and created entries as plain text."""
    lines = ["Spent Coins"]
    if not calculated.spent:
        lines.append("  None")
    for spent in calculated.spent:
        lines.append(f"  [{spent.badge}] {spent.label}")
        lines.append(f"      coin: {spent.coin_id}")

    lines.append("Transaction Output")
    if not calculated.created:
        lines.append("  None")
    for created in calculated.created:
        line = f"  [{created.badge}] {created.label}"
        if created.address:
            line += f" -> {shorten_address(created.address)}"
        lines.append(line)

    return "\n".join(lines)


def format_flow_side(label: str, side: FlowSide, ctx: FormattingContext) -> str:
    lines = [f"  {label}:"]
    if side.is_empty():
        lines.append("    None")
        return "\n".join(lines)

    if side.xch:
        lines.append(f"    {format_amount(side.xch, ctx.decimals, ctx.locale)} {ctx.ticker}")
    for cat in side.cats:
        amount = format_amount(cat.amount, ctx.cat_decimals, ctx.locale)
        lines.append(f"    {amount} {cat.ticker or cat.name or cat.asset_id}")
    for singleton in side.singletons:
        lines.append(f"    [{singleton.badge}] {singleton.name}")

    return "\n".join(lines)


def format_record(record: TransactionRecord, ctx: FormattingContext) -> str:
    flows = net_flows(record, ctx)
    header = (
        f"Block #{record.height}: "
        f"{len(record.spent)} inputs, {len(record.created)} outputs"
    )
    return "\n".join(
        [
            header,
            format_flow_side("Sent", flows.sent(), ctx),
            format_flow_side("Received", flows.received(), ctx),
        ]
    )


@app.command()
def show(
    summary_file: Path = typer.Argument(..., help="JSON transaction summary or RPC response"),
    as_json: bool = typer.Option(False, "--json", help="Print entries as JSON"),
    ticker: str | None = typer.Option(None, "--ticker", "-t", envvar="TXSUMMARY_TICKER"),
    decimals: int | None = typer.Option(None, "--decimals", "-d", envvar="TXSUMMARY_DECIMALS"),
    locale: str | None = typer.Option(None, "--locale", envvar="TXSUMMARY_LOCALE"),
    log_level: str = typer.Option("INFO", "--log-level", "-l", envvar="TXSUMMARY_LOG_LEVEL"),
) -> None:
    """Show spent and created coins of a transaction summary."""
    setup_logging(log_level)

    try:
        summary = load_summary(_read(summary_file))
    except SummaryParseError as e:
        logger.error(f"Failed to load summary: {e}")
        raise typer.Exit(1)

    calculated = calculate_transaction(summary, _context(ticker, decimals, locale))

    if as_json:
        typer.echo(json.dumps(entries_as_dict(calculated), indent=2))
    else:
        typer.echo(format_calculated(calculated))


@app.command()
def history(
    records_file: Path = typer.Argument(..., help="JSON transaction records"),
    ticker: str | None = typer.Option(None, "--ticker", "-t", envvar="TXSUMMARY_TICKER"),
    decimals: int | None = typer.Option(None, "--decimals", "-d", envvar="TXSUMMARY_DECIMALS"),
    locale: str | None = typer.Option(None, "--locale", envvar="TXSUMMARY_LOCALE"),
    log_level: str = typer.Option("INFO", "--log-level", "-l", envvar="TXSUMMARY_LOG_LEVEL"),
) -> None:
    """Show net sent and received assets per transaction."""
    setup_logging(log_level)

    try:
        records = load_records(_read(records_file))
    except SummaryParseError as e:
        logger.error(f"Failed to load transaction records: {e}")
        raise typer.Exit(1)

    ctx = _context(ticker, decimals, locale)

    if not records:
        typer.echo("No transactions.")
        return

    for record in records:
        typer.echo(format_record(record, ctx))


@app.command()
def export(
    records_file: Path = typer.Argument(..., help="JSON transaction records"),
    output_file: Path = typer.Option(..., "--output", "-o", help="CSV output path"),
    log_level: str = typer.Option("INFO", "--log-level", "-l", envvar="TXSUMMARY_LOG_LEVEL"),
) -> None:
    """Export transaction records as CSV."""
    setup_logging(log_level)

    try:
        records = load_records(_read(records_file))
    except SummaryParseError as e:
        logger.error(f"Failed to load transaction records: {e}")
        raise typer.Exit(1)

    try:
        count = write_csv(records, output_file)
    except OSError as e:
        logger.error(f"Failed to write {output_file}: {e}")
        raise typer.Exit(1)

    typer.echo(f"Exported {count} coins from {len(records)} transactions to {output_file}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
