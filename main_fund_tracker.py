"""Mini README: Command line entry point for the fund tracking ledger.

Commands:
    * run - serve the dashboard API with uvicorn.
    * summary - print account balances and totals from the saved ledger.
    * export - write a full CSV report of transactions or diesel logs.

Options left unset fall back to ``FUNDTRACK_`` environment settings. The
global ``--log-level`` option applies to every command.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import uvicorn

from fundtrack.configuration import get_settings
from fundtrack.export import CsvReportExporter
from fundtrack.logging_utils import configure_root_logger
from fundtrack.storage import JsonLedgerRepository

cli = typer.Typer(help="Serve, inspect and export the fund tracking ledger.")

WILDCARD_HOSTS = {"0.0.0.0", "::"}


@cli.callback()
def main(
    log_level: str = typer.Option("INFO", "--log-level", help="DEBUG, INFO, WARNING or ERROR."),
) -> None:
    try:
        configure_root_logger(log_level)
    except ValueError as error:
        raise typer.BadParameter(str(error), param_hint="--log-level") from error


@cli.command()
def run(
    host: Optional[str] = typer.Option(None, help="Host interface to bind."),
    port: Optional[int] = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(False, help="Disable auto-reload."),
) -> None:
    """Start the dashboard API using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    reload = not production and settings.environment != "production"

    docs_host = "127.0.0.1" if effective_host in WILDCARD_HOSTS else effective_host
    typer.echo(
        f"Fund tracker listening on {effective_host}:{effective_port} "
        f"(data in {settings.data_directory}).\n"
        f"API docs: http://{docs_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "fundtrack.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=reload,
    )


@cli.command()
def summary(
    data_directory: Optional[Path] = typer.Option(None, help="Directory holding the ledger JSON files."),
) -> None:
    """Print account balances and totals."""

    totals = JsonLedgerRepository(data_directory).load_store().summary()
    currency = get_settings().currency_code
    for label, value in (
        ("BDO", totals.bdo),
        ("GCash", totals.gcash),
        ("Cash", totals.cash),
        ("Total", totals.total),
        ("Funds received", totals.funds_received),
        ("Expenses (excl. diesel budget)", totals.expenses),
        ("Diesel consumed", totals.diesel_total),
    ):
        typer.echo(f"{label:<32} {currency} {value:>14,.2f}")


@cli.command()
def export(
    collection: str = typer.Argument("transactions", help="Either 'transactions' or 'diesel'."),
    output_directory: Path = typer.Option(Path("reports"), help="Where the CSV report is written."),
    data_directory: Optional[Path] = typer.Option(None, help="Directory holding the ledger JSON files."),
) -> None:
    """Write a full CSV report of transactions or diesel logs."""

    if collection not in {"transactions", "diesel"}:
        raise typer.BadParameter("Collection must be 'transactions' or 'diesel'.", param_hint="COLLECTION")
    store = JsonLedgerRepository(data_directory).load_store()
    exporter = CsvReportExporter()
    if collection == "transactions":
        destination = exporter.export_transactions(store.transactions, output_directory=output_directory)
    else:
        destination = exporter.export_diesel_logs(store.diesel_logs, output_directory=output_directory)
    typer.echo(f"Report written to {destination}")


if __name__ == "__main__":
    cli()
