#!/usr/bin/env python3
"""
Bank Reserves - Main Entry Point

Launches the Streamlit page by default. The ``search`` and ``financials``
commands run the same lookups from the terminal.
"""

import asyncio
import subprocess
import sys
from pathlib import Path
from typing import Optional

import click
import structlog
from rich.console import Console
from rich.table import Table

from . import __version__
from .banking.fdic_api_client import FDICAPIClient
from .banking.fdic_constants import MIN_SEARCH_LENGTH
from .banking.formatting import build_report_rows, format_report_date
from .banking.liquidity import compute_liquidity_metrics
from .config.settings import get_settings
from .services.logging_service import setup_logging
from .utils.error_handlers import format_error_for_user, log_handled_error


logger = structlog.get_logger(__name__, log_type="SYSTEM")

STREAMLIT_APP_PATH = Path(__file__).parent / "ui" / "streamlit_app.py"


@click.group(invoke_without_command=True)
@click.option(
    '--log-level',
    envvar='LOG_LEVEL',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default=None,
    help='Log level (overrides LOG_LEVEL from settings)'
)
@click.option('--version', is_flag=True, help='Show version information')
@click.pass_context
def cli(click_ctx, log_level: Optional[str], version: bool):
    """
    Bank Reserves

    Look up FDIC-insured institutions and their latest cash, Fed balances
    and liquidity ratios. Launches the Streamlit page when no command is given.
    """
    if version:
        click.echo(f"Bank Reserves v{__version__}")
        return

    try:
        settings = get_settings()
        if log_level:
            settings.log_level = log_level
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}")

    setup_logging(settings)

    click_ctx.obj = {
        'settings': settings,
        'console': Console()
    }

    if click_ctx.invoked_subcommand is None:
        click_ctx.invoke(streamlit)


@cli.command()
@click.option('--port', type=int, default=None, help='Server port (defaults to STREAMLIT_PORT)')
@click.option('--host', default=None, help='Server address (defaults to STREAMLIT_HOST)')
@click.pass_context
def streamlit(click_ctx, port: Optional[int], host: Optional[str]):
    """Launch the Streamlit web interface (default)."""
    settings = click_ctx.obj['settings']
    console = click_ctx.obj['console']

    port = port or settings.streamlit_port
    host = host or settings.streamlit_host

    cmd = [
        sys.executable, "-m", "streamlit", "run",
        str(STREAMLIT_APP_PATH),
        "--server.port", str(port),
        "--server.headless", "true",
        "--server.address", host
    ]

    logger.info("Starting Streamlit web interface", host=host, port=port)
    console.print(f"[bold]Bank Reserves[/bold] at http://{host}:{port}  (Ctrl+C to stop)")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        console.print("Streamlit server stopped")
    except subprocess.CalledProcessError as e:
        raise click.ClickException(f"Failed to start Streamlit: {e}")


@cli.command()
@click.argument('name')
@click.pass_context
def search(click_ctx, name: str):
    """Search institutions whose name matches NAME."""
    console = click_ctx.obj['console']

    if len(name.strip()) < MIN_SEARCH_LENGTH:
        raise click.BadParameter(
            f"must be at least {MIN_SEARCH_LENGTH} characters",
            param_hint="NAME"
        )

    client = FDICAPIClient.from_settings(click_ctx.obj['settings'])
    try:
        institutions = asyncio.run(client.search_institutions(name))
    except Exception as e:
        log_handled_error(e, "search_institutions", query=name)
        raise click.ClickException(format_error_for_user(e))

    if not institutions:
        console.print(f"No institutions match '{name}'")
        return

    table = Table(title=f"Institutions matching '{name}'")
    table.add_column("CERT", justify="right")
    table.add_column("Name")
    table.add_column("City")
    table.add_column("State")
    for institution in institutions:
        table.add_row(
            str(institution.cert),
            institution.name,
            institution.city or "",
            institution.stname or ""
        )
    console.print(table)


@cli.command()
@click.argument('cert', type=int)
@click.option('--raw', is_flag=True, help='Print the record as returned by the API')
@click.pass_context
def financials(click_ctx, cert: int, raw: bool):
    """Show the latest financial report for certificate number CERT."""
    console = click_ctx.obj['console']

    client = FDICAPIClient.from_settings(click_ctx.obj['settings'])
    try:
        record = asyncio.run(client.get_latest_financials(cert))
    except Exception as e:
        log_handled_error(e, "get_latest_financials", cert_id=cert)
        raise click.ClickException(format_error_for_user(e))

    if record.is_empty:
        console.print(f"No financial reports found for CERT {cert}")
        return

    if raw:
        console.print_json(data=record.raw())
        return

    table = Table(
        title=f"{record.name or cert}",
        caption=f"As of {format_report_date(record.repdte)}"
    )
    table.add_column("Measure")
    table.add_column("Value", justify="right")
    for label, value in build_report_rows(record, compute_liquidity_metrics(record)):
        table.add_row(label, value)
    console.print(table)


if __name__ == '__main__':
    cli()
