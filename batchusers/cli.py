"""
batch-users CLI - Create local user accounts in bulk at container startup.
"""

import logging
import sys

import typer
from rich.console import Console
from rich.table import Table

from .creator import AccountCreator
from .models import parse_batch
from .provisioner import BatchProvisioner
from .settings import get_settings

# Setup
app = typer.Typer(
    name="batch-users",
    help="Create local user accounts in bulk from BATCH_USER_CREATION",
    add_completion=False,
)
console = Console()


def configure_logging(level: str | None = None):
    """Configure logging on stdout, defaulting to the level from settings."""
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
        force=True,
    )


def _resolve_batch(users: str | None) -> str | None:
    """Prefer the --users option over the BATCH_USER_CREATION setting."""
    if users is not None:
        return users
    return get_settings().batch_user_creation


@app.command()
def run(
    users: str = typer.Option(
        None, "--users", help="Accounts to create (overrides BATCH_USER_CREATION)"
    ),
    log_level: str = typer.Option(
        None, "--log-level", help="Logging level (overrides BU_LOG_LEVEL)"
    ),
):
    """Create every missing account listed in the batch value."""
    configure_logging(log_level)

    batch = _resolve_batch(users)
    if not batch:
        console.print("[dim]No accounts requested, nothing to do.[/dim]")
        return

    provisioner = BatchProvisioner(AccountCreator(settings=get_settings()))
    report = provisioner.run(batch)

    # Individual failures are reported here only; the exit code stays 0
    console.print(
        f"[dim]Accounts: +{report.created} ={report.existing} "
        f"!{report.failed} (of {report.total})[/dim]"
    )


@app.command()
def parse(
    users: str = typer.Option(
        None, "--users", help="Accounts to parse (overrides BATCH_USER_CREATION)"
    ),
):
    """Show how the batch value is parsed without touching the system."""
    specs = parse_batch(_resolve_batch(users))
    if not specs:
        console.print("[dim]No accounts requested.[/dim]")
        return

    table = Table(title="Requested accounts")
    table.add_column("#", justify="right")
    table.add_column("Username")
    table.add_column("Password")

    for index, spec in enumerate(specs, start=1):
        if spec.is_malformed:
            table.add_row(str(index), "[red]username undefined[/red]", "")
            continue
        password = "given" if spec.has_password else "[dim]same as username[/dim]"
        table.add_row(str(index), spec.username, password)

    console.print(table)


@app.command()
def version():
    """Show batch-users version."""
    from . import __version__

    console.print(f"batch-users version: [bold]{__version__}[/bold]")


if __name__ == "__main__":
    app()
