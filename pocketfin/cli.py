"""CLI entry point for pocketfin."""

from pathlib import Path

import typer

from pocketfin.commands.admin import init_command, settings_command
from pocketfin.commands.history import list_command
from pocketfin.commands.insights import insights_command
from pocketfin.commands.report import dashboard_command
from pocketfin.commands.transactions import add_command, delete_command
from pocketfin.config import Settings, load_settings
from pocketfin.domain.filters import ALL_CATEGORIES, ALL_TYPES
from pocketfin.domain.models import Currency, Theme, TransactionType
from pocketfin.logging_setup import configure_logging

app = typer.Typer(
    name="pocketfin",
    help="pocketfin - Personal income and expense tracking with AI insights",
    add_completion=False,
)


def current_settings(ctx: typer.Context) -> Settings:
    """Settings loaded once by the app callback."""
    settings = ctx.obj
    if not isinstance(settings, Settings):
        settings = load_settings()
        ctx.obj = settings
    return settings


def validate_type_filter(value: str) -> str:
    allowed = [ALL_TYPES, *(t.value for t in TransactionType)]
    if value not in allowed:
        raise typer.BadParameter(f"must be one of: {', '.join(allowed)}")
    return value


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str = typer.Option(None, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"),
) -> None:
    """pocketfin - Personal income and expense tracking with AI insights."""
    configure_logging(log_level)
    ctx.obj = load_settings()


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing transactions and config"),
) -> None:
    """Initialize the transaction store and configuration."""
    init_command(force)


@app.command()
def add(
    ctx: typer.Context,
    amount: str = typer.Option(None, "--amount", "-a", help="Amount (always positive)"),
    description: str = typer.Option(None, "--description", "-d", help="What the transaction was for"),
    txn_type: TransactionType = typer.Option(
        TransactionType.EXPENSE, "--type", "-t", case_sensitive=False, help="income or expense"
    ),
    date: str = typer.Option(None, "--date", help="Transaction date (default: today)"),
    category: str = typer.Option(None, "--category", "-c", help="Category (default: Food / Salary)"),
    merchant: str = typer.Option(None, "--merchant", "-m", help="Payee for expenses, payer for income"),
    receipt: Path = typer.Option(
        None, "--receipt", "-r", exists=True, dir_okay=False, help="Receipt image to scan (expenses only)"
    ),
) -> None:
    """Add an income or expense transaction."""
    add_command(current_settings(ctx), txn_type, amount, description, date, category, merchant, receipt)


@app.command()
def delete(
    ctx: typer.Context,
    transaction_id: str = typer.Argument(..., help="Transaction ID or prefix (from 'pocketfin list')"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete a transaction."""
    delete_command(current_settings(ctx), transaction_id, yes)


@app.command(name="list")
def list_transactions(
    ctx: typer.Context,
    search: str = typer.Option("", "--search", "-s", help="Search description and merchant"),
    type_filter: str = typer.Option(
        ALL_TYPES, "--type", "-t", callback=validate_type_filter, help="income, expense or all"
    ),
    category: str = typer.Option(ALL_CATEGORIES, "--category", "-c", help="Category name or All"),
    limit: int = typer.Option(50, help="Maximum transactions to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all matching transactions"),
    export: Path = typer.Option(None, "--export", "-e", help="Export the filtered list to this CSV file"),
    export_default: bool = typer.Option(
        False, "--export-default", help="Export the filtered list to the exports directory"
    ),
) -> None:
    """List your transaction history, newest first."""
    list_command(current_settings(ctx), search, type_filter, category, None if all else limit, export, export_default)


@app.command()
def dashboard(ctx: typer.Context) -> None:
    """Show balance, monthly income vs expenses and spending by category."""
    dashboard_command(current_settings(ctx))


@app.command()
def insights(ctx: typer.Context) -> None:
    """Get AI-generated insights about your finances."""
    insights_command(current_settings(ctx))


@app.command()
def settings(
    ctx: typer.Context,
    currency: Currency = typer.Option(None, "--currency", case_sensitive=False, help="Display currency"),
    theme: Theme = typer.Option(None, "--theme", case_sensitive=False, help="Color theme"),
) -> None:
    """Show or change your currency and theme."""
    ctx.obj = settings_command(current_settings(ctx), currency, theme)


if __name__ == "__main__":
    app()
