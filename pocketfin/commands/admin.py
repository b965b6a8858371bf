"""Admin commands for init and settings."""

import sys
from pathlib import Path

from pocketfin.config import Settings, create_default_config, get_config_path, save_settings
from pocketfin.domain.models import Currency, Theme
from pocketfin.store.schema import get_data_path, init_store
from pocketfin.ui import make_console


def run_full_init(data_path: Path, config_path: Path) -> None:
    """Create an empty store and default config."""
    console = make_console()

    console.print(f"[cyan]Creating transaction store at {data_path}...[/cyan]")
    init_store(data_path)
    console.print("[green]✓[/green] Transaction store initialized")

    console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
    create_default_config(config_path)
    console.print("[green]✓[/green] Config file created (permissions: 600)")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Transactions: {data_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(force: bool = False) -> None:
    """Initialize pocketfin storage and configuration."""
    console = make_console()
    data_path = get_data_path()
    config_path = get_config_path()

    data_exists = data_path.exists()
    config_exists = config_path.exists()

    if not force and (data_exists or config_exists):
        console.print("[red]Initialization failed:[/red]", style="bold")
        if data_exists:
            console.print(f"  Transaction store already exists: {data_path}")
        if config_exists:
            console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'pocketfin init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        run_full_init(data_path, config_path)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def settings_command(
    settings: Settings,
    currency: Currency | None = None,
    theme: Theme | None = None,
) -> Settings:
    """Show or change user settings.

    Args:
        settings: Currently loaded settings.
        currency: New display currency.
        theme: New color theme.

    Returns:
        The settings now in effect.
    """
    updated = settings
    if currency is not None:
        updated = updated.with_currency(currency)
    if theme is not None:
        updated = updated.with_theme(theme)

    console = make_console(updated.theme)

    if updated != settings:
        try:
            save_settings(updated)
        except OSError as e:
            console.print(f"[red]Could not save settings: {e}[/red]", style="bold")
            sys.exit(1)
        console.print("[green]✓[/green] Settings saved")

    console.print(f"[bold]Currency:[/bold] {updated.currency.label}")
    console.print(f"[bold]Theme:[/bold]    {updated.theme.value}")
    console.print(f"[bold]AI model:[/bold] {updated.model}")
    console.print(f"[dim]Config: {get_config_path()}[/dim]")
    return updated
