"""History command: filter, list and export transactions."""

import sys
from datetime import datetime
from pathlib import Path

from rich.markup import escape
from rich.table import Table

from pocketfin.config import Settings
from pocketfin.domain.filters import ALL_CATEGORIES, ALL_TYPES, TransactionFilter
from pocketfin.export import export_transactions
from pocketfin.store.schema import get_exports_dir
from pocketfin.store.transactions import load_transactions
from pocketfin.ui import make_console, short_id, signed_amount_display


def default_export_path() -> Path:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return get_exports_dir() / f"transactions_{timestamp}.csv"


def list_command(
    settings: Settings,
    search: str = "",
    type_filter: str = ALL_TYPES,
    category: str = ALL_CATEGORIES,
    limit: int | None = 50,
    export: Path | None = None,
    export_default: bool = False,
) -> None:
    """List transactions matching the filters, newest first.

    Args:
        settings: Loaded user settings.
        search: Text to look for in description or merchant.
        type_filter: "income", "expense" or "all".
        category: Category name or "All".
        limit: Maximum rows to show. None shows everything.
        export: Write the filtered list to this CSV file.
        export_default: Write the filtered list to the exports directory.
    """
    console = make_console(settings.theme)

    filters = TransactionFilter(search=search, type_filter=type_filter, category=category)
    transactions = filters.apply(load_transactions())

    if export is not None or export_default:
        output_path = export if export is not None else default_export_path()
        try:
            export_transactions(transactions, settings.currency, output_path)
        except OSError as e:
            console.print(f"[red]Export failed: {escape(str(e))}[/red]", style="bold")
            sys.exit(1)
        console.print(f"[green]✓[/green] Exported {len(transactions)} transactions to: {output_path}")

    if not transactions:
        console.print("[muted]No transactions found matching your criteria.[/muted]")
        return

    shown = transactions if limit is None else transactions[:limit]
    if len(shown) == len(transactions):
        title = f"Transactions (showing all {len(transactions)})"
    else:
        title = f"Transactions (showing {len(shown)} of {len(transactions)})"

    table = Table(title=title)
    table.add_column("ID", style="muted")
    table.add_column("Date", style="accent")
    table.add_column("Merchant / Source")
    table.add_column("Description", style="muted")
    table.add_column("Category", style="category")
    table.add_column("Amount", justify="right")

    for txn in shown:
        table.add_row(
            short_id(txn),
            txn.date,
            escape(txn.display_name),
            escape(txn.description),
            escape(txn.category),
            signed_amount_display(txn, settings.currency),
        )

    console.print(table)
