"""Transaction management commands (add, delete)."""

import sys
from dataclasses import replace
from pathlib import Path

import pandas as pd
import typer
from rich.console import Console
from rich.markup import escape

from pocketfin.config import Settings
from pocketfin.dates import parse_iso_date, today_iso
from pocketfin.domain.form import (
    RECEIPT_FAILED_ERROR,
    TransactionDraft,
    apply_receipt,
    build_transaction,
    check_receipt_scan_allowed,
    new_draft,
    parse_amount,
    resolve_category,
    switch_type,
)
from pocketfin.domain.models import Transaction, TransactionType, format_money
from pocketfin.domain.transactions import add_transaction, find_transaction, remove_transaction
from pocketfin.gemini import GeminiError, get_api_key, parse_receipt_image
from pocketfin.logging_setup import get_logger
from pocketfin.store.transactions import StoreReadError, StoreSnapshot, read_store, save_transactions
from pocketfin.ui import make_console, short_id, signed_amount_display

logger = get_logger(__name__)


def normalize_input_date(raw_date: str) -> str:
    """Normalize a user-typed date to ISO format (YYYY-MM-DD).

    ISO dates are taken as-is; anything else goes through pandas.to_datetime
    so European and other common formats work.

    Raises:
        ValueError: If the date cannot be parsed.
    """
    iso_date = parse_iso_date(raw_date)
    if iso_date is not None:
        return iso_date.strftime("%Y-%m-%d")

    try:
        parsed_date = pd.to_datetime(raw_date, dayfirst=True)
    except (ValueError, pd.errors.ParserError) as e:
        raise ValueError(f"Could not parse date '{raw_date}': {e}") from e
    if pd.isna(parsed_date):
        raise ValueError(f"Could not parse date '{raw_date}'")
    return parsed_date.strftime("%Y-%m-%d")


def scan_receipt(console: Console, draft: TransactionDraft, receipt: Path, settings: Settings) -> TransactionDraft:
    """Overlay receipt fields onto the draft, keeping the draft on failure."""
    warning = check_receipt_scan_allowed(draft)
    if warning:
        console.print(f"[yellow]{warning}[/yellow]")
        sys.exit(1)

    api_key = get_api_key()
    if not api_key:
        console.print("[red]API key is missing. Set GEMINI_API_KEY to scan receipts.[/red]")
        return draft

    try:
        with console.status("Analyzing receipt..."):
            extracted = parse_receipt_image(receipt, api_key, settings.model, settings.timeout)
    except GeminiError:
        console.print(f"[red]{RECEIPT_FAILED_ERROR}[/red]")
        return draft

    console.print("[green]✓[/green] Receipt scanned")
    return apply_receipt(draft, extracted)


def read_store_or_exit(console: Console) -> StoreSnapshot:
    """Read the store for a command that writes it back, exiting if it is unreadable."""
    try:
        return read_store()
    except StoreReadError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        console.print("[yellow]Nothing was saved. Repair or move the file, then try again.[/yellow]")
        sys.exit(1)


def print_transaction(console: Console, txn: Transaction, settings: Settings) -> None:
    console.print(f"  ID: {short_id(txn)}")
    console.print(f"  Date: {txn.date}")
    console.print(f"  Type: {txn.type.value}")
    console.print(f"  Description: {escape(txn.description)}")
    console.print(f"  Merchant: {escape(txn.display_name)}")
    console.print(f"  Category: {escape(txn.category)}")
    console.print(f"  Amount: {signed_amount_display(txn, settings.currency)}")


def add_command(
    settings: Settings,
    txn_type: TransactionType = TransactionType.EXPENSE,
    amount: str | None = None,
    description: str | None = None,
    date: str | None = None,
    category: str | None = None,
    merchant: str | None = None,
    receipt: Path | None = None,
) -> None:
    """Add a transaction manually or from a receipt image.

    Args:
        settings: Loaded user settings.
        txn_type: Income or expense.
        amount: Amount as typed (non-negative).
        description: Transaction description.
        date: Transaction date (YYYY-MM-DD, DD/MM/YYYY, or other formats). Defaults to today.
        category: Category name; defaults per type.
        merchant: Payee for expenses, payer for income.
        receipt: Optional receipt image to scan (expenses only).
    """
    console = make_console(settings.theme)
    stored = read_store_or_exit(console)

    draft = new_draft(today_iso())
    if txn_type is not draft.type:
        draft = switch_type(draft, txn_type)

    if receipt is not None:
        draft = scan_receipt(console, draft, receipt, settings)

    if amount is not None:
        parsed_amount = parse_amount(amount)
        if parsed_amount is None:
            console.print(f"[red]Invalid amount: {escape(amount)}[/red]")
            sys.exit(1)
        draft = replace(draft, amount=parsed_amount)

    if date is not None:
        try:
            draft = replace(draft, date=normalize_input_date(date))
        except ValueError as e:
            console.print(f"[red]Invalid date format: {escape(str(e))}[/red]")
            console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
            sys.exit(1)

    if category is not None:
        resolved = resolve_category(draft.type, category)
        if resolved.lower() != category.strip().lower():
            console.print(
                f"[yellow]Unknown {draft.type.value} category '{escape(category)}', using {resolved}[/yellow]"
            )
        draft = replace(draft, category=resolved)

    if description is not None:
        draft = replace(draft, description=description)

    if merchant is not None:
        draft = replace(draft, merchant=merchant)

    txn, error = build_transaction(draft)
    if txn is None:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)

    transactions = add_transaction(stored.transactions, txn)
    if not save_transactions(transactions, undecoded=stored.undecoded):
        console.print("[yellow]Warning: could not save transactions, the change is not persisted[/yellow]")

    console.print("[green]✓[/green] Transaction added:")
    print_transaction(console, txn, settings)


def delete_command(settings: Settings, transaction_id: str, yes: bool = False) -> None:
    """Delete a transaction after confirmation.

    Args:
        settings: Loaded user settings.
        transaction_id: Full id or unambiguous prefix (from 'pocketfin list').
        yes: Skip the confirmation prompt.
    """
    console = make_console(settings.theme)
    stored = read_store_or_exit(console)
    transactions = stored.transactions

    txn = find_transaction(transactions, transaction_id)
    if txn is None:
        console.print(f"[red]Transaction {escape(transaction_id)} not found (or prefix is ambiguous)[/red]")
        sys.exit(1)

    console.print(
        f"{txn.date}  {escape(txn.display_name)}  {format_money(txn.amount, settings.currency)} ({txn.type.value})"
    )
    if not yes and not typer.confirm("Are you sure you want to delete this item?", default=False):
        console.print("[dim]Cancelled[/dim]")
        return

    remaining, _ = remove_transaction(transactions, txn.id)
    if not save_transactions(remaining, undecoded=stored.undecoded):
        console.print("[yellow]Warning: could not save transactions, the change is not persisted[/yellow]")

    logger.info("Deleted transaction %s", txn.id)
    console.print(f"[green]✓[/green] Deleted transaction {short_id(txn)}")
