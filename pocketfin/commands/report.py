"""Dashboard command: totals, charts and recent activity."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pocketfin.config import Settings
from pocketfin.dates import month_label
from pocketfin.domain.aggregation import (
    CategoryTotal,
    MonthlyBucket,
    Totals,
    calculate_histogram_bar_length,
    category_breakdown,
    category_shares,
    compute_totals,
    monthly_series,
    recent_transactions,
)
from pocketfin.domain.models import Currency, Transaction, format_money
from pocketfin.store.transactions import load_transactions
from pocketfin.ui import balance_display, make_console, signed_amount_display


def render_totals(console: Console, totals: Totals, currency: Currency) -> None:
    """Render the balance, income and expense summary."""
    console.print(f"[bold]Net balance:[/bold]    {balance_display(totals.balance, currency)}")
    console.print(f"[bold]Total income:[/bold]   [income]{format_money(totals.income, currency)}[/income]")
    console.print(f"[bold]Total expenses:[/bold] [expense]{format_money(totals.expense, currency)}[/expense]")


def render_monthly_chart(
    console: Console,
    buckets: list[MonthlyBucket],
    currency: Currency,
    bar_width: int = 30,
) -> None:
    """Render income and expense bars per month."""
    console.print("\n[heading]Income vs expenses[/heading]\n")
    if not buckets:
        console.print("  [muted]No data yet[/muted]")
        return

    max_amount = max(max(b.income, b.expense) for b in buckets)
    for bucket in buckets:
        label = month_label(bucket.month)
        income_bar = "█" * calculate_histogram_bar_length(bucket.income, max_amount, bar_width)
        expense_bar = "█" * calculate_histogram_bar_length(bucket.expense, max_amount, bar_width)
        console.print(f"  {label:15} [income]{income_bar}[/income] {format_money(bucket.income, currency)}")
        console.print(f"  {'':15} [expense]{expense_bar}[/expense] {format_money(bucket.expense, currency)}")


def render_category_chart(
    console: Console,
    breakdown: list[CategoryTotal],
    currency: Currency,
    bar_width: int = 30,
) -> None:
    """Render expense share per category."""
    console.print("\n[heading]Expenses by category[/heading]\n")
    if not breakdown:
        console.print("  [muted]No expenses yet[/muted]")
        return

    max_amount = max(item.amount for item in breakdown)
    for item, (_, share) in zip(breakdown, category_shares(breakdown)):
        bar = "█" * calculate_histogram_bar_length(item.amount, max_amount, bar_width)
        amount_display = format_money(item.amount, currency)
        console.print(f"  [category]{escape(item.category):15}[/category] {amount_display:>14} {share:5.1f}% {bar}")


def render_recent(console: Console, transactions: list[Transaction], currency: Currency) -> None:
    """Render the recent transactions table."""
    table = Table(title="Recent transactions")
    table.add_column("Date", style="accent")
    table.add_column("Merchant / Source")
    table.add_column("Category", style="category")
    table.add_column("Amount", justify="right")

    for txn in transactions:
        table.add_row(txn.date, escape(txn.display_name), escape(txn.category), signed_amount_display(txn, currency))

    console.print()
    if transactions:
        console.print(table)
    else:
        console.print("[muted]No transactions found.[/muted]")


def dashboard_command(settings: Settings) -> None:
    """Show the financial overview."""
    console = make_console(settings.theme)
    transactions = load_transactions()
    currency = settings.currency

    console.print("[heading]Financial overview[/heading]\n")
    render_totals(console, compute_totals(transactions), currency)
    render_monthly_chart(console, monthly_series(transactions), currency)
    render_category_chart(console, category_breakdown(transactions), currency)
    render_recent(console, recent_transactions(transactions), currency)
