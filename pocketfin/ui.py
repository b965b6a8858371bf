"""Terminal presentation helpers shared by the commands."""

from decimal import Decimal

from rich.console import Console
from rich.theme import Theme as RichTheme

from pocketfin.domain.models import Currency, Theme, Transaction, format_money

THEME_STYLES: dict[Theme, dict[str, str]] = {
    Theme.LIGHT: {
        "income": "green4",
        "expense": "red3",
        "heading": "bold blue",
        "accent": "blue",
        "muted": "grey42",
        "category": "magenta",
    },
    Theme.DARK: {
        "income": "bright_green",
        "expense": "bright_red",
        "heading": "bold bright_cyan",
        "accent": "bright_cyan",
        "muted": "grey62",
        "category": "orchid",
    },
}


def make_console(theme: Theme = Theme.LIGHT) -> Console:
    """Console whose named styles follow the chosen theme."""
    return Console(theme=RichTheme(THEME_STYLES[theme]))


def signed_amount_display(txn: Transaction, currency: Currency) -> str:
    """Amount markup: income green with a plus sign, expenses plain."""
    if txn.is_income:
        return f"[income]+{format_money(txn.amount, currency)}[/income]"
    return format_money(txn.amount, currency)


def balance_display(balance: Decimal, currency: Currency) -> str:
    style = "income" if balance >= 0 else "expense"
    return f"[{style}]{format_money(balance, currency)}[/{style}]"


def short_id(txn: Transaction) -> str:
    return txn.id[:8]
