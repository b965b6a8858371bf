"""Insights command: AI summary of recent spending."""

import sys

from rich.markdown import Markdown

from pocketfin.config import Settings
from pocketfin.gemini import generate_insights, get_api_key
from pocketfin.store.transactions import load_transactions
from pocketfin.ui import make_console


def insights_command(settings: Settings) -> None:
    """Ask the AI for a financial health summary and saving tips."""
    console = make_console(settings.theme)
    transactions = load_transactions()

    if not transactions:
        console.print("[muted]Add some transactions to get personalized insights.[/muted]")
        return

    api_key = get_api_key()
    if not api_key:
        console.print("[red]API key is missing. Set GEMINI_API_KEY to generate insights.[/red]", style="bold")
        sys.exit(1)

    with console.status("Analyzing your finances..."):
        text = generate_insights(transactions, settings.currency, api_key, settings.model, settings.timeout)

    console.print("[heading]AI financial insights[/heading]\n")
    console.print(Markdown(text))
