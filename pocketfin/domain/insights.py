"""Pure functions preparing the AI insight request."""

import json
from collections.abc import Iterable
from typing import Any

from pocketfin.domain.aggregation import recent_transactions
from pocketfin.domain.models import Currency, Transaction

INSIGHT_LIMIT = 60

INSIGHT_FALLBACK = "Could not generate insights at this time."
INSIGHT_ERROR_MESSAGE = "Sorry, I encountered an error while analyzing your transactions."


def insight_payload(transactions: Iterable[Transaction], limit: int = INSIGHT_LIMIT) -> list[dict[str, Any]]:
    """Reduce the most recent transactions to the fields the model sees.

    Args:
        transactions: Full collection.
        limit: Maximum number of transactions to include.

    Returns:
        List of dicts with date, amount, type, category and description.
    """
    return [
        {
            "date": txn.date,
            "amount": float(txn.amount),
            "type": txn.type.value,
            "category": txn.category,
            "description": txn.description,
        }
        for txn in recent_transactions(transactions, limit)
    ]


def build_insight_prompt(transactions: Iterable[Transaction], currency: Currency) -> str:
    """Prompt asking for a health summary and saving tips.

    Args:
        transactions: Full collection.
        currency: Display currency the amounts are in.

    Returns:
        Prompt text with the transaction data embedded as JSON.
    """
    data = json.dumps(insight_payload(transactions), indent=2)
    return (
        "Analyze the following financial transactions (income and expenses) and provide:\n"
        "1. A brief summary of financial health (Income vs Spending).\n"
        "2. Three actionable tips to save money or optimize budget.\n"
        "3. Use Markdown formatting for headings and lists.\n"
        "\n"
        "Context:\n"
        f"- The currency used is: {currency.value}\n"
        "- Keep in mind the typical purchasing power and price scales of this currency "
        "when analyzing amounts.\n"
        "\n"
        "Transaction Data:\n"
        f"{data}\n"
    )
