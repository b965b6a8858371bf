"""Export the filtered transaction history to CSV."""

from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from pocketfin.domain.models import Currency, Transaction, format_money

EXPORT_COLUMNS = ["Date", "Merchant / Source", "Description", "Type", "Category", "Amount", "Formatted"]


def transactions_frame(transactions: Sequence[Transaction], currency: Currency) -> pd.DataFrame:
    """Tabulate transactions for export.

    Args:
        transactions: Transactions in display order.
        currency: Display currency for the formatted amount column.

    Returns:
        DataFrame with one row per transaction. Expense amounts are negative.
    """
    rows = []
    for txn in transactions:
        signed = txn.amount if txn.is_income else -txn.amount
        rows.append(
            {
                "Date": txn.date,
                "Merchant / Source": txn.display_name,
                "Description": txn.description,
                "Type": txn.type.value,
                "Category": txn.category,
                "Amount": float(signed),
                "Formatted": ("+" if txn.is_income else "") + format_money(signed, currency),
            }
        )
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_transactions(transactions: Sequence[Transaction], currency: Currency, output_path: Path) -> Path:
    """Write transactions to a CSV file.

    Args:
        transactions: Transactions to export, already filtered and sorted.
        currency: Display currency.
        output_path: Destination file.

    Returns:
        The path written.

    Raises:
        OSError: If the file cannot be written.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    transactions_frame(transactions, currency).to_csv(output_path, index=False)
    return output_path
