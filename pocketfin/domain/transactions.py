"""Pure functions for transaction records and collection changes.

This module contains the functional core for transaction operations:
- No I/O operations (no files, no console, no network)
- No side effects
- Collections are never mutated, changes return new lists
"""

from collections.abc import Mapping, Sequence
from decimal import Decimal, InvalidOperation
from typing import Any, TypedDict

from pocketfin.domain.models import (
    CategoryName,
    Description,
    Money,
    Transaction,
    TransactionId,
    TransactionType,
)


class TransactionRecord(TypedDict, total=False):
    """Stored JSON shape of a transaction."""

    id: str
    amount: float | int | str
    type: str
    category: str
    date: str
    description: str
    merchant: str


def parse_transaction_type(value: Any) -> TransactionType:
    """Decode a stored transaction type.

    Records written before income tracking existed have no type; they are expenses.

    Args:
        value: Stored value, possibly None.

    Returns:
        TransactionType.

    Raises:
        ValueError: If the value is not a known type.
    """
    if value is None or value == "":
        return TransactionType.EXPENSE
    return TransactionType(str(value).lower())


def parse_stored_amount(value: Any) -> Money:
    """Decode a stored amount into a non-negative Decimal.

    Raises:
        ValueError: If the value is not a number or is negative.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {value!r}") from e
    if not amount.is_finite() or amount < 0:
        raise ValueError(f"Invalid amount: {value!r}")
    return Money(amount)


def transaction_from_record(record: Mapping[str, Any]) -> Transaction:
    """Build a Transaction from a stored record.

    Args:
        record: Mapping loaded from the store.

    Returns:
        Transaction.

    Raises:
        ValueError: If a required field is missing or invalid.
    """
    missing = [field for field in ("id", "amount", "date", "description") if record.get(field) in (None, "")]
    if missing:
        raise ValueError(f"Transaction record missing {', '.join(missing)}")

    merchant = record.get("merchant")

    return Transaction(
        id=TransactionId(str(record["id"])),
        amount=parse_stored_amount(record["amount"]),
        type=parse_transaction_type(record.get("type")),
        category=CategoryName(str(record.get("category") or "Other")),
        date=str(record["date"]),
        description=Description(str(record["description"])),
        merchant=str(merchant) if merchant else None,
    )


def amount_to_json(amount: Decimal) -> int | float | str:
    """Encode an amount without losing precision.

    Whole amounts become JSON integers and amounts a float holds exactly become
    JSON numbers. Anything else is written as its exact decimal text, which
    parse_stored_amount reads back unchanged.
    """
    if amount == amount.to_integral_value():
        return int(amount)
    as_float = float(amount)
    if Decimal(str(as_float)) == amount:
        return as_float
    return str(amount)


def transaction_to_record(txn: Transaction) -> TransactionRecord:
    """Encode a Transaction for JSON storage.

    Merchant is omitted when absent.
    """
    amount = amount_to_json(txn.amount)
    record = TransactionRecord(
        id=txn.id,
        amount=amount,
        type=txn.type.value,
        category=txn.category,
        date=txn.date,
        description=txn.description,
    )
    if txn.merchant:
        record["merchant"] = txn.merchant
    return record


def add_transaction(transactions: Sequence[Transaction], txn: Transaction) -> list[Transaction]:
    """Return a new collection with the transaction first.

    Raises:
        ValueError: If a transaction with the same id already exists.
    """
    if any(existing.id == txn.id for existing in transactions):
        raise ValueError(f"Duplicate transaction id: {txn.id}")
    return [txn, *transactions]


def remove_transaction(
    transactions: Sequence[Transaction], txn_id: TransactionId
) -> tuple[list[Transaction], bool]:
    """Return a new collection without the given transaction.

    Args:
        transactions: Current collection.
        txn_id: Id of the transaction to delete.

    Returns:
        Tuple of (remaining, removed) where removed tells whether the id existed.
    """
    remaining = [txn for txn in transactions if txn.id != txn_id]
    return remaining, len(remaining) != len(transactions)


def find_transaction(transactions: Sequence[Transaction], id_or_prefix: str) -> Transaction | None:
    """Find a transaction by full id or unambiguous id prefix.

    Args:
        transactions: Collection to search.
        id_or_prefix: Full id or leading characters of one.

    Returns:
        The matching transaction, or None if missing or ambiguous.
    """
    if not id_or_prefix:
        return None

    for txn in transactions:
        if txn.id == id_or_prefix:
            return txn

    matches = [txn for txn in transactions if txn.id.startswith(id_or_prefix)]
    if len(matches) == 1:
        return matches[0]
    return None
