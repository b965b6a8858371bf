"""Pure functions for dashboard aggregations.

This module contains the functional core for reporting operations:
- No I/O operations (no files, no console, no network)
- No side effects
- Pure data transformations
- Easy to test

Amounts are non-negative Money values; the sign is taken from the transaction type.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from pocketfin.dates import month_key, parse_iso_date
from pocketfin.domain.models import CategoryName, Money, Month, Transaction, TransactionType

MONTHLY_WINDOW = 6
RECENT_LIMIT = 5


@dataclass(frozen=True)
class Totals:
    """Immutable income, expense and balance summary."""

    income: Money
    expense: Money
    balance: Decimal


@dataclass(frozen=True)
class CategoryTotal:
    """Total expense for one category."""

    category: CategoryName
    amount: Money


@dataclass(frozen=True)
class MonthlyBucket:
    """Income and expense for one month."""

    month: Month
    income: Money
    expense: Money


def compute_totals(transactions: Iterable[Transaction]) -> Totals:
    """Sum income and expense and derive the balance.

    Args:
        transactions: Transactions to summarize.

    Returns:
        Totals with balance = income - expense. All zeros for empty input.
    """
    income = Decimal(0)
    expense = Decimal(0)
    for txn in transactions:
        if txn.type is TransactionType.INCOME:
            income += txn.amount
        else:
            expense += txn.amount

    return Totals(income=Money(income), expense=Money(expense), balance=income - expense)


def category_breakdown(transactions: Iterable[Transaction]) -> list[CategoryTotal]:
    """Group expense amounts by category.

    Income transactions are ignored. Categories are compared as opaque,
    case-sensitive strings and returned in order of first appearance.

    Args:
        transactions: Transactions to group.

    Returns:
        List of CategoryTotal, one per expense category.
    """
    totals: dict[CategoryName, Decimal] = {}
    for txn in transactions:
        if txn.type is not TransactionType.EXPENSE:
            continue
        totals[txn.category] = totals.get(txn.category, Decimal(0)) + txn.amount

    return [CategoryTotal(category=cat, amount=Money(amt)) for cat, amt in totals.items()]


def category_shares(breakdown: Sequence[CategoryTotal]) -> list[tuple[CategoryName, float]]:
    """Percentage of total expense for each category.

    Args:
        breakdown: Output of category_breakdown.

    Returns:
        List of (category, percentage) tuples in the same order.
    """
    total = sum((item.amount for item in breakdown), Decimal(0))
    if total <= 0:
        return [(item.category, 0.0) for item in breakdown]
    return [(item.category, float(item.amount / total * 100)) for item in breakdown]


def monthly_series(transactions: Iterable[Transaction], window: int = MONTHLY_WINDOW) -> list[MonthlyBucket]:
    """Bucket income and expense by month, keeping the most recent months.

    Only months with at least one transaction appear. Buckets are sorted
    ascending by YYYY-MM key, which is also chronological order, and only
    the last ``window`` buckets are kept. Transactions with unparsable dates
    have no month and are left out.

    Args:
        transactions: Transactions to bucket.
        window: Number of most recent months to keep.

    Returns:
        List of MonthlyBucket in ascending month order.
    """
    buckets: dict[Month, tuple[Decimal, Decimal]] = {}
    for txn in transactions:
        key = month_key(txn.date)
        if key is None:
            continue
        income, expense = buckets.get(key, (Decimal(0), Decimal(0)))
        if txn.type is TransactionType.INCOME:
            income += txn.amount
        else:
            expense += txn.amount
        buckets[key] = (income, expense)

    if window <= 0:
        return []

    months = sorted(buckets)[-window:]
    return [MonthlyBucket(month=m, income=Money(buckets[m][0]), expense=Money(buckets[m][1])) for m in months]


def date_sort_key(txn: Transaction) -> tuple[int, date]:
    """Sort key placing unparsable dates before every valid date."""
    parsed = parse_iso_date(txn.date)
    if parsed is None:
        return (0, date.min)
    return (1, parsed)


def sort_newest_first(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Sort transactions by date descending.

    The sort is stable, so transactions sharing a date keep their
    collection order. Unparsable dates end up last.
    """
    return sorted(transactions, key=date_sort_key, reverse=True)


def recent_transactions(transactions: Iterable[Transaction], n: int = RECENT_LIMIT) -> list[Transaction]:
    """Most recent transactions by date.

    Args:
        transactions: Transactions to choose from.
        n: Maximum number to return.

    Returns:
        Up to n transactions, newest first.
    """
    if n <= 0:
        return []
    return sort_newest_first(transactions)[:n]


def calculate_histogram_bar_length(
    amount: Decimal,
    max_amount: Decimal,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
