"""Pure functions for filtering the transaction history.

Three independent predicates (text, type, category) are ANDed and the
result is always ordered newest first. Nothing here mutates its input.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from pocketfin.domain.aggregation import sort_newest_first
from pocketfin.domain.models import ExpenseCategory, IncomeCategory, Transaction

ALL_TYPES = "all"
ALL_CATEGORIES = "All"


@dataclass(frozen=True)
class TransactionFilter:
    """Active history filters.

    Attributes:
        search: Case-insensitive substring for description or merchant.
        type_filter: "income", "expense", or the wildcard "all".
        category: Exact category name, or the wildcard "All".
    """

    search: str = ""
    type_filter: str = ALL_TYPES
    category: str = ALL_CATEGORIES

    def matches(self, txn: Transaction) -> bool:
        return (
            matches_search(txn, self.search)
            and matches_type(txn, self.type_filter)
            and matches_category(txn, self.category)
        )

    def apply(self, transactions: Iterable[Transaction]) -> list[Transaction]:
        return sort_newest_first(txn for txn in transactions if self.matches(txn))


def matches_search(txn: Transaction, search: str) -> bool:
    """Check whether description or merchant contains the search term.

    Args:
        txn: Transaction to test.
        search: Search term. Empty matches everything.

    Returns:
        True if either field contains the term, ignoring case.
    """
    if not search:
        return True
    term = search.lower()
    if term in txn.description.lower():
        return True
    return bool(txn.merchant) and term in txn.merchant.lower()


def matches_type(txn: Transaction, type_filter: str) -> bool:
    return type_filter == ALL_TYPES or txn.type.value == type_filter


def matches_category(txn: Transaction, category: str) -> bool:
    return category == ALL_CATEGORIES or txn.category == category


def filter_transactions(
    transactions: Iterable[Transaction],
    search: str = "",
    type_filter: str = ALL_TYPES,
    category: str = ALL_CATEGORIES,
) -> list[Transaction]:
    """Visible subset of the history, newest first.

    Args:
        transactions: Full transaction collection.
        search: Text filter over description and merchant.
        type_filter: Transaction type or "all".
        category: Category name or "All".

    Returns:
        New list of matching transactions sorted by date descending.
    """
    return TransactionFilter(search=search, type_filter=type_filter, category=category).apply(transactions)


def category_choices() -> list[str]:
    """Every category of both vocabularies, without duplicates.

    Returns:
        Expense categories followed by income-only categories.
    """
    names = [cat.value for cat in ExpenseCategory] + [cat.value for cat in IncomeCategory]
    return list(dict.fromkeys(names))
