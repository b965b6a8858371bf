"""Domain type definitions for pocketfin.

These NewTypes provide semantic clarity and help with type checking:
- Money: Non-negative amount as a Decimal, currency agnostic
- Month: Month in YYYY-MM format
- CategoryName: Name of a transaction category
- Description: Transaction description text
- TransactionId: Opaque unique transaction identifier
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import NewType

# Money amounts are Decimals to avoid floating point errors; the sign comes from the type
Money = NewType("Money", Decimal)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)

CategoryName = NewType("CategoryName", str)

Description = NewType("Description", str)

TransactionId = NewType("TransactionId", str)


class TransactionType(str, Enum):
    """Whether a transaction brings money in or takes it out."""

    INCOME = "income"
    EXPENSE = "expense"


class ExpenseCategory(str, Enum):
    FOOD = "Food"
    TRANSPORT = "Transport"
    UTILITIES = "Utilities"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    HEALTH = "Health"
    HOUSING = "Housing"
    OTHER = "Other"


class IncomeCategory(str, Enum):
    SALARY = "Salary"
    FREELANCE = "Freelance"
    INVESTMENT = "Investment"
    GIFT = "Gift"
    REFUND = "Refund"
    OTHER = "Other"


class Currency(str, Enum):
    """Display currency chosen by the user. Not stored per transaction."""

    USD = "USD"
    IQD = "IQD"

    @property
    def symbol(self) -> str:
        return CURRENCY_SYMBOLS[self]

    @property
    def label(self) -> str:
        return CURRENCY_LABELS[self]


class Theme(str, Enum):
    DARK = "dark"
    LIGHT = "light"


CURRENCY_SYMBOLS: dict[Currency, str] = {
    Currency.USD: "$",
    Currency.IQD: "IQD ",
}

CURRENCY_LABELS: dict[Currency, str] = {
    Currency.USD: "USD ($)",
    Currency.IQD: "Iraqi Dinar (IQD)",
}


@dataclass(frozen=True)
class Transaction:
    """Immutable income or expense record."""

    id: TransactionId
    amount: Money
    type: TransactionType
    category: CategoryName
    date: str
    description: Description
    merchant: str | None = None

    @property
    def display_name(self) -> str:
        """Merchant (payee or payer), falling back to the description."""
        return self.merchant or self.description

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME


def format_money(amount: Decimal, currency: Currency) -> str:
    """Format an amount for display, e.g. ``$1,234.50`` or ``IQD 25,000.00``.

    Args:
        amount: Amount to format.
        currency: Display currency.

    Returns:
        Formatted amount with currency symbol.
    """
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency.symbol}{abs(amount):,.2f}"
