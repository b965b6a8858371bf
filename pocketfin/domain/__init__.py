"""Domain models and types for pocketfin.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from pocketfin.domain.models import (
    CategoryName,
    Currency,
    Description,
    ExpenseCategory,
    IncomeCategory,
    Money,
    Month,
    Theme,
    Transaction,
    TransactionId,
    TransactionType,
)

__all__ = [
    "CategoryName",
    "Currency",
    "Description",
    "ExpenseCategory",
    "IncomeCategory",
    "Money",
    "Month",
    "Theme",
    "Transaction",
    "TransactionId",
    "TransactionType",
]
