"""Pure functions for building new transactions from user input.

A TransactionDraft holds the form state. Every step returns a new draft;
validation returns error messages instead of raising so the caller can
re-prompt without any state change.
"""

import uuid
from collections.abc import Callable
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation

from pocketfin.dates import ISO_DATE_FORMAT, parse_iso_date
from pocketfin.domain.models import (
    CategoryName,
    Description,
    ExpenseCategory,
    IncomeCategory,
    Money,
    Transaction,
    TransactionId,
    TransactionType,
)

REQUIRED_FIELDS_ERROR = "Please fill in all required fields."
RECEIPT_INCOME_WARNING = "Receipt scanning is primarily for expenses."
RECEIPT_FAILED_ERROR = "Failed to read receipt. Please try again or enter details manually."

DEFAULT_CATEGORIES: dict[TransactionType, CategoryName] = {
    TransactionType.EXPENSE: CategoryName(ExpenseCategory.FOOD.value),
    TransactionType.INCOME: CategoryName(IncomeCategory.SALARY.value),
}


@dataclass(frozen=True)
class TransactionDraft:
    """In-progress form state for a new transaction."""

    type: TransactionType
    amount: Decimal
    category: CategoryName
    date: str
    description: str = ""
    merchant: str = ""


@dataclass(frozen=True)
class ReceiptData:
    """Fields extracted from a receipt image. Any of them may be missing."""

    amount: Decimal | None = None
    date: str | None = None
    merchant: str | None = None
    description: str | None = None
    category: str | None = None


def new_draft(today: str, txn_type: TransactionType = TransactionType.EXPENSE) -> TransactionDraft:
    """Start an empty draft.

    Args:
        today: Default date in YYYY-MM-DD format.
        txn_type: Initial transaction type.

    Returns:
        Draft with zero amount and the type's default category.
    """
    return TransactionDraft(
        type=txn_type,
        amount=Decimal(0),
        category=DEFAULT_CATEGORIES[txn_type],
        date=today,
    )


def categories_for(txn_type: TransactionType) -> list[CategoryName]:
    """Category vocabulary for a transaction type."""
    vocabulary = ExpenseCategory if txn_type is TransactionType.EXPENSE else IncomeCategory
    return [CategoryName(cat.value) for cat in vocabulary]


def resolve_category(txn_type: TransactionType, raw: str | None) -> CategoryName:
    """Map free text onto the type's vocabulary.

    Matching ignores case. Unknown values fall back to "Other", empty
    values to the type's default category.

    Args:
        txn_type: Transaction type whose vocabulary applies.
        raw: User or OCR supplied category.

    Returns:
        Canonical category name.
    """
    if raw is None or not raw.strip():
        return DEFAULT_CATEGORIES[txn_type]

    wanted = raw.strip().lower()
    for category in categories_for(txn_type):
        if category.lower() == wanted:
            return category
    return CategoryName("Other")


def switch_type(draft: TransactionDraft, txn_type: TransactionType) -> TransactionDraft:
    """Change the draft's type, resetting the category to the type default.

    Any category chosen under the previous type is discarded.
    """
    return replace(draft, type=txn_type, category=DEFAULT_CATEGORIES[txn_type])


def check_receipt_scan_allowed(draft: TransactionDraft) -> str | None:
    """Check whether a receipt may be scanned into this draft.

    Returns:
        Warning message for income drafts, None when scanning is allowed.
    """
    if draft.type is TransactionType.INCOME:
        return RECEIPT_INCOME_WARNING
    return None


def apply_receipt(draft: TransactionDraft, receipt: ReceiptData) -> TransactionDraft:
    """Overlay extracted receipt fields onto the draft.

    Extracted amount, date, merchant and category replace the draft's values
    only when present. The description becomes the extracted description,
    else the extracted merchant, else stays unchanged. Receipts are always
    expenses.

    Args:
        draft: Current form state.
        receipt: Extracted fields.

    Returns:
        Updated draft of type Expense.
    """
    description = receipt.description or receipt.merchant or draft.description
    if receipt.category:
        category = resolve_category(TransactionType.EXPENSE, receipt.category)
    elif draft.type is TransactionType.EXPENSE:
        category = draft.category
    else:
        category = DEFAULT_CATEGORIES[TransactionType.EXPENSE]

    return replace(
        draft,
        type=TransactionType.EXPENSE,
        amount=receipt.amount if receipt.amount is not None else draft.amount,
        date=receipt.date or draft.date,
        merchant=receipt.merchant or draft.merchant,
        category=category,
        description=description,
    )


def parse_amount(text: str | None) -> Money | None:
    """Parse a user-typed amount.

    Args:
        text: Amount such as "12.50" or "1,200".

    Returns:
        Decimal amount, or None if the text is not a finite number.
    """
    if text is None:
        return None
    cleaned = text.strip().replace(",", "")
    if not cleaned:
        return None
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return Money(amount)


def validate_draft(draft: TransactionDraft) -> str | None:
    """Check the draft is complete.

    Returns:
        Error message, or None when the draft can be submitted.
    """
    if not draft.amount or not draft.description.strip() or not draft.date.strip():
        return REQUIRED_FIELDS_ERROR
    if draft.amount < 0:
        return "Amount must be positive"
    if parse_iso_date(draft.date) is None:
        return f"Invalid date '{draft.date}', expected YYYY-MM-DD"
    return None


def build_transaction(
    draft: TransactionDraft,
    new_id: Callable[[], str] = lambda: str(uuid.uuid4()),
) -> tuple[Transaction | None, str | None]:
    """Turn a complete draft into a Transaction.

    Args:
        draft: Form state.
        new_id: Factory for fresh unique ids.

    Returns:
        Tuple of (transaction, error). Exactly one of them is None.
    """
    error = validate_draft(draft)
    txn_date = parse_iso_date(draft.date)
    if error is not None or txn_date is None:
        return None, error or REQUIRED_FIELDS_ERROR

    description = draft.description.strip()
    merchant = draft.merchant.strip() or description

    txn = Transaction(
        id=TransactionId(new_id()),
        amount=Money(draft.amount),
        type=draft.type,
        category=draft.category,
        date=txn_date.strftime(ISO_DATE_FORMAT),
        description=Description(description),
        merchant=merchant,
    )
    return txn, None
