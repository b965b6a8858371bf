"""Tests for pocketfin.domain.transactions pure functions."""

from decimal import Decimal

import pytest

from pocketfin.domain.models import CategoryName, Description, Money, Transaction, TransactionId, TransactionType
from pocketfin.domain.transactions import (
    add_transaction,
    amount_to_json,
    find_transaction,
    remove_transaction,
    transaction_from_record,
    transaction_to_record,
)


def _txn(txn_id: str, amount: str = "10", merchant: str | None = None) -> Transaction:
    return Transaction(
        id=TransactionId(txn_id),
        amount=Money(Decimal(amount)),
        type=TransactionType.EXPENSE,
        category=CategoryName("Food"),
        date="2024-01-01",
        description=Description("Lunch"),
        merchant=merchant,
    )


class TestTransactionFromRecord:
    """Tests for transaction_from_record."""

    def test_legacy_record_without_type_is_expense(self) -> None:
        """Should load records written before income existed as expenses."""
        record = {"id": "x", "amount": 5, "date": "2024-01-01", "category": "Food", "description": "x"}
        txn = transaction_from_record(record)
        assert txn.type is TransactionType.EXPENSE
        assert txn.amount == Decimal("5")
        assert txn.merchant is None

    def test_income_record(self) -> None:
        """Should decode the stored type."""
        record = {
            "id": "y",
            "amount": 1200.5,
            "type": "income",
            "category": "Salary",
            "date": "2024-02-01",
            "description": "Pay",
            "merchant": "ACME",
        }
        txn = transaction_from_record(record)
        assert txn.type is TransactionType.INCOME
        assert txn.amount == Decimal("1200.5")
        assert txn.merchant == "ACME"

    def test_keeps_unknown_category_text(self) -> None:
        """Should not enforce the category vocabulary on load."""
        record = {"id": "z", "amount": 1, "date": "2024-01-01", "category": "Pets", "description": "Food bowl"}
        assert transaction_from_record(record).category == "Pets"

    def test_missing_description_rejected(self) -> None:
        """Should refuse records without required fields."""
        with pytest.raises(ValueError, match="description"):
            transaction_from_record({"id": "x", "amount": 1, "date": "2024-01-01"})

    def test_negative_amount_rejected(self) -> None:
        """Should refuse negative amounts."""
        with pytest.raises(ValueError):
            transaction_from_record({"id": "x", "amount": -1, "date": "2024-01-01", "description": "x"})

    def test_unknown_type_rejected(self) -> None:
        """Should refuse unknown transaction types."""
        with pytest.raises(ValueError):
            transaction_from_record(
                {"id": "x", "amount": 1, "type": "transfer", "date": "2024-01-01", "description": "x"}
            )


class TestTransactionToRecord:
    """Tests for transaction_to_record."""

    def test_whole_amounts_are_ints(self) -> None:
        """Should write integral amounts as JSON integers."""
        record = transaction_to_record(_txn("a", "40"))
        assert record["amount"] == 40
        assert isinstance(record["amount"], int)

    def test_fractional_amounts(self) -> None:
        """Should write fractional amounts as numbers."""
        assert transaction_to_record(_txn("a", "4.25"))["amount"] == 4.25

    def test_precise_amounts_written_as_text(self) -> None:
        """Should not round amounts a float cannot hold."""
        assert amount_to_json(Decimal("0.12345678901234567890")) == "0.12345678901234567890"
        assert transaction_from_record(
            {"id": "p", "amount": "0.12345678901234567890", "date": "2024-01-01", "description": "x"}
        ).amount == Decimal("0.12345678901234567890")

    def test_merchant_omitted_when_absent(self) -> None:
        """Should leave out an empty merchant."""
        assert "merchant" not in transaction_to_record(_txn("a"))
        assert transaction_to_record(_txn("a", merchant="Deli"))["merchant"] == "Deli"

    def test_type_written(self) -> None:
        """Should always write the type."""
        assert transaction_to_record(_txn("a"))["type"] == "expense"


class TestCollectionChanges:
    """Tests for add_transaction, remove_transaction and find_transaction."""

    def test_add_prepends(self) -> None:
        """Should put the new transaction first."""
        existing = [_txn("a"), _txn("b")]
        result = add_transaction(existing, _txn("c"))
        assert [txn.id for txn in result] == ["c", "a", "b"]
        assert [txn.id for txn in existing] == ["a", "b"]

    def test_add_rejects_duplicate_id(self) -> None:
        """Should keep ids unique."""
        with pytest.raises(ValueError):
            add_transaction([_txn("a")], _txn("a"))

    def test_remove(self) -> None:
        """Should drop the transaction and report it."""
        remaining, removed = remove_transaction([_txn("a"), _txn("b")], TransactionId("a"))
        assert removed
        assert [txn.id for txn in remaining] == ["b"]

    def test_remove_missing(self) -> None:
        """Should report when nothing was removed."""
        remaining, removed = remove_transaction([_txn("a")], TransactionId("zzz"))
        assert not removed
        assert len(remaining) == 1

    def test_find_by_prefix(self) -> None:
        """Should resolve an unambiguous prefix."""
        transactions = [_txn("abcdef"), _txn("abxyz"), _txn("qrs")]
        found = find_transaction(transactions, "abc")
        assert found is not None
        assert found.id == "abcdef"

    def test_find_ambiguous_prefix(self) -> None:
        """Should return None for ambiguous prefixes."""
        assert find_transaction([_txn("abcdef"), _txn("abxyz")], "ab") is None

    def test_find_exact_id_wins(self) -> None:
        """Should prefer an exact id over prefix matches."""
        found = find_transaction([_txn("ab"), _txn("abc")], "ab")
        assert found is not None
        assert found.id == "ab"
