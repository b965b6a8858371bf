"""Tests for the JSON transaction store."""

import json
import os
from decimal import Decimal
from pathlib import Path

import pytest

from pocketfin.domain.models import CategoryName, Description, Money, Transaction, TransactionId, TransactionType
from pocketfin.store.schema import get_data_path, init_store, store_exists
from pocketfin.store.transactions import StoreReadError, load_transactions, read_store, save_transactions


def _txn(txn_id: str, amount: str = "12.5", txn_type: TransactionType = TransactionType.EXPENSE) -> Transaction:
    return Transaction(
        id=TransactionId(txn_id),
        amount=Money(Decimal(amount)),
        type=txn_type,
        category=CategoryName("Food"),
        date="2024-01-15",
        description=Description("Lunch"),
        merchant="Deli",
    )


class TestPaths:
    """Tests for store locations."""

    def test_uses_xdg_data_home(self) -> None:
        """Should place the store under XDG_DATA_HOME."""
        assert get_data_path() == Path(os.environ["XDG_DATA_HOME"]) / "pocketfin" / "transactions.json"

    def test_init_creates_empty_store(self, tmp_path: Path) -> None:
        """Should create an empty JSON array."""
        path = tmp_path / "store" / "transactions.json"
        assert not store_exists(path)
        init_store(path)
        assert store_exists(path)
        assert load_transactions(path) == []


class TestLoadTransactions:
    """Tests for load_transactions."""

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        """Should return an empty collection when nothing is stored."""
        assert load_transactions(tmp_path / "missing.json") == []

    def test_legacy_record_loads_as_expense(self, tmp_path: Path) -> None:
        """Should default a missing type to expense."""
        path = tmp_path / "transactions.json"
        path.write_text(
            json.dumps([{"id": "x", "amount": 5, "date": "2024-01-01", "category": "Food", "description": "x"}])
        )
        [txn] = load_transactions(path)
        assert txn.type is TransactionType.EXPENSE
        assert txn.amount == Decimal("5")

    def test_malformed_json_is_empty(self, tmp_path: Path) -> None:
        """Should treat a corrupt file as empty without raising."""
        path = tmp_path / "transactions.json"
        path.write_text("{not json")
        assert load_transactions(path) == []
        assert path.read_text() == "{not json"

    def test_non_list_is_empty(self, tmp_path: Path) -> None:
        """Should ignore a store that does not hold a list."""
        path = tmp_path / "transactions.json"
        path.write_text('{"id": "x"}')
        assert load_transactions(path) == []

    def test_skips_bad_records(self, tmp_path: Path) -> None:
        """Should keep good records and skip undecodable ones."""
        path = tmp_path / "transactions.json"
        path.write_text(
            json.dumps(
                [
                    {"id": "ok", "amount": 1, "date": "2024-01-01", "description": "fine"},
                    {"id": "bad", "amount": "lots", "date": "2024-01-01", "description": "broken"},
                    "not a record",
                    {"id": "ok", "amount": 2, "date": "2024-01-02", "description": "duplicate"},
                ]
            )
        )
        assert [txn.id for txn in load_transactions(path)] == ["ok"]

    def test_decimal_precision_preserved(self, tmp_path: Path) -> None:
        """Should load fractional amounts as exact decimals."""
        path = tmp_path / "transactions.json"
        path.write_text(json.dumps([{"id": "a", "amount": 0.1, "date": "2024-01-01", "description": "x"}]))
        assert load_transactions(path)[0].amount == Decimal("0.1")


class TestSaveTransactions:
    """Tests for save_transactions."""

    def test_save_then_load(self, tmp_path: Path) -> None:
        """Should persist the whole collection in order."""
        path = tmp_path / "nested" / "transactions.json"
        transactions = [_txn("b", "3"), _txn("a", "40.75", TransactionType.INCOME)]
        assert save_transactions(transactions, path)
        assert load_transactions(path) == transactions

    def test_overwrites_whole_collection(self, tmp_path: Path) -> None:
        """Should replace, not append."""
        path = tmp_path / "transactions.json"
        save_transactions([_txn("a"), _txn("b")], path)
        save_transactions([_txn("c")], path)
        assert [txn.id for txn in load_transactions(path)] == ["c"]

    def test_writes_json_array(self, tmp_path: Path) -> None:
        """Should write plain JSON records."""
        path = tmp_path / "transactions.json"
        save_transactions([_txn("a")], path)
        records = json.loads(path.read_text())
        assert records == [
            {
                "id": "a",
                "amount": 12.5,
                "type": "expense",
                "category": "Food",
                "date": "2024-01-15",
                "description": "Lunch",
                "merchant": "Deli",
            }
        ]

    def test_failed_write_keeps_previous_data(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should report failure and leave the old file intact."""
        path = tmp_path / "store" / "transactions.json"
        save_transactions([_txn("a")], path)

        def fail_replace(src: str, dst: str) -> None:
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", fail_replace)

        assert save_transactions([_txn("b")], path) is False
        assert [txn.id for txn in load_transactions(path)] == ["a"]
        assert [p.name for p in path.parent.iterdir()] == ["transactions.json"]

    def test_default_location(self) -> None:
        """Should write to the XDG data path by default."""
        assert save_transactions([_txn("a")])
        assert get_data_path().exists()
        assert [txn.id for txn in load_transactions()] == ["a"]

    def test_exact_decimal_amounts(self, tmp_path: Path) -> None:
        """Should keep amounts that a float cannot hold exactly."""
        path = tmp_path / "transactions.json"
        precise = _txn("a", "0.12345678901234567890")
        save_transactions([precise], path)
        assert load_transactions(path)[0].amount == Decimal("0.12345678901234567890")


class TestReadStore:
    """Tests for read_store and writing back undecodable records."""

    def test_missing_file_is_empty_snapshot(self, tmp_path: Path) -> None:
        """Should treat a missing store as empty."""
        snapshot = read_store(tmp_path / "missing.json")
        assert snapshot.transactions == []
        assert snapshot.undecoded == []

    def test_truncated_json_raises(self, tmp_path: Path) -> None:
        """Should refuse to report a corrupt file as empty."""
        path = tmp_path / "transactions.json"
        path.write_text('[{"id": "a", "amount": 5, "date": "2024-01-01", "description": "rent"}, {"id": "b"')
        with pytest.raises(StoreReadError):
            read_store(path)

    def test_non_list_raises(self, tmp_path: Path) -> None:
        """Should refuse a store that does not hold a list."""
        path = tmp_path / "transactions.json"
        path.write_text('{"id": "x"}')
        with pytest.raises(StoreReadError):
            read_store(path)

    def test_undecoded_records_survive_save(self, tmp_path: Path) -> None:
        """Should write skipped records back unchanged."""
        path = tmp_path / "transactions.json"
        legacy = {"id": "legacy", "amount": 7.25, "date": "2023-05-01", "category": "Food", "description": ""}
        path.write_text(
            json.dumps(
                [legacy, {"id": "ok", "amount": 3, "date": "2024-01-01", "category": "Food", "description": "Tea"}]
            )
        )

        snapshot = read_store(path)
        assert [txn.id for txn in snapshot.transactions] == ["ok"]
        assert len(snapshot.undecoded) == 1

        assert save_transactions([_txn("new"), *snapshot.transactions], path, undecoded=snapshot.undecoded)

        records = json.loads(path.read_text())
        assert [record["id"] for record in records] == ["new", "ok", "legacy"]
        assert records[2] == legacy
