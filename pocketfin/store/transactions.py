"""Load and save the transaction collection.

The store is a single JSON array of transaction records. Loading reads the
whole collection; saving rewrites the whole collection through a temporary
file that atomically replaces the old one, so a failed write leaves the
previous data intact.

Records that cannot be decoded are never dropped: they are carried in the
StoreSnapshot and written back unchanged after the decoded transactions.
"""

import json
import os
import tempfile
from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any

from pocketfin.domain.models import Transaction
from pocketfin.domain.transactions import amount_to_json, transaction_from_record, transaction_to_record
from pocketfin.logging_setup import get_logger
from pocketfin.store.schema import get_data_path

logger = get_logger(__name__)


class StoreReadError(Exception):
    """Raised when an existing store file cannot be read or parsed."""


@dataclass(frozen=True)
class StoreSnapshot:
    """Everything read from the store file."""

    transactions: list[Transaction] = field(default_factory=list)
    undecoded: list[Any] = field(default_factory=list)


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return amount_to_json(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def read_store(data_path: Path | None = None) -> StoreSnapshot:
    """Read the store, keeping records that cannot be decoded.

    Args:
        data_path: Path to the store file. If None, uses default location.

    Returns:
        StoreSnapshot. A missing file is an empty snapshot.

    Raises:
        StoreReadError: If the file exists but is unreadable, is not JSON,
            or does not hold a list.
    """
    if data_path is None:
        data_path = get_data_path()

    if not data_path.exists():
        return StoreSnapshot()

    try:
        with open(data_path, encoding="utf-8") as f:
            records = json.load(f, parse_float=Decimal)
    except (OSError, ValueError) as e:
        raise StoreReadError(f"Could not read transaction store {data_path}: {e}") from e

    if not isinstance(records, list):
        raise StoreReadError(f"Transaction store {data_path} does not hold a list")

    transactions: list[Transaction] = []
    undecoded: list[Any] = []
    seen: set[str] = set()
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning("Skipping record %d in %s: not an object", index, data_path)
            undecoded.append(record)
            continue
        try:
            txn = transaction_from_record(record)
        except ValueError as e:
            logger.warning("Skipping record %d in %s: %s", index, data_path, e)
            undecoded.append(record)
            continue
        if txn.id in seen:
            logger.warning("Skipping record %d in %s: duplicate id %s", index, data_path, txn.id)
            undecoded.append(record)
            continue
        seen.add(txn.id)
        transactions.append(txn)

    return StoreSnapshot(transactions=transactions, undecoded=undecoded)


def load_transactions(data_path: Path | None = None) -> list[Transaction]:
    """Load every decodable transaction for display.

    An unreadable or malformed file is logged and shown as empty. Commands
    that write back use read_store instead so they never overwrite it.

    Args:
        data_path: Path to the store file. If None, uses default location.

    Returns:
        Transactions in stored order.
    """
    try:
        return read_store(data_path).transactions
    except StoreReadError as e:
        logger.error("%s", e)
        return []


def save_transactions(
    transactions: Sequence[Transaction],
    data_path: Path | None = None,
    undecoded: Sequence[Any] = (),
) -> bool:
    """Overwrite the store with the full collection.

    Failures are logged rather than raised; the in-memory collection stays
    authoritative for the session.

    Args:
        transactions: Complete collection to persist.
        data_path: Path to the store file. If None, uses default location.
        undecoded: Raw records from read_store, written back as they were.

    Returns:
        True if the collection was written, False otherwise.
    """
    if data_path is None:
        data_path = get_data_path()

    records: list[Any] = [transaction_to_record(txn) for txn in transactions]
    records.extend(undecoded)

    tmp_name: str | None = None
    try:
        data_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{data_path.name}.", suffix=".tmp", dir=data_path.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(records, f, indent=2, ensure_ascii=False, default=_json_default)
            f.write("\n")
        os.replace(tmp_name, data_path)
        tmp_name = None
    except (OSError, TypeError) as e:
        logger.error("Failed to save transactions to %s: %s", data_path, e)
        return False
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass

    logger.debug("Saved %d records to %s", len(records), data_path)
    return True
