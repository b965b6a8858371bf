"""Transaction store layer - provides persistence for the application.

This module re-exports all public store functions for easy importing.
"""

from pocketfin.store.schema import get_data_path, get_exports_dir, init_store, store_exists
from pocketfin.store.transactions import (
    StoreReadError,
    StoreSnapshot,
    load_transactions,
    read_store,
    save_transactions,
)

__all__ = [
    # Schema
    "get_data_path",
    "get_exports_dir",
    "init_store",
    "store_exists",
    # Collection
    "StoreReadError",
    "StoreSnapshot",
    "load_transactions",
    "read_store",
    "save_transactions",
]
