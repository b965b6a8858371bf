"""Storage locations for the transaction store."""

import os
from pathlib import Path


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_data_path() -> Path:
    """Get the default transaction store path (XDG compliant)."""
    return get_xdg_data_home() / "pocketfin" / "transactions.json"


def get_exports_dir() -> Path:
    """Get the default directory for exported transaction lists (XDG compliant)."""
    return get_xdg_data_home() / "pocketfin" / "exports"


def store_exists(data_path: Path | None = None) -> bool:
    """Check if the transaction store file exists.

    Args:
        data_path: Path to check. If None, uses default location.

    Returns:
        True if the store exists, False otherwise.
    """
    if data_path is None:
        data_path = get_data_path()
    return data_path.exists()


def init_store(data_path: Path | None = None) -> None:
    """Create an empty transaction store.

    Args:
        data_path: Path to the store file. If None, uses default location.

    Raises:
        OSError: If the file cannot be created.
    """
    if data_path is None:
        data_path = get_data_path()

    data_path.parent.mkdir(parents=True, exist_ok=True)
    data_path.write_text("[]\n", encoding="utf-8")
