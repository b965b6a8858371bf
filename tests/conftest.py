"""Pytest configuration for test isolation.

Commands read and write the transaction store and settings under the XDG
data and config directories. Each test gets its own directories so nothing
touches the real home directory or leaks between tests.
"""

import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolate_xdg_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point XDG_DATA_HOME and XDG_CONFIG_HOME at per-test directories."""
    data_home = tmp_path / "data"
    config_home = tmp_path / "config"
    data_home.mkdir()
    config_home.mkdir()
    monkeypatch.setenv("XDG_DATA_HOME", os.fspath(data_home))
    monkeypatch.setenv("XDG_CONFIG_HOME", os.fspath(config_home))
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    monkeypatch.delenv("POCKETFIN_LOG_LEVEL", raising=False)
