"""Settings file management for pocketfin.

Settings are loaded once at startup into a ``Settings`` object that commands
receive explicitly, and written back whenever the user changes them.
"""

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import tomli_w

from pocketfin.domain.models import Currency, Theme
from pocketfin.logging_setup import get_logger

logger = get_logger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TIMEOUT = 60.0


@dataclass(frozen=True)
class Settings:
    """User preferences."""

    currency: Currency = Currency.USD
    theme: Theme = Theme.LIGHT
    model: str = DEFAULT_MODEL
    timeout: float = DEFAULT_TIMEOUT

    def with_currency(self, currency: Currency) -> "Settings":
        return replace(self, currency=currency)

    def with_theme(self, theme: Theme) -> "Settings":
        return replace(self, theme=theme)


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "pocketfin" / "config.toml"


def settings_from_dict(data: dict[str, Any]) -> Settings:
    """Build Settings from parsed TOML, falling back to defaults for bad values.

    Args:
        data: Parsed configuration.

    Returns:
        Settings.
    """
    defaults = Settings()

    try:
        currency = Currency(str(data.get("currency", defaults.currency.value)).upper())
    except ValueError:
        logger.warning("Unknown currency %r in config, using %s", data.get("currency"), defaults.currency.value)
        currency = defaults.currency

    try:
        theme = Theme(str(data.get("theme", defaults.theme.value)).lower())
    except ValueError:
        logger.warning("Unknown theme %r in config, using %s", data.get("theme"), defaults.theme.value)
        theme = defaults.theme

    ai = data.get("ai", {})
    if not isinstance(ai, dict):
        ai = {}

    model = str(ai.get("model") or defaults.model)

    try:
        timeout = float(ai.get("timeout", defaults.timeout))
    except (TypeError, ValueError):
        timeout = defaults.timeout
    if timeout <= 0:
        timeout = defaults.timeout

    return Settings(currency=currency, theme=theme, model=model, timeout=timeout)


def settings_to_dict(settings: Settings) -> dict[str, Any]:
    return {
        "currency": settings.currency.value,
        "theme": settings.theme.value,
        "ai": {
            "model": settings.model,
            "timeout": settings.timeout,
        },
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_settings(Settings(), config_path)


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings from the TOML file.

    A missing file yields default settings. An unreadable or malformed file
    is logged and also yields defaults.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Settings.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return Settings()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.error("Failed to load settings from %s: %s", config_path, e)
        return Settings()

    return settings_from_dict(data)


def save_settings(settings: Settings, config_path: Path | None = None) -> None:
    """Save settings to the TOML file.

    Args:
        settings: Settings to write.
        config_path: Path to config file. If None, uses default location.

    Raises:
        OSError: If the file cannot be written.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(settings_to_dict(settings), f)

    os.chmod(config_path, 0o600)
