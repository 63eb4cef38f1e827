"""Configuration loading for TradeJournal.

Settings live in ``config.toml`` inside the config directory
(``~/.config/tradejournal`` unless ``TRADEJOURNAL_HOME`` is set).
"""

import copy
import logging
import os
from pathlib import Path
from typing import Optional

import toml

from tradejournal.stores import JournalStore, JsonJournalStore, SQLiteJournalStore

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "TRADEJOURNAL_HOME"

DEFAULT_CONFIG = {
    "storage": {
        "backend": "sqlite",  # sqlite or json
        "path": "",  # Leave empty to use the config directory
        "account_id": "shared",
    },
    "portfolio": {
        "default_balance": 1000.0,
        "currency": "$",
    },
    "logging": {
        "level": "WARNING",
    },
}

BACKENDS = ("sqlite", "json")


def get_config_dir() -> Path:
    """Get the configuration directory."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "tradejournal"


def get_config_path() -> Path:
    """Get the path of config.toml."""
    return get_config_dir() / "config.toml"


def _merge(base: dict, override: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration merged over the defaults.

    A missing file yields the defaults. An unreadable file is logged
    and also yields the defaults.

    Args:
        config_path: Path to config.toml. Defaults to get_config_path().

    Returns:
        Configuration dictionary.
    """
    config_path = config_path or get_config_path()

    if not config_path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        user_config = toml.load(config_path)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return copy.deepcopy(DEFAULT_CONFIG)

    return _merge(DEFAULT_CONFIG, user_config)


def create_template_config(config_path: Optional[Path] = None) -> Path:
    """Write the default configuration file.

    Returns:
        Path of the written file.
    """
    config_path = config_path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        toml.dump(DEFAULT_CONFIG, f)

    return config_path


def get_store(config: dict) -> JournalStore:
    """Build the journal store described by the configuration.

    Raises:
        ValueError: If the storage backend is unknown.
    """
    storage = config.get("storage", {})
    backend = storage.get("backend", "sqlite")
    account_id = storage.get("account_id") or "shared"
    default_balance = float(
        config.get("portfolio", {}).get("default_balance", 1000.0)
    )
    path = storage.get("path") or ""

    if backend == "sqlite":
        db_path = Path(path).expanduser() if path else get_config_dir() / "tradejournal.db"
        return SQLiteJournalStore(
            db_path, account_id=account_id, default_balance=default_balance
        )
    if backend == "json":
        json_path = Path(path).expanduser() if path else get_config_dir() / "journal.json"
        return JsonJournalStore(
            json_path, account_id=account_id, default_balance=default_balance
        )

    raise ValueError(
        f"Unknown storage backend {backend!r}, expected one of {', '.join(BACKENDS)}"
    )
