"""Tests for configuration loading.

**Feature: trade-journal**
"""

import pytest
import toml

from tradejournal.config import (
    DEFAULT_CONFIG,
    create_template_config,
    get_config_path,
    get_store,
    load_config,
)
from tradejournal.stores import JsonJournalStore, SQLiteJournalStore


class TestLoadConfig:
    """
    Missing or partial configuration falls back to defaults.
    """

    def test_missing_file_gives_defaults(self, tj_home):
        assert load_config() == DEFAULT_CONFIG

    def test_config_path_follows_env(self, tj_home):
        assert get_config_path() == tj_home / "config.toml"

    def test_partial_file_is_merged(self, tj_home):
        (tj_home / "config.toml").write_text(
            '[storage]\nbackend = "json"\n\n[portfolio]\ncurrency = "฿"\n',
            encoding="utf-8",
        )
        config = load_config()

        assert config["storage"]["backend"] == "json"
        assert config["storage"]["account_id"] == "shared"
        assert config["portfolio"]["currency"] == "฿"
        assert config["portfolio"]["default_balance"] == 1000.0

    def test_unreadable_file_gives_defaults(self, tj_home):
        (tj_home / "config.toml").write_text("[storage\nbackend = ", encoding="utf-8")
        assert load_config() == DEFAULT_CONFIG

    def test_defaults_are_not_shared(self, tj_home):
        config = load_config()
        config["storage"]["backend"] = "json"
        assert DEFAULT_CONFIG["storage"]["backend"] == "sqlite"

    def test_template_round_trip(self, tj_home):
        path = create_template_config()
        assert path.exists()
        assert toml.load(path) == DEFAULT_CONFIG


class TestGetStore:
    """
    The configured backend, path, account id and balance reach the store.
    """

    def test_default_sqlite(self, tj_home):
        store = get_store(load_config())

        assert isinstance(store, SQLiteJournalStore)
        assert store.db_path == tj_home / "tradejournal.db"
        assert store.account_id == "shared"

    def test_json_with_custom_settings(self, tj_home):
        config = load_config()
        config["storage"].update(
            {"backend": "json", "path": str(tj_home / "mine.json"), "account_id": "desk-2"}
        )
        config["portfolio"]["default_balance"] = 250.0

        store = get_store(config)

        assert isinstance(store, JsonJournalStore)
        assert store.path == tj_home / "mine.json"
        assert store.account_id == "desk-2"
        assert store.get_balance() == 250.0

    def test_unknown_backend(self, tj_home):
        config = load_config()
        config["storage"]["backend"] = "firestore"
        with pytest.raises(ValueError):
            get_store(config)
