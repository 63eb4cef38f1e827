"""Shared fixtures for TradeJournal tests."""

import tempfile
from pathlib import Path

import pytest

from tradejournal.stores import JsonJournalStore, SQLiteJournalStore


@pytest.fixture(params=["sqlite", "json"])
def store(request):
    """A fresh store of each backend."""
    with tempfile.TemporaryDirectory() as tmpdir:
        if request.param == "sqlite":
            yield SQLiteJournalStore(Path(tmpdir) / "test.db")
        else:
            yield JsonJournalStore(Path(tmpdir) / "journal.json")


@pytest.fixture
def tj_home(tmp_path, monkeypatch):
    """Point the CLI config directory at a temporary directory."""
    monkeypatch.setenv("TRADEJOURNAL_HOME", str(tmp_path))
    return tmp_path
