"""Journal store implementations for TradeJournal."""

from tradejournal.stores.base import JournalStore, SnapshotHandler
from tradejournal.stores.json_file import JsonJournalStore
from tradejournal.stores.sqlite import SQLiteJournalStore

__all__ = [
    "JournalStore",
    "SnapshotHandler",
    "JsonJournalStore",
    "SQLiteJournalStore",
]
