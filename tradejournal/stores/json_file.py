"""JSON file journal store for TradeJournal.

Keeps the key-value layout of the browser local-storage version: each
account holds a ``trading_mindfulness_journal`` list (newest first) and
a ``trading_journal_balance`` string.
"""

import json
import logging
import os
import tempfile
import uuid
from pathlib import Path

from tradejournal.analytics.pnl import parse_number
from tradejournal.errors import ParseError, ReadError, WriteError
from tradejournal.models import TradeRecord
from tradejournal.stores.base import JournalStore

logger = logging.getLogger(__name__)

ENTRIES_KEY = "trading_mindfulness_journal"
BALANCE_KEY = "trading_journal_balance"


class JsonJournalStore(JournalStore):
    """Local-only store backed by a single JSON document."""

    def __init__(
        self,
        path: Path,
        account_id: str = "shared",
        default_balance: float = 1000.0,
    ):
        """Initialize the store.

        Args:
            path: Path to the JSON file. Created on first write.
            account_id: Partition every read and write is pinned to.
            default_balance: Balance reported before one is set.
        """
        super().__init__(account_id=account_id, default_balance=default_balance)
        self.path = Path(path)

    def _load(self) -> dict:
        """Load the whole document, or an empty one if the file is missing.

        Raises:
            ReadError: If the file is unreadable or not a JSON object.
        """
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error("Failed to read %s: %s", self.path, e)
            raise ReadError(f"Failed to read journal file: {e}") from e
        if not isinstance(document, dict):
            raise ReadError(f"Journal file {self.path} does not hold a JSON object")
        return document

    def _load_for_update(self) -> dict:
        try:
            return self._load()
        except ReadError as e:
            raise WriteError(str(e)) from e

    def _save(self, document: dict) -> None:
        """Atomically replace the document on disk."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=".journal-", suffix=".json"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, ensure_ascii=False, indent=2)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.error("Failed to write %s: %s", self.path, e)
            raise WriteError(f"Failed to write journal file: {e}") from e

    def _account(self, document: dict) -> dict:
        return document.setdefault(self.account_id, {})

    def list_records(self) -> list[TradeRecord]:
        """Get all records of the account, newest first."""
        entries = self._load().get(self.account_id, {}).get(ENTRIES_KEY, [])
        records = [TradeRecord.model_validate(entry) for entry in entries]
        # Stable sort keeps insertion order for equal timestamps
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    def append_record(self, record: TradeRecord) -> str:
        """Store a trade record at the front of the list.

        Returns:
            The generated record id.
        """
        record_id = uuid.uuid4().hex
        document = self._load_for_update()
        account = self._account(document)
        entry = record.model_copy(update={"id": record_id}).model_dump(mode="json")
        account[ENTRIES_KEY] = [entry] + account.get(ENTRIES_KEY, [])
        self._save(document)

        logger.info("Saved trade %s (%s %s)", record_id, record.direction, record.pair)
        self._notify()
        return record_id

    def delete_record(self, record_id: str) -> None:
        """Delete a trade record.

        Raises:
            WriteError: If no record has this id.
        """
        document = self._load_for_update()
        account = self._account(document)
        entries = account.get(ENTRIES_KEY, [])
        remaining = [e for e in entries if e.get("id") != record_id]
        if len(remaining) == len(entries):
            raise WriteError(f"Trade not found: {record_id}")

        account[ENTRIES_KEY] = remaining
        self._save(document)

        logger.info("Deleted trade %s", record_id)
        self._notify()

    def get_balance(self) -> float:
        """Get the initial balance.

        Falls back to the default when none was set or the stored value
        is not a finite number.
        """
        value = self._load().get(self.account_id, {}).get(BALANCE_KEY)
        if value is None:
            return self.default_balance
        try:
            return parse_number(value, "balance")
        except ParseError:
            logger.warning(
                "Ignoring unreadable balance %r in %s, using %.2f",
                value, self.path, self.default_balance,
            )
            return self.default_balance

    def set_balance(self, balance: float) -> None:
        """Overwrite the initial balance."""
        document = self._load_for_update()
        self._account(document)[BALANCE_KEY] = str(balance)
        self._save(document)

        logger.info("Initial balance set to %.2f", balance)
