"""Base journal store interface for TradeJournal."""

import logging
from abc import ABC, abstractmethod
from typing import Callable

from tradejournal.models import TradeRecord

logger = logging.getLogger(__name__)

SnapshotHandler = Callable[[list[TradeRecord]], None]


class JournalStore(ABC):
    """Abstract base class for journal storage.

    Every store owns the trade records and the initial balance of one
    account partition. Subscribers receive the full record list right
    away and again after each confirmed write.
    """

    # Synced stores confirm writes through snapshots; local-only stores
    # let the journal insert optimistically.
    synced = False

    def __init__(self, account_id: str = "shared", default_balance: float = 1000.0):
        """Initialize the store.

        Args:
            account_id: Partition every read and write is pinned to.
            default_balance: Balance reported before one is set.
        """
        if not account_id:
            raise ValueError("account_id must not be empty")
        self.account_id = account_id
        self.default_balance = default_balance
        self._handlers: list[SnapshotHandler] = []

    @abstractmethod
    def list_records(self) -> list[TradeRecord]:
        """Get all records, newest first by creation time."""
        pass

    @abstractmethod
    def append_record(self, record: TradeRecord) -> str:
        """Store a new record.

        Args:
            record: Record to store. Its id is ignored.

        Returns:
            The id assigned to the stored record.

        Raises:
            WriteError: If the record could not be stored.
        """
        pass

    @abstractmethod
    def delete_record(self, record_id: str) -> None:
        """Delete a record.

        Args:
            record_id: Id of the record to delete.

        Raises:
            WriteError: If the record is absent or could not be deleted.
        """
        pass

    @abstractmethod
    def get_balance(self) -> float:
        """Get the initial balance of the account."""
        pass

    @abstractmethod
    def set_balance(self, balance: float) -> None:
        """Overwrite the initial balance of the account.

        Raises:
            WriteError: If the balance could not be stored.
        """
        pass

    def subscribe(self, handler: SnapshotHandler) -> Callable[[], None]:
        """Register a handler for record snapshots.

        The handler is called immediately with the current records and
        after every confirmed append or delete.

        Returns:
            A callable that removes the handler.
        """
        records = self.list_records()
        self._handlers.append(handler)
        handler(records)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def _notify(self) -> None:
        """Push a fresh snapshot to every subscriber."""
        if not self._handlers:
            return
        snapshot = self.list_records()
        logger.debug("Delivering snapshot of %d records to %d subscribers",
                     len(snapshot), len(self._handlers))
        for handler in list(self._handlers):
            handler(snapshot)
