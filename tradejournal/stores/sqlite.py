"""SQLite journal store for TradeJournal."""

import logging
import sqlite3
import uuid
from datetime import date, datetime
from pathlib import Path

from tradejournal.errors import ReadError, WriteError
from tradejournal.models import TradeRecord
from tradejournal.stores.base import JournalStore

logger = logging.getLogger(__name__)


class SQLiteJournalStore(JournalStore):
    """SQLite-based journal store.

    Rows of every table carry an ``account_id`` column so a single
    database file can hold several independent portfolios.
    """

    synced = True

    REQUIRED_TABLES = [
        "trades",
        "portfolio_settings",
    ]

    def __init__(
        self,
        db_path: Path,
        account_id: str = "shared",
        default_balance: float = 1000.0,
    ):
        """Initialize the store.

        Args:
            db_path: Path to the SQLite database file.
            account_id: Partition every read and write is pinned to.
            default_balance: Balance reported before one is set.
        """
        super().__init__(account_id=account_id, default_balance=default_balance)
        self.db_path = Path(db_path)
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS trades (
                    id TEXT PRIMARY KEY,
                    account_id TEXT NOT NULL,
                    date TEXT NOT NULL,
                    pair TEXT NOT NULL,
                    direction TEXT NOT NULL,
                    entry_price REAL NOT NULL,
                    exit_price REAL,
                    position_size REAL NOT NULL,
                    calculated_pnl REAL,
                    result TEXT NOT NULL,
                    entry_reason TEXT NOT NULL DEFAULT '',
                    emotion_pre TEXT NOT NULL,
                    confidence INTEGER NOT NULL DEFAULT 5,
                    followed_plan INTEGER NOT NULL DEFAULT 1,
                    mistake TEXT NOT NULL DEFAULT 'None',
                    notes TEXT NOT NULL DEFAULT '',
                    created_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_trades_account_created
                ON trades (account_id, created_at)
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS portfolio_settings (
                    account_id TEXT PRIMARY KEY,
                    initial_balance REAL NOT NULL
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Trades ====================

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> TradeRecord:
        return TradeRecord(
            id=row["id"],
            date=date.fromisoformat(row["date"]),
            pair=row["pair"],
            direction=row["direction"],
            entry_price=row["entry_price"],
            exit_price=row["exit_price"],
            position_size=row["position_size"],
            calculated_pnl=row["calculated_pnl"],
            result=row["result"],
            entry_reason=row["entry_reason"],
            emotion_pre=row["emotion_pre"],
            confidence=row["confidence"],
            followed_plan=bool(row["followed_plan"]),
            mistake=row["mistake"],
            notes=row["notes"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def list_records(self) -> list[TradeRecord]:
        """Get all records of the account, newest first.

        Returns:
            List of trade records.

        Raises:
            ReadError: If the database could not be read.
        """
        try:
            conn = self._get_connection()
            try:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    SELECT * FROM trades
                    WHERE account_id = ?
                    ORDER BY created_at DESC, rowid DESC
                    """,
                    (self.account_id,),
                )
                rows = cursor.fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("Failed to load trades: %s", e)
            raise ReadError(f"Failed to load trades: {e}") from e

        return [self._row_to_record(row) for row in rows]

    def append_record(self, record: TradeRecord) -> str:
        """Store a trade record.

        Args:
            record: Record to store.

        Returns:
            The generated record id.
        """
        record_id = uuid.uuid4().hex
        try:
            conn = self._get_connection()
            try:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    INSERT INTO trades
                    (id, account_id, date, pair, direction, entry_price, exit_price,
                     position_size, calculated_pnl, result, entry_reason, emotion_pre,
                     confidence, followed_plan, mistake, notes, created_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        record_id,
                        self.account_id,
                        record.date.isoformat(),
                        record.pair,
                        record.direction,
                        record.entry_price,
                        record.exit_price,
                        record.position_size,
                        record.calculated_pnl,
                        record.result,
                        record.entry_reason,
                        record.emotion_pre,
                        record.confidence,
                        1 if record.followed_plan else 0,
                        record.mistake,
                        record.notes,
                        record.created_at.isoformat(),
                    ),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("Failed to save trade %s: %s", record.pair, e)
            raise WriteError(f"Failed to save trade: {e}") from e

        logger.info("Saved trade %s (%s %s)", record_id, record.direction, record.pair)
        self._notify()
        return record_id

    def delete_record(self, record_id: str) -> None:
        """Delete a trade record.

        Args:
            record_id: Id of the record to delete.
        """
        try:
            conn = self._get_connection()
            try:
                cursor = conn.cursor()
                cursor.execute(
                    "DELETE FROM trades WHERE id = ? AND account_id = ?",
                    (record_id, self.account_id),
                )
                deleted = cursor.rowcount
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("Failed to delete trade %s: %s", record_id, e)
            raise WriteError(f"Failed to delete trade: {e}") from e

        if not deleted:
            raise WriteError(f"Trade not found: {record_id}")

        logger.info("Deleted trade %s", record_id)
        self._notify()

    # ==================== Balance ====================

    def get_balance(self) -> float:
        """Get the initial balance of the account.

        Returns:
            Stored balance, or the default if none was set.

        Raises:
            ReadError: If the database could not be read.
        """
        try:
            conn = self._get_connection()
            try:
                cursor = conn.cursor()
                cursor.execute(
                    "SELECT initial_balance FROM portfolio_settings WHERE account_id = ?",
                    (self.account_id,),
                )
                row = cursor.fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("Failed to load balance: %s", e)
            raise ReadError(f"Failed to load balance: {e}") from e

        if row:
            return row["initial_balance"]
        return self.default_balance

    def set_balance(self, balance: float) -> None:
        """Overwrite the initial balance of the account.

        Args:
            balance: New initial balance.
        """
        try:
            conn = self._get_connection()
            try:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    INSERT OR REPLACE INTO portfolio_settings (account_id, initial_balance)
                    VALUES (?, ?)
                    """,
                    (self.account_id, balance),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("Failed to save balance: %s", e)
            raise WriteError(f"Failed to save balance: {e}") from e

        logger.info("Initial balance set to %.2f", balance)
