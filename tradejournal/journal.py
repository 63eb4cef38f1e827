"""Trade-entry workflow and journal service.

The journal keeps the latest record snapshot delivered by its store and
recomputes every statistic from that snapshot on demand.
"""

import logging
from datetime import date as date_type, datetime
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from tradejournal.analytics.history import DateLike, filtered_summary
from tradejournal.analytics.pnl import classify_result, compute_pnl, parse_number
from tradejournal.analytics.sizing import compute_sizing
from tradejournal.analytics.stats import aggregate
from tradejournal.models import (
    Direction,
    Emotion,
    HistorySummary,
    PortfolioSettings,
    PortfolioSummary,
    SizingResult,
    TradeRecord,
)
from tradejournal.stores.base import JournalStore

logger = logging.getLogger(__name__)


class TradeDraft(BaseModel):
    """Mutable trade-entry form.

    Prices and size are kept as raw text so a half-typed value is just
    an incomplete draft rather than an error.
    """

    date: date_type = Field(default_factory=date_type.today, description="Trade date")
    pair: str = Field(default="", description="Asset identifier")
    direction: Direction = Field(default="Long", description="Trade direction")
    entry_price: str = Field(default="", description="Entry price as typed")
    exit_price: str = Field(default="", description="Exit price as typed")
    position_size: str = Field(default="", description="Lot/size as typed")
    entry_reason: str = Field(default="", description="Why the trade was taken")
    emotion_pre: Emotion = Field(default="Neutral", description="Emotion before the trade")
    confidence: int = Field(default=5, ge=1, le=10, description="Confidence score (1-10)")
    followed_plan: bool = Field(default=True, description="Whether the plan was followed")
    mistake: str = Field(default="None", description="Mistake tag")
    notes: str = Field(default="", description="Free-form notes")

    model_config = {"validate_assignment": True}

    @field_validator("entry_price", "exit_price", "position_size", mode="before")
    @classmethod
    def _as_text(cls, value: Union[str, float, int, None]) -> str:
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return repr(value)
        return value

    @property
    def preview_pnl(self) -> Optional[float]:
        """Live PnL of the draft, or None while inputs are incomplete."""
        return compute_pnl(
            self.direction, self.entry_price, self.exit_price, self.position_size
        )

    def apply_sizing(self, sizing: SizingResult) -> None:
        """Fill the position size from a sizing result, rounded to 2 decimals."""
        self.position_size = repr(round(sizing.position_size, 2))

    def to_record(self, created_at: Optional[datetime] = None) -> TradeRecord:
        """Build the record to store.

        PnL and result are derived here, once.

        Args:
            created_at: Creation timestamp. Defaults to now.

        Raises:
            ParseError: If the entry price, size or a given exit price is
                not a finite number.
            pydantic.ValidationError: If the pair is blank or size not positive.
        """
        entry = parse_number(self.entry_price, "entry price")
        size = parse_number(self.position_size, "position size")
        exit_price = None
        if self.exit_price.strip():
            exit_price = parse_number(self.exit_price, "exit price")

        pnl = None
        if exit_price is not None:
            pnl = compute_pnl(self.direction, entry, exit_price, size)

        return TradeRecord(
            date=self.date,
            pair=self.pair,
            direction=self.direction,
            entry_price=entry,
            exit_price=exit_price,
            position_size=size,
            calculated_pnl=pnl,
            result=classify_result(pnl, exit_price is not None),
            entry_reason=self.entry_reason,
            emotion_pre=self.emotion_pre,
            confidence=self.confidence,
            followed_plan=self.followed_plan,
            mistake=self.mistake,
            notes=self.notes,
            created_at=created_at or datetime.now(),
        )


class Journal:
    """Trading journal bound to one store.

    Holds no aggregate state: summaries and history views are computed
    from the most recent snapshot each time they are requested.
    """

    def __init__(self, store: JournalStore):
        """Initialize the journal and subscribe to store snapshots.

        Args:
            store: Store that owns the records and balance.
        """
        self.store = store
        self._records: list[TradeRecord] = []
        self._unsubscribe = store.subscribe(self._on_snapshot)

    def _on_snapshot(self, records: list[TradeRecord]) -> None:
        self._records = list(records)
        logger.debug("Journal snapshot refreshed: %d records", len(self._records))

    def close(self) -> None:
        """Stop receiving snapshots from the store."""
        self._unsubscribe()

    @property
    def records(self) -> list[TradeRecord]:
        """Current records, newest first."""
        return list(self._records)

    @property
    def initial_balance(self) -> float:
        return self.store.get_balance()

    @property
    def settings(self) -> PortfolioSettings:
        """Account settings as currently stored."""
        return PortfolioSettings(initial_balance=self.initial_balance)

    def summary(self) -> PortfolioSummary:
        """Portfolio statistics over all records."""
        return aggregate(self._records, self.initial_balance)

    def history(
        self,
        filter_type: str = "all",
        start: DateLike = None,
        end: DateLike = None,
        now: Optional[datetime] = None,
    ) -> tuple[list[TradeRecord], HistorySummary]:
        """Records in a time window with their PnL and win rate."""
        return filtered_summary(self._records, filter_type, start, end, now)

    def find_record(self, record_id: str) -> Optional[TradeRecord]:
        """Find a record by id or unique id prefix.

        Raises:
            ValueError: If the prefix matches more than one record.
        """
        matches = [r for r in self._records if r.id and r.id.startswith(record_id)]
        exact = [r for r in matches if r.id == record_id]
        if exact:
            return exact[0]
        if len(matches) > 1:
            raise ValueError(f"Ambiguous trade id {record_id!r}")
        return matches[0] if matches else None

    def log_trade(
        self, draft: TradeDraft, created_at: Optional[datetime] = None
    ) -> TradeRecord:
        """Save a draft as a new record.

        Local-only stores get the record inserted into the snapshot before
        the write and removed again if the write fails. Synced stores update
        the snapshot only when the write is confirmed.

        Returns:
            The stored record with its assigned id.

        Raises:
            ParseError: If the draft is missing a required number.
            WriteError: If the store rejected the write.
        """
        record = draft.to_record(created_at)

        if self.store.synced:
            record_id = self.store.append_record(record)
        else:
            previous = self._records
            self._records = [record] + previous
            try:
                record_id = self.store.append_record(record)
            except Exception:
                self._records = previous
                raise

        return record.model_copy(update={"id": record_id})

    def delete_trade(self, record_id: str) -> None:
        """Delete a record.

        Raises:
            WriteError: If the record is absent or the delete failed.
        """
        self.store.delete_record(record_id)

    def set_balance(self, value: object) -> float:
        """Overwrite the initial balance.

        Returns:
            The parsed balance.

        Raises:
            ParseError: If the value is not a finite number.
            WriteError: If the store rejected the write.
        """
        balance = parse_number(value, "balance")
        self.store.set_balance(balance)
        return balance

    def size_position(
        self,
        risk_percent: object,
        sl_points: object,
        tp_points: Optional[object] = None,
        balance: Optional[object] = None,
    ) -> SizingResult:
        """Run the position-sizing calculator.

        Args:
            risk_percent: Percent of balance to risk.
            sl_points: Stop-loss distance in points.
            tp_points: Take-profit distance in points.
            balance: Balance to size against. Defaults to the current balance.
        """
        if balance is None:
            balance = self.summary().current_balance
        return compute_sizing(balance, risk_percent, sl_points, tp_points)
