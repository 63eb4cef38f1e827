"""TradeRecord data model."""

import math
from datetime import date as date_type, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from tradejournal.analytics.pnl import compute_pnl

Direction = Literal["Long", "Short"]
TradeResult = Literal["Pending", "Win", "Loss", "BreakEven"]
Emotion = Literal["Calm", "Excited", "Anxious", "FOMO", "Revenge", "Neutral"]

DIRECTIONS: tuple[str, ...] = ("Long", "Short")
RESULTS: tuple[str, ...] = ("Pending", "Win", "Loss", "BreakEven")
EMOTIONS: tuple[str, ...] = ("Calm", "Excited", "Anxious", "FOMO", "Revenge", "Neutral")


class TradeRecord(BaseModel):
    """Represents a logged trade.

    ``calculated_pnl`` and ``result`` are derived when the record is built
    and never recomputed afterwards. The PnL must agree with a fresh
    computation from the prices, size and direction.
    """

    id: Optional[str] = Field(default=None, description="Store-assigned identifier")
    date: date_type = Field(..., description="Trade date")
    pair: str = Field(..., min_length=1, description="Asset identifier (e.g., BTC/USD)")
    direction: Direction = Field(..., description="Trade direction")
    entry_price: float = Field(..., description="Entry price")
    exit_price: Optional[float] = Field(default=None, description="Exit price, absent while open")
    position_size: float = Field(..., gt=0, description="Lot/size")
    calculated_pnl: Optional[float] = Field(default=None, description="Derived profit/loss")
    result: TradeResult = Field(default="Pending", description="Result frozen at save time")
    entry_reason: str = Field(default="", description="Why the trade was taken")
    emotion_pre: Emotion = Field(default="Neutral", description="Emotion before the trade")
    confidence: int = Field(default=5, ge=1, le=10, description="Confidence score (1-10)")
    followed_plan: bool = Field(default=True, description="Whether the plan was followed")
    mistake: str = Field(default="None", description="Mistake tag")
    notes: str = Field(default="", description="Free-form notes")
    created_at: datetime = Field(
        default_factory=datetime.now, description="Creation timestamp"
    )

    model_config = {"frozen": True}

    @field_validator("pair")
    @classmethod
    def _normalize_pair(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("pair must not be blank")
        return value

    @field_validator("entry_price", "exit_price", "position_size")
    @classmethod
    def _require_finite(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and not math.isfinite(value):
            raise ValueError("price and size must be finite")
        return value

    @model_validator(mode="after")
    def _check_pnl(self) -> "TradeRecord":
        expected = None
        if self.exit_price is not None:
            expected = compute_pnl(
                self.direction, self.entry_price, self.exit_price, self.position_size
            )
        if expected is None and self.calculated_pnl is None:
            return self
        if (
            expected is None
            or self.calculated_pnl is None
            or not math.isclose(expected, self.calculated_pnl, abs_tol=1e-9)
        ):
            raise ValueError(
                f"calculated_pnl {self.calculated_pnl!r} does not match "
                f"recomputed value {expected!r}"
            )
        return self

    @property
    def is_open(self) -> bool:
        """Whether the trade has no exit price yet."""
        return self.exit_price is None
