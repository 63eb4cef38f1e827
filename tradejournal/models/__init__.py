"""Data models for TradeJournal."""

from tradejournal.models.trade import (
    DIRECTIONS,
    EMOTIONS,
    RESULTS,
    Direction,
    Emotion,
    TradeRecord,
    TradeResult,
)
from tradejournal.models.portfolio import (
    HistorySummary,
    PortfolioSettings,
    PortfolioSummary,
    SizingResult,
)

__all__ = [
    "DIRECTIONS",
    "EMOTIONS",
    "RESULTS",
    "Direction",
    "Emotion",
    "TradeRecord",
    "TradeResult",
    "HistorySummary",
    "PortfolioSettings",
    "PortfolioSummary",
    "SizingResult",
]
