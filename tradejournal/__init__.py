"""TradeJournal - personal trading journal and position-sizing CLI."""

__version__ = "0.1.0"
