"""CLI commands for TradeJournal.

This package provides the command-line interface for TradeJournal,
including trade logging, history, statistics and the position-sizing
calculator.
"""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
