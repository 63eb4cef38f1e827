"""Trade arithmetic, position sizing, statistics and history filtering.

Submodules are imported directly (``tradejournal.analytics.pnl`` etc.)
since the data models depend on the PnL functions.
"""
