"""Portfolio statistics over trade records.

Statistics are always recomputed from the full record set; nothing is
cached between calls.
"""

import math
from typing import Iterable

from tradejournal.analytics.pnl import parse_number, round_money
from tradejournal.errors import ParseError
from tradejournal.models import RESULTS, PortfolioSummary, TradeRecord


def record_pnl(record: TradeRecord) -> float:
    """Get the PnL of a record, treating missing values as 0."""
    try:
        return parse_number(getattr(record, "calculated_pnl", None))
    except ParseError:
        return 0.0


def calculate_win_rate(wins: int, total: int) -> int:
    """Win rate as a whole percent, halves rounded up. 0 for no trades."""
    if total <= 0:
        return 0
    return int(math.floor(100 * wins / total + 0.5))


def calculate_growth(current_balance: float, initial_balance: float) -> float:
    """Percent growth of the balance. 0 when the initial balance is not positive."""
    if initial_balance <= 0:
        return 0.0
    return 100 * (current_balance - initial_balance) / initial_balance


def aggregate(
    records: Iterable[TradeRecord], initial_balance: float
) -> PortfolioSummary:
    """Aggregate trade records into portfolio statistics.

    Args:
        records: Trade records (any order).
        initial_balance: Starting balance of the account.

    Returns:
        PortfolioSummary with net PnL, balance, win rate and growth.
    """
    records = list(records)

    counts = dict.fromkeys(RESULTS, 0)
    total_pnl = 0.0
    for record in records:
        total_pnl += record_pnl(record)
        result = getattr(record, "result", "Pending")
        if result in counts:
            counts[result] += 1

    # Sum of 2-decimal values; drop float accumulation noise
    total_pnl = round_money(total_pnl)
    current_balance = initial_balance + total_pnl

    return PortfolioSummary(
        total_pnl=total_pnl,
        current_balance=current_balance,
        win_rate=calculate_win_rate(counts["Win"], len(records)),
        growth_percent=calculate_growth(current_balance, initial_balance),
        total_trades=len(records),
        wins=counts["Win"],
        losses=counts["Loss"],
        breakeven=counts["BreakEven"],
        pending=counts["Pending"],
    )
