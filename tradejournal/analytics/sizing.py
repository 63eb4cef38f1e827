"""Position sizing (money management) calculator.

The points model assumes one unit of position size moves PnL by one
currency unit per point. There is no instrument contract-size lookup.
"""

from typing import Optional

from tradejournal.analytics.pnl import parse_number
from tradejournal.errors import ParseError
from tradejournal.models.portfolio import SizingResult

ZERO_SIZING = SizingResult(
    risk_amount=0.0,
    position_size=0.0,
    reward_risk_ratio=0.0,
    potential_profit=0.0,
)


def _number_or_zero(value: object, field: str) -> float:
    try:
        return parse_number(value, field)
    except ParseError:
        return 0.0


def compute_sizing(
    balance: object,
    risk_percent: object,
    sl_points: object,
    tp_points: Optional[object] = None,
) -> SizingResult:
    """Calculate position size from account risk.

    Args:
        balance: Account balance.
        risk_percent: Percent of balance to risk on the trade.
        sl_points: Stop-loss distance in points.
        tp_points: Take-profit distance in points (optional).

    Returns:
        SizingResult. All values are 0 when the stop-loss distance is
        missing, invalid or not positive.
    """
    sl = _number_or_zero(sl_points, "stop-loss points")
    if sl <= 0:
        return ZERO_SIZING

    risk_amount = _number_or_zero(balance, "balance") * _number_or_zero(
        risk_percent, "risk percent"
    ) / 100
    position_size = risk_amount / sl

    tp = _number_or_zero(tp_points, "take-profit points")
    if tp > 0:
        reward_risk_ratio = tp / sl
        potential_profit = position_size * tp
    else:
        reward_risk_ratio = 0.0
        potential_profit = 0.0

    return SizingResult(
        risk_amount=risk_amount,
        position_size=position_size,
        reward_risk_ratio=reward_risk_ratio,
        potential_profit=potential_profit,
    )
