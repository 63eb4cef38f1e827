"""Trade PnL calculation and result classification.

These functions are pure and cheap enough to run on every keystroke
of the trade-entry form.
"""

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Optional

from tradejournal.errors import ParseError

CENT = Decimal("0.01")

# Wide enough for any finite float quantized to cents
_MONEY_CONTEXT = Context(prec=400)


def parse_number(value: object, field: str = "value") -> float:
    """Parse a number or numeric text into a finite float.

    Args:
        value: Number or text from a form field.
        field: Field name used in the error message.

    Returns:
        The parsed float.

    Raises:
        ParseError: If the value is empty, non-numeric, NaN or infinite.
    """
    if value is None or isinstance(value, bool):
        raise ParseError(value, field)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ParseError(value, field)
        try:
            number = float(text)
        except ValueError as e:
            raise ParseError(value, field) from e
    else:
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError) as e:
            raise ParseError(value, field) from e

    if not math.isfinite(number):
        raise ParseError(value, field)
    return number


def round_money(value: float) -> float:
    """Round an amount to cents, exact halves away from zero.

    Works on the exact binary value of the float, so 0.125 becomes 0.13
    while 1.005 (stored as 1.00499...) becomes 1.0.
    """
    if not math.isfinite(value):
        return value
    quantized = Decimal(value).quantize(
        CENT, rounding=ROUND_HALF_UP, context=_MONEY_CONTEXT
    )
    return float(quantized)


def compute_pnl(
    direction: str,
    entry_price: object,
    exit_price: object,
    position_size: object,
) -> Optional[float]:
    """Calculate the profit/loss of a trade.

    Long:  (exit - entry) * size
    Short: (entry - exit) * size

    Args:
        direction: "Long" or "Short".
        entry_price: Entry price (number or text).
        exit_price: Exit price (number or text).
        position_size: Lot/size (number or text).

    Returns:
        PnL rounded to 2 decimals, or None while any input is incomplete.

    Raises:
        ValueError: If direction is not Long or Short.
    """
    if direction not in ("Long", "Short"):
        raise ValueError(f"Unknown direction: {direction!r}")

    try:
        entry = parse_number(entry_price, "entry price")
        exit_ = parse_number(exit_price, "exit price")
        size = parse_number(position_size, "position size")
    except ParseError:
        return None

    if direction == "Long":
        pnl = (exit_ - entry) * size
    else:
        pnl = (entry - exit_) * size

    return round_money(pnl)


def classify_result(pnl: Optional[float], has_exit: bool) -> str:
    """Classify a trade as Win, Loss, BreakEven or Pending.

    Args:
        pnl: PnL as computed by compute_pnl.
        has_exit: Whether an exit price was given.

    Returns:
        The result label to freeze into the record.
    """
    if not has_exit or pnl is None:
        return "Pending"
    if pnl > 0:
        return "Win"
    if pnl < 0:
        return "Loss"
    return "BreakEven"
