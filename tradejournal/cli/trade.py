"""Trade commands for TradeJournal CLI.

Handles logging new trades, deleting trades and the PnL preview.
"""

from datetime import datetime
from typing import Optional

import click
from pydantic import ValidationError
from rich.markup import escape
from rich.panel import Panel

from tradejournal.analytics.pnl import classify_result, compute_pnl
from tradejournal.cli.common import console, fail, format_pnl, get_currency, get_journal
from tradejournal.config import load_config
from tradejournal.errors import ParseError, ReadError, WriteError
from tradejournal.journal import TradeDraft
from tradejournal.models import DIRECTIONS, EMOTIONS

RESULT_COLORS = {
    "Win": "green",
    "Loss": "red",
    "BreakEven": "yellow",
    "Pending": "dim",
}


@click.command()
@click.option("-p", "--pair", required=True, help="Asset identifier (e.g., BTC/USD).")
@click.option(
    "-d", "--direction",
    type=click.Choice(DIRECTIONS, case_sensitive=False),
    default="Long",
    show_default=True,
    help="Trade direction.",
)
@click.option("-e", "--entry", "entry_price", required=True, help="Entry price.")
@click.option("-x", "--exit", "exit_price", default="", help="Exit price. Omit for an open trade.")
@click.option("-s", "--size", "position_size", default=None, help="Lot/size.")
@click.option("--risk", default=None, help="Risk percent, sizes the position when --size is omitted.")
@click.option("--sl", default=None, help="Stop-loss distance in points (with --risk).")
@click.option("--tp", default=None, help="Take-profit distance in points (with --risk).")
@click.option(
    "--date",
    "trade_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Trade date (YYYY-MM-DD). Defaults to today.",
)
@click.option(
    "--emotion",
    type=click.Choice(EMOTIONS, case_sensitive=False),
    default="Neutral",
    show_default=True,
    help="Emotion before the trade.",
)
@click.option("--reason", default="", help="Why the trade was taken.")
@click.option(
    "--confidence",
    type=click.IntRange(1, 10),
    default=5,
    show_default=True,
    help="Confidence score.",
)
@click.option("--mistake", default="None", help="Mistake tag.")
@click.option("--broke-plan", is_flag=True, default=False, help="Mark the trade as off-plan.")
@click.option("-n", "--notes", default="", help="Free-form notes.")
def add(
    pair: str,
    direction: str,
    entry_price: str,
    exit_price: str,
    position_size: Optional[str],
    risk: Optional[str],
    sl: Optional[str],
    tp: Optional[str],
    trade_date: Optional[datetime],
    emotion: str,
    reason: str,
    confidence: int,
    mistake: str,
    broke_plan: bool,
    notes: str,
) -> None:
    """Log a trade.

    PnL and result (Win/Loss/BreakEven) are calculated from the prices,
    size and direction. A trade without an exit price is saved as Pending.

    \b
    Examples:
      tradejournal add -p BTC/USD -e 100 -x 110 -s 2
      tradejournal add -p XAUUSD -d short -e 2350 --risk 1 --sl 500 --tp 1000
    """
    config = load_config()
    currency = get_currency(config)
    journal = get_journal(config)

    try:
        draft = TradeDraft(
            pair=pair,
            direction=direction,
            entry_price=entry_price,
            exit_price=exit_price,
            position_size=position_size or "",
            entry_reason=reason,
            emotion_pre=emotion,
            confidence=confidence,
            followed_plan=not broke_plan,
            mistake=mistake,
            notes=notes,
        )
        if trade_date is not None:
            draft.date = trade_date.date()

        if position_size is None:
            if risk is None or sl is None:
                fail("Provide --size, or --risk with --sl to size the position.")
            sizing = journal.size_position(risk, sl, tp)
            if sizing.position_size <= 0:
                fail("Position sizing returned 0. Check --risk and --sl.")
            draft.apply_sizing(sizing)
            console.print(
                f"[dim]Sized from {format_pnl(sizing.risk_amount, currency)} risk: "
                f"{draft.position_size} lot[/dim]"
            )

        record = journal.log_trade(draft)
    except ParseError as e:
        fail(escape(str(e)), title="Invalid Input")
    except ValidationError as e:
        fail(escape(str(e)), title="Invalid Trade")
    except WriteError as e:
        fail(escape(str(e)), title="Save Failed")
    except ReadError as e:
        fail(escape(str(e)), title="Storage Error")
    finally:
        journal.close()

    color = RESULT_COLORS[record.result]
    exit_text = "-" if record.is_open else f"{record.exit_price:g}"
    console.print(Panel(
        f"[bold]{escape(record.pair)}[/bold] {record.direction} "
        f"[dim]{record.date.isoformat()}[/dim]\n\n"
        f"In: {record.entry_price:g} → Out: {exit_text} ({record.position_size:g} Lot)\n"
        f"PnL:    {format_pnl(record.calculated_pnl, currency)}\n"
        f"Result: [{color}]{record.result}[/{color}]\n\n"
        f"[dim]ID: {record.id}[/dim]",
        title="[bold green]Trade Saved[/bold green]",
        border_style="green",
    ))


@click.command()
@click.argument("trade_id")
@click.option("-y", "--yes", is_flag=True, default=False, help="Skip confirmation.")
def delete(trade_id: str, yes: bool) -> None:
    """Delete a trade by ID (or a unique ID prefix).

    \b
    Examples:
      tradejournal delete 3fa2c1d0
      tradejournal delete 3fa2c1d0 --yes
    """
    journal = get_journal()
    try:
        try:
            record = journal.find_record(trade_id)
        except ValueError as e:
            fail(escape(str(e)))

        if record is None:
            fail(f"Trade not found: {escape(trade_id)}")

        if not yes and not click.confirm(
            f"Delete {record.direction} {record.pair} from {record.date.isoformat()}?"
        ):
            console.print("[dim]Cancelled[/dim]")
            return

        journal.delete_trade(record.id)
    except WriteError as e:
        fail(escape(str(e)), title="Delete Failed")
    finally:
        journal.close()

    console.print(f"[green]✓[/green] Deleted trade [cyan]{record.id[:8]}[/cyan]")


@click.command()
@click.argument("entry_price")
@click.argument("exit_price")
@click.argument("position_size")
@click.option("--short", is_flag=True, default=False, help="Short trade (default is Long).")
def pnl(entry_price: str, exit_price: str, position_size: str, short: bool) -> None:
    """Preview the PnL of a trade without saving it.

    \b
    Examples:
      tradejournal pnl 100 110 2          # +20.00 Win
      tradejournal pnl 100 110 2 --short  # -20.00 Loss
    """
    currency = get_currency()
    direction = "Short" if short else "Long"
    value = compute_pnl(direction, entry_price, exit_price, position_size)

    if value is None:
        console.print("[dim]Incomplete input: entry, exit and size must be numbers.[/dim]")
        return

    result = classify_result(value, has_exit=True)
    color = RESULT_COLORS[result]
    console.print(
        f"Estimated PnL ({direction}): {format_pnl(value, currency)} "
        f"[{color}]{result}[/{color}]"
    )
