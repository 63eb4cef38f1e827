"""Money-management calculator command for TradeJournal CLI."""

from typing import Optional

import click
from rich.markup import escape
from rich.panel import Panel

from tradejournal.analytics.sizing import compute_sizing
from tradejournal.cli.common import console, fail, format_money, get_currency, get_journal
from tradejournal.config import load_config
from tradejournal.errors import ReadError


@click.command()
@click.option("-r", "--risk", required=True, help="Risk per trade, percent of balance.")
@click.option("--sl", required=True, help="Stop-loss distance in points.")
@click.option("--tp", default=None, help="Take-profit distance in points.")
@click.option(
    "-b", "--balance",
    "balance_value",
    default=None,
    help="Balance to size against. Defaults to the current balance.",
)
def size(
    risk: str,
    sl: str,
    tp: Optional[str],
    balance_value: Optional[str],
) -> None:
    """Calculate position size from account risk.

    One lot moves P&L by one currency unit per point. A stop-loss
    distance of zero or less gives all-zero results.

    \b
    Examples:
      tradejournal size --risk 1 --sl 500             # Size from current balance
      tradejournal size --risk 1 --sl 500 --tp 1000   # With reward:risk
      tradejournal size -r 2 --sl 50 -b 10000
    """
    config = load_config()
    currency = get_currency(config)

    if balance_value is None:
        journal = get_journal(config)
        try:
            balance_value = journal.summary().current_balance
        except ReadError as e:
            fail(escape(str(e)), title="Storage Error")
        finally:
            journal.close()

    sizing = compute_sizing(balance_value, risk, sl, tp)

    if sizing.position_size == 0 and sizing.risk_amount == 0:
        note = "\n\n[yellow]Enter a positive stop-loss distance and risk.[/yellow]"
    else:
        note = ""

    rr_text = f"1:{sizing.reward_risk_ratio:.2f}" if sizing.reward_risk_ratio else "-"

    console.print(Panel(
        f"Risk Amount:      [red]{format_money(sizing.risk_amount, currency)}[/red]\n"
        f"Position Size:    [bold cyan]{sizing.position_size:.2f}[/bold cyan] lot\n"
        f"Reward:Risk:      {rr_text}\n"
        f"Potential Profit: [green]{format_money(sizing.potential_profit, currency)}[/green]"
        f"{note}",
        title="[bold cyan]Money Management[/bold cyan]",
        border_style="cyan",
    ))
