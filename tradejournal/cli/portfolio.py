"""Portfolio commands for TradeJournal CLI.

Handles the balance card and the initial balance setting.
"""

from typing import Optional

import click
from rich.markup import escape
from rich.panel import Panel

from tradejournal.cli.common import (
    console,
    fail,
    format_money,
    format_pnl,
    get_currency,
    get_journal,
)
from tradejournal.config import load_config
from tradejournal.errors import ParseError, ReadError, WriteError


@click.command()
def stats() -> None:
    """Display portfolio value, growth, net P&L and win rate.

    \b
    Examples:
      tradejournal stats
    """
    config = load_config()
    currency = get_currency(config)
    journal = get_journal(config)
    try:
        initial_balance = journal.settings.initial_balance
        summary = journal.summary()
    except ReadError as e:
        fail(escape(str(e)), title="Storage Error")
    finally:
        journal.close()

    growth_color = "green" if summary.growth_percent >= 0 else "red"
    growth_arrow = "▲" if summary.growth_percent >= 0 else "▼"

    stats_text = (
        f"[bold]Total Portfolio Value[/bold]  "
        f"[{growth_color}]{growth_arrow} {abs(summary.growth_percent):.2f}%[/{growth_color}]\n\n"
        f"[bold]{format_money(summary.current_balance, currency)}[/bold]\n"
        f"[dim]Starting Balance: {format_money(initial_balance, currency)}[/dim]\n"
        f"{'─' * 30}\n"
        f"Net P&L:  {format_pnl(summary.total_pnl, currency)}\n"
        f"Win Rate: [cyan]{summary.win_rate}%[/cyan]\n"
        f"Trades:   {summary.total_trades}\n\n"
        f"[dim]Wins: {summary.wins} | Losses: {summary.losses} | "
        f"BE: {summary.breakeven} | Pending: {summary.pending}[/dim]"
    )

    console.print(Panel(
        stats_text,
        title="[bold cyan]Portfolio[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.option(
    "--set",
    "new_balance",
    default=None,
    help="Overwrite the starting balance.",
)
def balance(new_balance: Optional[str]) -> None:
    """Show or set the starting balance.

    \b
    Examples:
      tradejournal balance             # Show starting balance
      tradejournal balance --set 5000  # Overwrite it
    """
    config = load_config()
    currency = get_currency(config)
    journal = get_journal(config)
    try:
        if new_balance is not None:
            value = journal.set_balance(new_balance)
            console.print(
                f"[green]✓[/green] Starting balance set to "
                f"[bold]{format_money(value, currency)}[/bold]"
            )
            return

        value = journal.initial_balance
    except ParseError as e:
        fail(escape(str(e)), title="Invalid Balance")
    except ReadError as e:
        fail(escape(str(e)), title="Storage Error")
    except WriteError as e:
        fail(escape(str(e)), title="Save Failed")
    finally:
        journal.close()

    console.print(f"[bold]Starting Balance:[/bold] {format_money(value, currency)}")
