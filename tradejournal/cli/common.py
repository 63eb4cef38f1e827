"""Helpers shared by the TradeJournal CLI commands."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from tradejournal.config import get_store, load_config
from tradejournal.errors import ReadError
from tradejournal.journal import Journal

console = Console()


def get_journal(config: Optional[dict] = None) -> Journal:
    """Get a journal bound to the configured store.

    Exits with an error panel if the store cannot be read.
    """
    config = config or load_config()
    try:
        return Journal(get_store(config))
    except ReadError as e:
        fail(escape(str(e)), title="Storage Error")


def get_currency(config: Optional[dict] = None) -> str:
    """Get the currency symbol used in output."""
    config = config or load_config()
    return config.get("portfolio", {}).get("currency", "$")


def fail(message: str, title: str = "Error") -> None:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def format_money(value: float, currency: str = "$") -> str:
    """Format an amount like $1,234.56 or -$12.00."""
    sign = "-" if value < 0 else ""
    return f"{sign}{currency}{abs(value):,.2f}"


def format_pnl(value: Optional[float], currency: str = "$") -> str:
    """Format a PnL with sign and color markup."""
    if value is None:
        return "[dim]-[/dim]"
    color = "green" if value >= 0 else "red"
    sign = "+" if value > 0 else ""
    return f"[{color}]{sign}{format_money(value, currency)}[/{color}]"
