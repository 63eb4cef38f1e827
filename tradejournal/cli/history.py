"""History commands for TradeJournal CLI.

Handles the filtered trade history view and CSV export.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from tradejournal.analytics.history import FILTER_TYPES
from tradejournal.cli.common import console, fail, format_pnl, get_currency, get_journal
from tradejournal.cli.trade import RESULT_COLORS
from tradejournal.config import load_config
from tradejournal.errors import WriteError
from tradejournal.export import DEFAULT_EXPORT_NAME, write_csv

FILTER_LABELS = {
    "all": "All Time",
    "today": "Today",
    "week": "This Week",
    "month": "This Month",
    "year": "This Year",
    "custom": "Custom Range",
}


@click.command()
@click.option(
    "-f", "--filter",
    "filter_type",
    type=click.Choice(FILTER_TYPES, case_sensitive=False),
    default=None,
    help="Time window (default: all, or custom when --from/--to is given).",
)
@click.option(
    "--from",
    "start",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Start date for a custom range (YYYY-MM-DD, inclusive).",
)
@click.option(
    "--to",
    "end",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="End date for a custom range (YYYY-MM-DD, inclusive).",
)
def history(
    filter_type: Optional[str],
    start: Optional[datetime],
    end: Optional[datetime],
) -> None:
    """Display trade history with filtered P&L and win rate.

    \b
    Examples:
      tradejournal history                                # All trades
      tradejournal history -f week                        # Sunday-Saturday
      tradejournal history --from 2024-01-01 --to 2024-01-31
    """
    if filter_type is None:
        filter_type = "custom" if (start or end) else "all"

    config = load_config()
    currency = get_currency(config)
    journal = get_journal(config)
    try:
        records, summary = journal.history(
            filter_type,
            start=start.date() if start else None,
            end=end.date() if end else None,
        )
    finally:
        journal.close()

    label = FILTER_LABELS[filter_type]
    if filter_type == "custom":
        label += (
            f" ({start.date().isoformat() if start else '...'}"
            f" to {end.date().isoformat() if end else '...'})"
        )

    if not records:
        console.print(Panel(
            "[dim]No trades found[/dim]",
            title=f"[bold]Trade History - {label}[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title=f"Trade History - {label}",
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("ID", style="dim")
    table.add_column("Date")
    table.add_column("Pair", style="bold")
    table.add_column("Side", justify="center")
    table.add_column("In → Out", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("Result", justify="center")
    table.add_column("Emotion", style="dim")

    for record in records:
        side_color = "green" if record.direction == "Long" else "red"
        exit_text = "-" if record.is_open else f"{record.exit_price:g}"
        result_color = RESULT_COLORS[record.result]
        table.add_row(
            (record.id or "")[:8],
            record.date.isoformat(),
            escape(record.pair),
            f"[{side_color}]{record.direction}[/{side_color}]",
            f"{record.entry_price:g} → {exit_text}",
            f"{record.position_size:g}",
            format_pnl(record.calculated_pnl, currency),
            f"[{result_color}]{record.result}[/{result_color}]",
            record.emotion_pre,
        )

    console.print(table)

    console.print(
        f"\n[bold]Trades:[/bold] {summary.total_trades} | "
        f"[bold]P&L:[/bold] {format_pnl(summary.total_pnl, currency)} | "
        f"[bold]Win Rate:[/bold] {summary.win_rate}%"
    )


@click.command()
@click.argument(
    "path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_EXPORT_NAME,
)
def export(path: Path) -> None:
    """Export all trades to a CSV file.

    The file starts with a UTF-8 byte-order mark so spreadsheet
    programs read non-ASCII notes correctly.

    \b
    Examples:
      tradejournal export                    # ./trading_journal_pro.csv
      tradejournal export ~/journal.csv
    """
    journal = get_journal()
    try:
        count = write_csv(journal.records, path)
    except WriteError as e:
        fail(escape(str(e)), title="Export Failed")
    finally:
        journal.close()

    console.print(f"[green]✓[/green] Exported {count} trades to [cyan]{escape(str(path))}[/cyan]")
