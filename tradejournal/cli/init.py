"""Configuration command for TradeJournal CLI."""

import click
from rich.panel import Panel

from tradejournal.cli.common import console
from tradejournal.config import create_template_config, get_config_path


@click.command("init")
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Overwrite an existing configuration file.",
)
def init(force: bool) -> None:
    """Create the configuration file.

    Writes config.toml with the default storage backend, account id
    and starting balance.

    \b
    Examples:
      tradejournal init
      tradejournal init --force
    """
    config_path = get_config_path()

    if config_path.exists() and not force:
        console.print(Panel(
            f"[yellow]Configuration already exists at:[/yellow]\n"
            f"[cyan]{config_path}[/cyan]\n\n"
            "[dim]Use --force to overwrite it.[/dim]",
            title="[bold yellow]Config[/bold yellow]",
            border_style="yellow",
        ))
        return

    config_path = create_template_config(config_path)
    console.print(Panel(
        f"[green]✓[/green] Configuration file created at:\n"
        f"[cyan]{config_path}[/cyan]\n\n"
        "[dim]Edit the storage section to choose the sqlite or json backend and the\n"
        "account id every trade is written to.[/dim]",
        title="[bold green]Config Created[/bold green]",
        border_style="green",
    ))
