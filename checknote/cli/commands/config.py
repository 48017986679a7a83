"""Configuration commands for the checknote CLI."""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from checknote.cli.utils import config

app = typer.Typer(help="Manage saved settings")
console = Console()


@app.command("set")
def set_config(
    url: Optional[str] = typer.Option(None, "--url", help="Notes API base URL"),
    note_id: Optional[str] = typer.Option(None, "--note-id", help="Default note"),
    author: Optional[str] = typer.Option(None, "--author", help="Author for saves"),
    timeout: Optional[float] = typer.Option(None, help="HTTP timeout in seconds"),
):
    """Save settings used by the item commands."""
    updates = {
        "url": url,
        "note_id": note_id,
        "author": author,
        "timeout": timeout,
    }
    updates = {k: v for k, v in updates.items() if v is not None}
    if not updates:
        console.print("[yellow]Warning:[/yellow] No updates specified")
        return

    current = config.load_config()
    current.update(updates)
    config.save_config(current)
    console.print(f"Saved settings to [bold]{config.config_path}[/bold]")


@app.command("show")
def show_config():
    """Show saved settings."""
    current = config.load_config()
    if not current:
        console.print("[yellow]No settings saved[/yellow]")
        return

    table = Table("Setting", "Value")
    for key in config.CONFIG_KEYS:
        if key in current:
            table.add_row(key, str(current[key]))
    console.print(table)
