#!/usr/bin/env python
"""Command line interface for checknote."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from checknote.cli.commands import config, items

app = typer.Typer(help="Edit a checklist stored in a note")
console = Console()

# Add command groups
app.add_typer(items.app, name="items")
app.add_typer(config.app, name="config")


@app.callback()
def callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging"
    ),
):
    """Edit a checklist stored in a note."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
