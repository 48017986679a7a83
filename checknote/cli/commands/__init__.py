"""Command modules for the checknote CLI."""

from checknote.cli.commands import config, items

__all__ = ["config", "items"]
