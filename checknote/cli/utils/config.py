"""Configuration helpers for the checknote CLI."""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console

from checknote.services.notes import HttpNoteStore, NoteStore, StoreConfig

console = Console()

# State storage
config_dir = os.path.expanduser("~/.config/checknote")
config_path = os.path.join(config_dir, "config.json")

ENV_URL = "CHECKNOTE_URL"
ENV_NOTE_ID = "CHECKNOTE_NOTE_ID"
ENV_AUTHOR = "CHECKNOTE_AUTHOR"

CONFIG_KEYS = ("url", "note_id", "author", "timeout")


def load_config() -> Dict[str, Any]:
    """Load configuration from file."""
    try:
        if os.path.exists(config_path):
            with open(config_path, "r", encoding="utf-8") as f:
                return json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        console.print(f"[yellow]Warning:[/yellow] Could not load config file: {exc}")
    return {}


def save_config(config: Dict[str, Any]) -> None:
    """Save configuration to file."""
    try:
        Path(config_path).parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        # Ensure file has restrictive permissions
        os.chmod(config_path, 0o600)
    except OSError as exc:
        console.print(f"[yellow]Warning:[/yellow] Could not save config file: {exc}")


def resolve_store_config(
    url: Optional[str] = None,
    note_id: Optional[str] = None,
    author: Optional[str] = None,
) -> StoreConfig:
    """Resolve store settings: option > environment > config file."""
    config: Dict[str, Any] = load_config()

    resolved_url = url or os.environ.get(ENV_URL) or config.get("url")
    if not resolved_url:
        console.print("[bold red]Error:[/bold red] No notes URL configured")
        console.print(
            f"Pass --url, set {ENV_URL}, or run: checknote config set --url <url>"
        )
        raise typer.Exit(1)

    return StoreConfig(
        base_url=resolved_url,
        note_id=note_id or os.environ.get(ENV_NOTE_ID) or config.get("note_id"),
        author=author or os.environ.get(ENV_AUTHOR) or config.get("author") or "",
        timeout=float(config.get("timeout") or StoreConfig.timeout),
    )


def get_store(store_config: StoreConfig) -> NoteStore:
    """Build the record store for the resolved configuration."""
    return HttpNoteStore(store_config)
