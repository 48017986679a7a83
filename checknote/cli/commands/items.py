"""Checklist item commands for the checknote CLI."""

import asyncio
from typing import Awaitable, Callable, Optional

import typer
from rich.console import Console
from rich.table import Table

from checknote.cli.utils import config
from checknote.services.checklist import Item
from checknote.services.editor import ChecklistEditor
from checknote.services.notes import NotesError, NoteSync

app = typer.Typer(help="Checklist item commands")
console = Console()

Action = Callable[[ChecklistEditor], Awaitable[None]]


@app.callback()
def callback(
    ctx: typer.Context,
    url: Optional[str] = typer.Option(None, "--url", help="Notes API base URL"),
    note_id: Optional[str] = typer.Option(None, "--note-id", help="Note to edit"),
    author: Optional[str] = typer.Option(None, "--author", help="Author for saves"),
):
    """Edit the checklist stored in a note."""
    ctx.obj = {"url": url, "note_id": note_id, "author": author}


def _run(ctx: typer.Context, action: Action) -> None:
    options = ctx.obj or {}
    store_config = config.resolve_store_config(
        url=options.get("url"),
        note_id=options.get("note_id"),
        author=options.get("author"),
    )
    store = config.get_store(store_config)
    asyncio.run(_session(store, store_config.author, action))


async def _session(store, author: str, action: Action) -> None:
    sync = NoteSync(store)
    editor = ChecklistEditor(sync, author=author)
    try:
        note = await editor.load()
        if note is None:
            console.print("[bold red]Error:[/bold red] Note not found")
            raise typer.Exit(1)
        await action(editor)
    except NotesError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)
    finally:
        editor.close()
        await sync.close()


async def _save(editor: ChecklistEditor) -> None:
    if not editor.unsaved_changes:
        return
    if not await editor.save():
        console.print("[bold red]Error:[/bold red] Save failed, changes rolled back")
        raise typer.Exit(1)


def _item_at(editor: ChecklistEditor, position: int) -> Item:
    if position < 1 or position > len(editor.items):
        console.print(f"[bold red]Error:[/bold red] No item at position {position}")
        raise typer.Exit(1)
    return editor.items[position - 1]


def _render(editor: ChecklistEditor, query: str = "") -> None:
    table = Table("#", "Done", "Item", title=editor.title or None)
    for item in editor.visible(query):
        position = editor.items.index_of(item.id) + 1
        name = f"[dim strike]{item.name}[/dim strike]" if item.checked else item.name
        if editor.is_duplicate(item.name):
            name = f"{name} [magenta](duplicate)[/magenta]"
        table.add_row(str(position), "x" if item.checked else "", name)
    console.print(table)


@app.command("show")
def show(
    ctx: typer.Context,
    search: str = typer.Option("", "--search", "-s", help="Fuzzy filter by name"),
):
    """Show the checklist."""

    async def action(editor: ChecklistEditor) -> None:
        if search and not editor.search(search):
            console.print(f"[yellow]No matches for[/yellow] {search!r}")
        _render(editor, search)

    _run(ctx, action)


@app.command("add")
def add_item(ctx: typer.Context, name: str = typer.Argument("", help="Item text")):
    """Add an item to the top of the list."""

    async def action(editor: ChecklistEditor) -> None:
        item = editor.add_item()
        if name:
            editor.edit_item(item.id, name)
        await _save(editor)
        console.print(f"Added [bold]{name or '(blank)'}[/bold]")

    _run(ctx, action)


@app.command("check")
def toggle_check(ctx: typer.Context, position: int = typer.Argument(...)):
    """Check or uncheck an item."""

    async def action(editor: ChecklistEditor) -> None:
        item = _item_at(editor, position)
        editor.toggle_check(item.id)
        # The save refetches and may re-parse the body, so item ids can change.
        state = "unchecked" if item.checked else "checked"
        await _save(editor)
        console.print(f"[bold]{item.name}[/bold] {state}")

    _run(ctx, action)


@app.command("edit")
def edit_item(
    ctx: typer.Context,
    position: int = typer.Argument(...),
    name: str = typer.Argument(..., help="New item text"),
):
    """Rename an item. Checked items must be unchecked first."""

    async def action(editor: ChecklistEditor) -> None:
        item = _item_at(editor, position)
        if item.checked:
            console.print("[yellow]Warning:[/yellow] Uncheck the item before editing")
            return
        editor.edit_item(item.id, name)
        await _save(editor)
        console.print(f"Renamed to [bold]{name}[/bold]")

    _run(ctx, action)


@app.command("delete")
def delete_item(
    ctx: typer.Context,
    position: int = typer.Argument(...),
    force: bool = typer.Option(
        False, "--force", "-f", help="Delete without confirmation"
    ),
):
    """Delete an item."""

    async def action(editor: ChecklistEditor) -> None:
        item = _item_at(editor, position)
        if not force:
            confirmed = typer.confirm(f"Are you sure you want to delete {item.name!r}?")
            if not confirmed:
                console.print("Deletion cancelled")
                return
        editor.delete_item(item.id)
        await _save(editor)
        console.print(f"Deleted [bold]{item.name}[/bold]")

    _run(ctx, action)


@app.command("move")
def move_item(
    ctx: typer.Context,
    position: int = typer.Argument(...),
    new_position: int = typer.Argument(...),
):
    """Move an item. Checked items always stay below unchecked ones."""

    async def action(editor: ChecklistEditor) -> None:
        item = _item_at(editor, position)
        editor.move(item.id, new_position - 1)
        await _save(editor)
        _render(editor)

    _run(ctx, action)


@app.command("dupes")
def duplicates(ctx: typer.Context):
    """List item names that appear more than once."""

    async def action(editor: ChecklistEditor) -> None:
        dupes = editor.duplicates
        if not dupes:
            console.print("No duplicates found")
            return
        for name in dupes:
            console.print(f"- {name}")

    _run(ctx, action)
