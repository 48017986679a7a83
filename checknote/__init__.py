"""Single-note checklist editor backed by a remote note record store."""

from checknote.services.checklist import Item, ItemList, parse, serialize
from checknote.services.editor import ChecklistEditor
from checknote.services.notes import (
    HttpNoteStore,
    MemoryNoteStore,
    Note,
    NoteSync,
    StoreConfig,
)

__all__ = [
    "ChecklistEditor",
    "HttpNoteStore",
    "Item",
    "ItemList",
    "MemoryNoteStore",
    "Note",
    "NoteSync",
    "StoreConfig",
    "parse",
    "serialize",
]
