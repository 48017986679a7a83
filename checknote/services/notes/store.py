"""
Record store seam.

The sync layer only needs `get` and `save`. `HttpNoteStore` (client.py) talks
to a remote backend; `MemoryNoteStore` keeps notes in a dict with the same
upsert semantics.
"""

from __future__ import annotations

import logging
import uuid
from typing import Dict, Iterable, Optional, Protocol

from .client import NoteNotFound
from .models import Note, SaveNoteRequest

LOGGER = logging.getLogger(__name__)


class NoteStore(Protocol):
    """Minimal record store required by NoteSync."""

    def get(self, note_id: Optional[str] = None) -> Note: ...

    def save(self, request: SaveNoteRequest) -> Note: ...


class MemoryNoteStore:
    """
    In-process record store.

    ``save`` is an upsert: an existing id is updated, anything else creates a
    note under a freshly generated id. Fields absent from the request fall back
    to the store defaults on both paths.
    """

    def __init__(
        self, notes: Iterable[Note] = (), *, default_note_id: Optional[str] = None
    ):
        self._notes: Dict[str, Note] = {note.id: note for note in notes}
        self.default_note_id = default_note_id

    def get(self, note_id: Optional[str] = None) -> Note:
        target = note_id or self.default_note_id
        note = self._notes.get(target) if target else None
        if note is None:
            LOGGER.warning("Note not found: %s", target)
            raise NoteNotFound(f"Note not found: {target}")
        return note

    def save(self, request: SaveNoteRequest) -> Note:
        if request.id and request.id in self._notes:
            note_id = request.id
            LOGGER.debug("Updating note %s", note_id)
        else:
            note_id = uuid.uuid4().hex
            LOGGER.debug("Creating note %s", note_id)
        note = request.with_defaults(note_id)
        self._notes[note_id] = note
        return note

    def __contains__(self, note_id: object) -> bool:
        return note_id in self._notes

    def __len__(self) -> int:
        return len(self._notes)
