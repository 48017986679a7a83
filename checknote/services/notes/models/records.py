"""
Pydantic models for the note record store.

Models for these operations:
    - Fetch a note by id (or the store's default id)
    - Upsert a note
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from ._base import NoteModel

DEFAULT_TITLE = "untitled"
DEFAULT_BODY = "body"
DEFAULT_TEXT = f"{DEFAULT_TITLE}\n{DEFAULT_BODY}"

# Leading marker some notes carry in their title; hidden in display.
TITLE_MARKER = "= "


class Note(NoteModel):
    """A stored note. ``body`` holds the serialized checklist."""

    id: str
    title: str = ""
    text: str = ""
    body: str = ""
    author: str = ""

    @property
    def display_title(self) -> str:
        return self.title.replace(TITLE_MARKER, "", 1)


class GetNoteRequest(NoteModel):
    """Request payload for ``notes.get``. ``None`` asks for the default note."""

    id: Optional[str] = None


class SaveNoteRequest(NoteModel):
    """
    Request payload for ``notes.save``.

    Every field but ``author`` is optional; the store fills in defaults.
    """

    id: Optional[str] = None
    text: Optional[str] = None
    title: Optional[str] = None
    body: Optional[str] = None
    author: str = Field(...)

    @classmethod
    def from_note(cls, note: Note) -> "SaveNoteRequest":
        return cls(
            id=note.id,
            text=note.text,
            title=note.title,
            body=note.body,
            author=note.author,
        )

    def with_defaults(self, note_id: str) -> Note:
        """Materialize the note a store would persist for this request."""
        return Note(
            id=note_id,
            text=self.text if self.text is not None else DEFAULT_TEXT,
            title=self.title if self.title is not None else DEFAULT_TITLE,
            body=self.body if self.body is not None else DEFAULT_BODY,
            author=self.author,
        )
