"""Public exports for note record models."""

from __future__ import annotations

from .records import (
    DEFAULT_BODY,
    DEFAULT_TEXT,
    DEFAULT_TITLE,
    GetNoteRequest,
    Note,
    SaveNoteRequest,
)

__all__ = [
    "Note",
    "GetNoteRequest",
    "SaveNoteRequest",
    "DEFAULT_TITLE",
    "DEFAULT_BODY",
    "DEFAULT_TEXT",
]
