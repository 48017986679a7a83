"""Public API for the note record store and its sync client."""

from .client import (
    HttpNoteStore,
    NoteNotFound,
    NotesApiError,
    NotesError,
    NotesTransportError,
    NotesValidationError,
)
from .models import GetNoteRequest, Note, SaveNoteRequest
from .options import StoreConfig
from .store import MemoryNoteStore, NoteStore
from .sync import NoteCache, NoteSync, OptimisticUpdate, UpdateState

__all__ = [
    "Note",
    "GetNoteRequest",
    "SaveNoteRequest",
    "StoreConfig",
    "NoteStore",
    "MemoryNoteStore",
    "HttpNoteStore",
    "NoteSync",
    "NoteCache",
    "OptimisticUpdate",
    "UpdateState",
    "NotesError",
    "NoteNotFound",
    "NotesApiError",
    "NotesTransportError",
    "NotesValidationError",
]
