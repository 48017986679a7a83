"""
Record store configuration.

Passed explicitly into store constructors; stores never read the process
environment for the note id themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StoreConfig:
    # Base URL of the notes endpoint, e.g. https://example.com/api
    base_url: str = ""

    # Note returned by ``get()`` when no id is given.
    note_id: Optional[str] = None

    # Seconds; applied to every HTTP call.
    timeout: float = 10.0

    # Author written on saves when the cached note has none.
    author: str = ""
