"""
Checklist editor: one note's item list bound to its sync client.

Public API:
  - ChecklistEditor.load() -> Optional[Note]
  - ChecklistEditor.items / duplicates / search(query) / visible(query)
  - ChecklistEditor.add_item() / toggle_check(id) / edit_item(id, name)
    / delete_item(id) / reorder(ids) / move(id, position)
  - ChecklistEditor.unsaved_changes
  - ChecklistEditor.save() -> bool

Local edits only touch the in-memory list. The list is re-initialized from
the cached note whenever that note's body changes.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .checklist import Item, ItemList, Searcher, is_duplicate
from .notes import Note, NoteSync

LOGGER = logging.getLogger(__name__)


class ChecklistEditor:
    def __init__(
        self,
        sync: NoteSync,
        *,
        auto_save: bool = False,
        author: str = "",
        searcher: Optional[Searcher] = None,
    ):
        self.sync = sync
        self.auto_save = auto_save
        self.author = author
        self.items = ItemList.from_body("", searcher=searcher)
        self._seen_body = ""
        self._unsubscribe = sync.cache.subscribe(self._on_note_changed)

    # ------------------------------ State -----------------------------------

    @property
    def note(self) -> Optional[Note]:
        return self.sync.data

    @property
    def title(self) -> str:
        note = self.note
        return note.display_title if note else ""

    @property
    def unsaved_changes(self) -> bool:
        note = self.note
        return note is not None and self.items.body != note.body

    @property
    def duplicates(self) -> List[str]:
        return self.items.duplicates

    def is_duplicate(self, name: str) -> bool:
        return is_duplicate(name, self.duplicates)

    def search(self, query: str) -> List[Item]:
        return self.items.search(query)

    def visible(self, query: str = "") -> List[Item]:
        return self.items.visible(query)

    async def load(self) -> Optional[Note]:
        return await self.sync.fetch()

    def close(self) -> None:
        self._unsubscribe()

    # ---------------------------- Mutations ---------------------------------

    def add_item(self) -> Item:
        item = self.items.add_item()
        self._changed()
        return item

    def toggle_check(self, item_id: int) -> bool:
        return self._changed_if(self.items.toggle_check(item_id))

    def edit_item(self, item_id: int, name: str) -> bool:
        item = self.items.find(item_id)
        if item is None or item.checked:
            return False
        return self._changed_if(self.items.edit_item(item_id, name))

    def delete_item(self, item_id: int) -> bool:
        return self._changed_if(self.items.delete_item(item_id))

    def reorder(self, item_ids: Iterable[int]) -> None:
        self.items.reorder(item_ids)
        self._changed()

    def move(self, item_id: int, position: int) -> bool:
        return self._changed_if(self.items.move(item_id, position))

    # ------------------------------- Save -----------------------------------

    def build_note(self) -> Optional[Note]:
        """The note a save would write, or None when there's nothing to save."""
        note = self.note
        if note is None or not self.unsaved_changes:
            return None
        body = self.items.body
        return note.model_copy(
            update={
                "text": f"{note.title}\n\n{body}",
                "body": body,
                "author": note.author or self.author,
            }
        )

    async def save(self) -> bool:
        note = self.build_note()
        if note is None:
            LOGGER.debug("Save skipped: no unsaved changes")
            return False
        return await self.sync.save(note)

    # ---------------------------- Internals ---------------------------------

    def _changed(self) -> None:
        if self.auto_save:
            self.sync.schedule_save(self.build_note)

    def _changed_if(self, changed: bool) -> bool:
        if changed:
            self._changed()
        return changed

    def _on_note_changed(self, key, note: Optional[Note]) -> None:
        if key != self.sync.note_id:
            return
        body = note.body if note is not None else ""
        if body == self._seen_body:
            return
        self._seen_body = body
        if body == self.items.body:
            # Our own optimistic write; keep the current item ids.
            return
        LOGGER.debug("Note body changed, reloading %d bytes", len(body))
        self.items.load(body)
