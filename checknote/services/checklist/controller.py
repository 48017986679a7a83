"""
In-memory checklist state and its mutations.

Every mutation builds a new copy of the list and funnels it through
`sort_by_checked`, so unchecked items always precede checked ones while the
relative order inside each group is preserved. Items are addressed by their
`Item.id`; an unknown id is a silent no-op. Views hand out copies, so
changing a returned item never touches the list.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional

from .codec import parse, serialize
from .domain import Item
from .duplicates import get_duplicates
from .search import SearchIndex, Searcher

LOGGER = logging.getLogger(__name__)


def sort_by_checked(items: Iterable[Item]) -> List[Item]:
    """Stable partition: unchecked first, checked last."""
    return sorted(items, key=lambda item: item.checked)


class ItemList:
    def __init__(
        self,
        items: Optional[Iterable[Item]] = None,
        *,
        searcher: Optional[Searcher] = None,
    ):
        self._searcher = searcher
        self._items: List[Item] = sort_by_checked(item.copy() for item in items or [])
        self._index: Optional[SearchIndex] = None

    @classmethod
    def from_body(cls, body: str, *, searcher: Optional[Searcher] = None) -> "ItemList":
        return cls(parse(body), searcher=searcher)

    # ------------------------------ Views -----------------------------------

    @property
    def items(self) -> List[Item]:
        return self._copy()

    def __iter__(self) -> Iterator[Item]:
        return iter(self._copy())

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, position: int) -> Item:
        return self._items[position].copy()

    @property
    def body(self) -> str:
        return serialize(self._items)

    @property
    def duplicates(self) -> List[str]:
        return get_duplicates(self._items)

    def index_of(self, item_id: int) -> int:
        return self._position(self._items, item_id)

    def find(self, item_id: int) -> Optional[Item]:
        position = self.index_of(item_id)
        return self._items[position].copy() if position >= 0 else None

    @property
    def index(self) -> SearchIndex:
        if self._index is None:
            self._index = SearchIndex(self._items, self._searcher)
        return self._index

    def search(self, query: str) -> List[Item]:
        return [item.copy() for item in self.index.search(query)]

    def visible(self, query: str) -> List[Item]:
        return [item.copy() for item in self.index.visible(query)]

    # ---------------------------- Mutations ---------------------------------

    def reset(self, items: Iterable[Item]) -> None:
        self._update([item.copy() for item in items])

    def load(self, body: str) -> None:
        self._update(parse(body))

    def add_item(self) -> Item:
        """Prepend a blank unchecked item; it lands first among the unchecked."""
        item = Item()
        self._update([item, *self._copy()])
        return item.copy()

    def toggle_check(self, item_id: int) -> bool:
        items = self._copy()
        position = self._position(items, item_id)
        if position < 0:
            return False
        items[position].checked = not items[position].checked
        self._update(items)
        return True

    def edit_item(self, item_id: int, name: str) -> bool:
        """Rename an item. Checked items stay read-only until unchecked."""
        items = self._copy()
        position = self._position(items, item_id)
        if position < 0:
            return False
        if items[position].checked:
            LOGGER.debug("edit ignored for checked item id=%s", item_id)
            return False
        items[position].name = name
        self._update(items)
        return True

    def delete_item(self, item_id: int) -> bool:
        items = self._copy()
        position = self._position(items, item_id)
        if position < 0:
            return False
        del items[position]
        self._update(items)
        return True

    def reorder(self, item_ids: Iterable[int]) -> None:
        """
        Apply a user supplied order (drag and drop). Unknown ids are skipped and
        items missing from ``item_ids`` keep their relative order at the end.
        The checked partition is re-applied afterwards.
        """
        by_id = {item.id: item for item in self._copy()}
        ordered: List[Item] = []
        for item_id in item_ids:
            item = by_id.pop(item_id, None)
            if item is not None:
                ordered.append(item)
        ordered.extend(by_id.values())
        self._update(ordered)

    def move(self, item_id: int, new_position: int) -> bool:
        items = self._copy()
        position = self._position(items, item_id)
        if position < 0:
            return False
        item = items.pop(position)
        new_position = max(0, min(new_position, len(items)))
        items.insert(new_position, item)
        self._update(items)
        return True

    # ---------------------------- Internals ---------------------------------

    def _copy(self) -> List[Item]:
        return [item.copy() for item in self._items]

    @staticmethod
    def _position(items: List[Item], item_id: int) -> int:
        for position, item in enumerate(items):
            if item.id == item_id:
                return position
        return -1

    def _update(self, items: List[Item]) -> None:
        self._items = sort_by_checked(items)
        self._index = None
