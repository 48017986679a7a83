# checknote/services/checklist/domain.py
from __future__ import annotations

import itertools
from dataclasses import dataclass, field

_ids = itertools.count(1)


def next_item_id() -> int:
    """Return a fresh process-unique item identifier."""
    return next(_ids)


@dataclass
class Item:
    """
    One checklist row.

    ``id`` is assigned at creation and used for every mutation lookup. It is
    not part of the serialized body and is ignored by equality, so two items
    with the same name and state compare equal.
    """

    name: str = ""
    checked: bool = False
    id: int = field(default_factory=next_item_id, compare=False)

    def copy(self) -> "Item":
        return Item(name=self.name, checked=self.checked, id=self.id)
