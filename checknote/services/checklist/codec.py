"""
Text <-> item list transform for checklist note bodies.

Body format: one record per line, ``name<TAB>state`` where state is ``x``
(checked) or ``o`` (unchecked). Names are not escaped; a name that contains a
tab or newline does not survive a round trip.
"""

from __future__ import annotations

from typing import Iterable, List

from .domain import Item

CHECKED = "x"
UNCHECKED = "o"
FIELD_SEP = "\t"
RECORD_SEP = "\n"


def parse(body: str) -> List[Item]:
    """
    Parse a serialized body into items.

    Malformed lines never raise: a missing state means unchecked and extra
    tab-separated fields are ignored. An empty body yields one blank item.
    """
    items: List[Item] = []
    for line in body.split(RECORD_SEP):
        fields = line.split(FIELD_SEP)
        name = fields[0]
        state = fields[1] if len(fields) > 1 else None
        items.append(Item(name=name, checked=state == CHECKED))
    return items


def serialize(items: Iterable[Item]) -> str:
    return RECORD_SEP.join(
        f"{item.name}{FIELD_SEP}{CHECKED if item.checked else UNCHECKED}"
        for item in items
    )
