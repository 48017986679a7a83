from __future__ import annotations

from collections import Counter
from typing import Iterable, List

from .domain import Item


def get_duplicates(items: Iterable[Item]) -> List[str]:
    """Names that occur more than once, in order of first occurrence.

    Comparison is exact: no case folding or trimming.
    """
    counts = Counter(item.name for item in items)
    return [name for name, count in counts.items() if count > 1]


def is_duplicate(name: str, duplicates: Iterable[str]) -> bool:
    return any(duplicate == name for duplicate in duplicates)
