"""Public API for checklist bodies."""

from .codec import parse, serialize
from .controller import ItemList, sort_by_checked
from .domain import Item
from .duplicates import get_duplicates, is_duplicate
from .search import LevenshteinSearcher, SearchConfig, Searcher, SearchIndex

__all__ = [
    "Item",
    "ItemList",
    "parse",
    "serialize",
    "get_duplicates",
    "is_duplicate",
    "sort_by_checked",
    "Searcher",
    "SearchConfig",
    "SearchIndex",
    "LevenshteinSearcher",
]
