"""
Typo-tolerant search over checklist items.

Defines the seam (`Searcher`) the list controller needs, plus a default
Levenshtein-backed implementation. Scoring follows the familiar Fuse.js shape:

    score = edit_errors / len(query) + match_offset / distance

lower is better, and anything above `threshold` is not a match. Only the
empty-query and no-match contracts are relied upon by callers; the exact
ranking is an implementation detail.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple

import Levenshtein

from .domain import Item

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchConfig:
    # Item attributes searched; the best scoring key wins.
    keys: Tuple[str, ...] = ("name",)

    # 0.0 requires a perfect match, 1.0 matches anything.
    threshold: float = 0.6

    # How far from the start of the name a match may drift before the offset
    # penalty alone pushes it past the threshold.
    distance: int = 100

    case_sensitive: bool = False


class Searcher(Protocol):
    """Ranks items against a query. Must not mutate the items."""

    def search(self, items: Sequence[Item], query: str) -> List[Item]: ...


class LevenshteinSearcher:
    def __init__(self, config: Optional[SearchConfig] = None):
        self.config = config or SearchConfig()

    def score(self, text: str, query: str) -> Optional[float]:
        """Return the best score of ``query`` inside ``text`` or None if no match."""
        cfg = self.config
        if not cfg.case_sensitive:
            text = text.lower()
            query = query.lower()
        qlen = len(query)
        if not qlen:
            return 0.0

        offset = text.find(query)
        if offset >= 0:
            best = offset / cfg.distance
        else:
            best = float("inf")
            if len(text) <= qlen:
                best = Levenshtein.distance(query, text) / qlen
            else:
                for start in range(len(text) - qlen + 1):
                    for width in range(max(1, qlen - 1), qlen + 2):
                        window = text[start : start + width]
                        errors = Levenshtein.distance(query, window)
                        candidate = errors / qlen + start / cfg.distance
                        if candidate < best:
                            best = candidate

        return best if best <= cfg.threshold else None

    def search(self, items: Sequence[Item], query: str) -> List[Item]:
        scored = []
        for position, item in enumerate(items):
            scores = [
                s
                for s in (
                    self.score(str(getattr(item, key, "") or ""), query)
                    for key in self.config.keys
                )
                if s is not None
            ]
            if scores:
                scored.append((min(scores), position, item))
        scored.sort(key=lambda entry: (entry[0], entry[1]))
        LOGGER.debug("search %r matched %d of %d items", query, len(scored), len(items))
        return [item for _, _, item in scored]


class SearchIndex:
    """
    Search view over one snapshot of the item list.

    Cheap to build; the controller rebuilds it whenever the list changes
    instead of updating it incrementally.
    """

    def __init__(self, items: Iterable[Item], searcher: Optional[Searcher] = None):
        self._items = list(items)
        self._searcher = searcher or LevenshteinSearcher()

    @property
    def items(self) -> List[Item]:
        return list(self._items)

    def search(self, query: str) -> List[Item]:
        """Ranked matches; the full list in current order for an empty query."""
        if query == "":
            return list(self._items)
        return self._searcher.search(self._items, query)

    def visible(self, query: str) -> List[Item]:
        """What a list view shows: matches, or everything when nothing matches."""
        results = self.search(query)
        if query != "" and results:
            return results
        return list(self._items)
