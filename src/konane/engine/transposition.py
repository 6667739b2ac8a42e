"""Bounded transposition table keyed by state fingerprints."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from konane.core.move import Move


class Bound(IntEnum):
    """How a stored score relates to the true minimax value."""

    EXACT = 0
    LOWER = 1
    UPPER = 2


@dataclass(slots=True)
class TTEntry:
    depth: int
    score: int
    bound: Bound
    best_move: Move | None


class TranspositionTable:
    """Fingerprint -> :class:`TTEntry` map with oldest-entry eviction.

    Not thread-safe; one table belongs to one search invocation.
    """

    __slots__ = ("_table", "max_entries", "hits", "misses", "evictions")

    def __init__(self, max_entries: int = 100_000) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self._table: dict[int, TTEntry] = {}
        self.max_entries = max_entries
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def probe(self, key: int, depth: int) -> TTEntry | None:
        """Entry for *key* if it was searched at least *depth* plies deep."""
        entry = self._table.get(key)
        if entry is None or entry.depth < depth:
            self.misses += 1
            return None
        self.hits += 1
        return entry

    def store(
        self,
        key: int,
        depth: int,
        score: int,
        bound: Bound,
        best_move: Move | None,
    ) -> None:
        existing = self._table.get(key)
        if existing is not None:
            if existing.depth > depth:
                return
            del self._table[key]
        elif len(self._table) >= self.max_entries:
            # Dicts keep insertion order, so the first key is the oldest.
            del self._table[next(iter(self._table))]
            self.evictions += 1
        self._table[key] = TTEntry(depth=depth, score=score, bound=bound, best_move=best_move)

    def clear(self) -> None:
        self._table.clear()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def __contains__(self, key: int) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)

    def stats(self) -> dict[str, int]:
        return {
            "entries": len(self._table),
            "max_entries": self.max_entries,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
        }
