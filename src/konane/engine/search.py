"""Shared engine search models and protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from konane.core.move import Move
    from konane.core.state import GameState

CancelCheck = Callable[[], bool]

DEFAULT_DEPTH = 4


class SearchCancelled(Exception):
    """Raised when a running search was cancelled; no move is produced."""


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search configuration, fixed for the lifetime of an AI player."""

    max_depth: int = DEFAULT_DEPTH
    use_transposition_table: bool = True
    tt_max_entries: int = 100_000

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError("Search depth must be >= 0")
        if self.tt_max_entries <= 0:
            raise ValueError("Transposition table capacity must be positive")


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move
    score: int
    depth: int
    nodes: int
    tt_hits: int = 0


class IEngine(Protocol):
    """Protocol for search engines used by AI players and the worker bridge."""

    def search(
        self,
        state: GameState,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult: ...
