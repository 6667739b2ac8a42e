"""Search engine package: evaluator, alpha-beta search and Qt worker bridge."""

from konane.engine.evaluator import MOBILITY_WEIGHT, WIN_SCORE, evaluate, mobility
from konane.engine.minimax import MinimaxSearchEngine, search
from konane.engine.search import (
    DEFAULT_DEPTH,
    CancelCheck,
    IEngine,
    SearchCancelled,
    SearchLimits,
    SearchResult,
)
from konane.engine.transposition import Bound, TranspositionTable, TTEntry

DefaultEngine: type[IEngine] = MinimaxSearchEngine

__all__ = [
    "DEFAULT_DEPTH",
    "MOBILITY_WEIGHT",
    "WIN_SCORE",
    "Bound",
    "CancelCheck",
    "DefaultEngine",
    "IEngine",
    "MinimaxSearchEngine",
    "SearchCancelled",
    "SearchLimits",
    "SearchResult",
    "TTEntry",
    "TranspositionTable",
    "evaluate",
    "mobility",
    "search",
]
