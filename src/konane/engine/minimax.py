"""Pure-Python Kōnane search (negamax form of minimax + alpha-beta)."""

from __future__ import annotations

import logging
from time import sleep

from konane.core.errors import NoLegalMove
from konane.core.move import Move
from konane.core.rules import Rules
from konane.core.state import GameState
from konane.engine.evaluator import WIN_SCORE, evaluate
from konane.engine.search import (
    CancelCheck,
    IEngine,
    SearchCancelled,
    SearchLimits,
    SearchResult,
)
from konane.engine.transposition import Bound, TranspositionTable

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = 10 * WIN_SCORE
_YIELD_EVERY_NODES = 4096


def _never_cancelled() -> bool:
    return False


class MinimaxSearchEngine(IEngine):
    """Depth-limited alpha-beta searcher with a per-search transposition table.

    Moves are tried in ``Rules.legal_actions`` order and the root keeps the
    first of equally scored moves, so results are deterministic and do not
    depend on whether the table is enabled.
    """

    __slots__ = (
        "_cancel_check",
        "_nodes",
        "_last_yield_nodes",
        "_tt",
    )

    def __init__(self) -> None:
        self._nodes = 0
        self._last_yield_nodes = 0
        self._cancel_check: CancelCheck = _never_cancelled
        self._tt: TranspositionTable | None = None

    @property
    def transposition_table(self) -> TranspositionTable | None:
        """Table of the most recent search, if it used one."""
        return self._tt

    def search(
        self,
        state: GameState,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        root_moves = Rules.legal_actions(state)
        if not root_moves:
            raise NoLegalMove(f"{state.side_to_move} has no legal move to search")

        self._nodes = 0
        self._last_yield_nodes = 0
        self._cancel_check = is_cancelled or _never_cancelled
        self._tt = (
            TranspositionTable(limits.tt_max_entries)
            if limits.use_transposition_table
            else None
        )

        if limits.max_depth == 0:
            self._nodes = 1
            score = evaluate(state, state.side_to_move)
            return SearchResult(root_moves[0], score, 0, self._nodes)

        score, best_move = self._search_root(state, root_moves, limits.max_depth)
        tt_hits = self._tt.hits if self._tt is not None else 0
        _LOGGER.debug(
            "search depth=%d nodes=%d score=%d tt_hits=%d best=%s",
            limits.max_depth,
            self._nodes,
            score,
            tt_hits,
            best_move,
        )
        return SearchResult(best_move, score, limits.max_depth, self._nodes, tt_hits)

    def _search_root(
        self,
        state: GameState,
        root_moves: list[Move],
        depth: int,
    ) -> tuple[int, Move]:
        best_score = -_INF_SCORE
        best_move = root_moves[0]
        alpha = -_INF_SCORE
        beta = _INF_SCORE

        for move in root_moves:
            child = Rules.successor(state, move)
            score = -self._negamax(child, depth - 1, -beta, -alpha, ply=1)

            # Strict comparison: ties keep the earlier move.
            if score > best_score:
                best_score = score
                best_move = move
            if score > alpha:
                alpha = score

        return best_score, best_move

    def _negamax(
        self,
        state: GameState,
        depth: int,
        alpha: int,
        beta: int,
        ply: int,
    ) -> int:
        self._check_cancelled()
        self._nodes += 1

        if state.is_game_over:
            # The side to move is the one left without a jump.
            return -WIN_SCORE + ply

        if depth <= 0:
            return evaluate(state, state.side_to_move)

        alpha_orig = alpha
        beta_orig = beta
        tt_key = state.fingerprint

        if self._tt is not None:
            tt_entry = self._tt.probe(tt_key, depth)
            if tt_entry is not None:
                if tt_entry.bound == Bound.EXACT:
                    return tt_entry.score
                if tt_entry.bound == Bound.LOWER:
                    alpha = max(alpha, tt_entry.score)
                else:
                    beta = min(beta, tt_entry.score)
                if alpha >= beta:
                    return tt_entry.score

        best_score = -_INF_SCORE
        best_move: Move | None = None

        for move in Rules.legal_actions(state):
            child = Rules.successor(state, move)
            score = -self._negamax(child, depth - 1, -beta, -alpha, ply + 1)

            if score > best_score:
                best_score = score
                best_move = move
            if score > alpha:
                alpha = score
            if alpha >= beta:
                break

        if self._tt is not None:
            bound = Bound.EXACT
            if best_score <= alpha_orig:
                bound = Bound.UPPER
            elif best_score >= beta_orig:
                bound = Bound.LOWER
            self._tt.store(tt_key, depth, best_score, bound, best_move=best_move)
        return best_score

    def _check_cancelled(self) -> None:
        if self._nodes - self._last_yield_nodes >= _YIELD_EVERY_NODES:
            # Let a GUI thread run while a worker thread searches.
            self._last_yield_nodes = self._nodes
            sleep(0.001)
        if self._cancel_check():
            raise SearchCancelled("Search cancelled")


def search(state: GameState, depth: int) -> tuple[Move, int]:
    """Best move for the player to move and its score, searching *depth* plies."""
    result = MinimaxSearchEngine().search(state, SearchLimits(max_depth=depth))
    return result.best_move, result.score
