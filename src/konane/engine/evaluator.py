"""Static position evaluation (mobility heuristic)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from konane.core.enums import Color, GamePhase
from konane.core.rules import Rules

if TYPE_CHECKING:
    from konane.core.state import GameState

WIN_SCORE = 1_000_000
# Larger than the widest stone-count gap (128 on a 16x16 board), so stones
# only break mobility ties.
MOBILITY_WEIGHT = 256


def mobility(state: GameState, color: Color) -> int:
    """Jumps *color* would have on the current board."""
    return Rules.count_jumps(state.board, color)


def evaluate(state: GameState, perspective: Color) -> int:
    """Score *state* for *perspective*; positive is good for that color.

    Zero-sum: ``evaluate(s, Color.BLACK) == -evaluate(s, Color.WHITE)``.
    """
    opponent = perspective.opposite
    if state.phase == GamePhase.GAME_OVER:
        if state.winner == perspective:
            return WIN_SCORE
        if state.winner == opponent:
            return -WIN_SCORE
        return 0

    board = state.board
    score = MOBILITY_WEIGHT * (mobility(state, perspective) - mobility(state, opponent))
    score += board.count(perspective) - board.count(opponent)
    return score
