"""Tests for the mobility evaluator."""

import random

import pytest

from konane.core.board import Board
from konane.core.enums import Color, GamePhase
from konane.core.rules import Rules
from konane.core.state import GameState
from konane.core.types import Position
from konane.engine.evaluator import MOBILITY_WEIGHT, WIN_SCORE, evaluate, mobility


def _opened() -> GameState:
    state = Rules.apply_opening_removal(GameState(8), Position(3, 3))
    return Rules.apply_opening_removal(state, Position(3, 4))


class TestMobility:
    def test_counts_jumps_for_either_side(self) -> None:
        state = _opened()
        assert mobility(state, Color.BLACK) == 3
        assert mobility(state, Color.WHITE) == Rules.count_jumps(state.board, Color.WHITE)

    def test_fresh_board_has_no_mobility(self) -> None:
        assert mobility(GameState(8), Color.BLACK) == 0


class TestEvaluate:
    def test_symmetric_start(self) -> None:
        assert evaluate(GameState(6), Color.BLACK) == 0

    def test_mobility_dominates_material(self) -> None:
        board = Board(6)
        board[Position(0, 0)] = Color.BLACK
        board[Position(0, 1)] = Color.WHITE
        board[Position(5, 5)] = Color.WHITE
        board[Position(5, 3)] = Color.WHITE
        state = GameState(board=board, phase=GamePhase.PLAY)
        # Black: one jump, one stone. White: no jump, three stones.
        assert evaluate(state, Color.BLACK) == MOBILITY_WEIGHT - 2

    @pytest.mark.parametrize("seed", range(4))
    def test_zero_sum(self, seed: int) -> None:
        rng = random.Random(seed)
        state = GameState(8)
        while not state.is_game_over:
            assert evaluate(state, Color.BLACK) == -evaluate(state, Color.WHITE)
            state = Rules.apply_move(state, rng.choice(Rules.legal_actions(state)))
        assert evaluate(state, Color.BLACK) == -evaluate(state, Color.WHITE)

    def test_game_over_scores(self) -> None:
        board = Board(4)
        board[Position(0, 0)] = Color.BLACK
        board[Position(0, 1)] = Color.WHITE
        state = GameState(board=board, phase=GamePhase.PLAY)
        over = Rules.apply_jump(state, Rules.legal_moves(state)[0])
        assert evaluate(over, Color.BLACK) == WIN_SCORE
        assert evaluate(over, Color.WHITE) == -WIN_SCORE
