"""Tests for GameController — the orchestrator."""

import pytest

from konane.core.enums import Color, GamePhase, GameResult
from konane.core.errors import IllegalMove, IllegalRemoval, InvalidPhase, MalformedRecord
from konane.core.move import Jump, OpeningRemoval
from konane.core.record import export_game
from konane.core.rules import Rules
from konane.core.types import Position
from konane.game.controller import GameController
from konane.game.interfaces import PositionSelected
from konane.game.player import AIPlayer, HumanPlayer


def _make_hh_controller(board_size: int = 8) -> GameController:
    """Helper: human vs human game."""
    ctrl = GameController()
    ctrl.new_game(
        HumanPlayer(Color.BLACK, "B"),
        HumanPlayer(Color.WHITE, "W"),
        board_size=board_size,
    )
    return ctrl


def _make_ai_controller(board_size: int = 6, depth: int = 1) -> GameController:
    ctrl = GameController()
    ctrl.new_game(
        AIPlayer(Color.BLACK, depth=depth),
        AIPlayer(Color.WHITE, depth=depth),
        board_size=board_size,
    )
    return ctrl


class TestNewGame:
    def test_fresh_state(self) -> None:
        ctrl = _make_hh_controller(6)
        assert ctrl.state.board_size == 6
        assert ctrl.state.phase == GamePhase.OPENING_BLACK_REMOVAL

    def test_players_assigned(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.player(Color.WHITE) is not None
        assert ctrl.player(Color.BLACK) is not None

    def test_current_player_is_black(self) -> None:
        ctrl = _make_hh_controller()
        cp = ctrl.current_player
        assert cp is not None and cp.color == Color.BLACK

    def test_swapped_players_rejected(self) -> None:
        with pytest.raises(ValueError):
            GameController().new_game(
                HumanPlayer(Color.WHITE), HumanPlayer(Color.BLACK)
            )

    def test_invalid_board_size(self) -> None:
        with pytest.raises(ValueError):
            _make_hh_controller(7)

    def test_new_game_cancels_running_ai(self) -> None:
        cancelled = []
        ctrl = GameController()
        ctrl.new_game(
            AIPlayer(
                Color.BLACK,
                on_request_move=lambda _state: None,
                on_cancel=lambda: cancelled.append(True),
            ),
            HumanPlayer(Color.WHITE),
        )
        ctrl.poll()
        ctrl.new_game(HumanPlayer(Color.BLACK), HumanPlayer(Color.WHITE))
        assert cancelled == [True]


class TestSubmitMove:
    def test_opening_then_jump(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.submit_move(OpeningRemoval(Color.BLACK, Position(3, 3)))
        assert ctrl.submit_move(OpeningRemoval(Color.WHITE, Position(3, 4)))
        assert ctrl.state.phase == GamePhase.PLAY
        jump = Rules.legal_moves(ctrl.state)[0]
        assert ctrl.submit_move(jump)
        assert ctrl.state.ply_count == 3
        assert ctrl.current_player is ctrl.player(Color.WHITE)

    def test_move_event(self) -> None:
        ctrl = _make_hh_controller()
        seen: list[tuple[object, str, int]] = []
        ctrl.events.on_move.append(
            lambda record, notation, state: seen.append((record, notation, state.ply_count))
        )
        ctrl.submit_move(OpeningRemoval(Color.BLACK, Position(3, 3)))
        assert seen == [(OpeningRemoval(Color.BLACK, Position(3, 3)), "d4", 1)]

    def test_rejected_move_leaves_state(self) -> None:
        ctrl = _make_hh_controller()
        rejected: list[tuple[object, Exception]] = []
        ctrl.events.on_rejected.append(lambda move, err: rejected.append((move, err)))
        before = ctrl.state

        bad = OpeningRemoval(Color.BLACK, Position(2, 2))
        assert not ctrl.submit_move(bad)
        assert ctrl.state is before
        assert rejected[0][0] == bad
        assert isinstance(rejected[0][1], IllegalRemoval)

    def test_jump_during_opening_rejected(self) -> None:
        ctrl = _make_hh_controller()
        errors: list[Exception] = []
        ctrl.events.on_rejected.append(lambda _move, err: errors.append(err))
        jump = Jump(Color.BLACK, (Position(1, 3), Position(3, 3)), (Position(2, 3),))
        assert not ctrl.submit_move(jump)
        assert isinstance(errors[0], InvalidPhase)

    def test_wrong_color_jump_rejected(self) -> None:
        ctrl = _make_hh_controller()
        ctrl.submit_move(OpeningRemoval(Color.BLACK, Position(3, 3)))
        ctrl.submit_move(OpeningRemoval(Color.WHITE, Position(3, 4)))
        jump = Rules.legal_moves(ctrl.state)[0]
        errors: list[Exception] = []
        ctrl.events.on_rejected.append(lambda _move, err: errors.append(err))
        assert not ctrl.submit_move(Jump(Color.WHITE, jump.path, jump.captured))
        assert isinstance(errors[0], IllegalMove)


class TestPolling:
    def test_human_poll_waits_for_input(self) -> None:
        ctrl = _make_hh_controller()
        assert not ctrl.poll()
        black = ctrl.player(Color.BLACK)
        assert black is not None
        black.receive_input(PositionSelected(Position(3, 3)))
        assert ctrl.poll()
        assert ctrl.state.side_to_move == Color.WHITE

    def test_bridged_ai_round_trip(self) -> None:
        dispatched = []
        ai = AIPlayer(Color.BLACK, on_request_move=dispatched.append)
        ctrl = GameController()
        ctrl.new_game(ai, HumanPlayer(Color.WHITE))

        assert not ctrl.poll()
        assert len(dispatched) == 1
        ai.deliver_move(Rules.legal_actions(dispatched[0])[0])
        assert ctrl.poll()
        assert ctrl.state.phase == GamePhase.OPENING_WHITE_REMOVAL

    def test_ai_game_runs_to_completion(self) -> None:
        ctrl = _make_ai_controller()
        results: list[GameResult] = []
        moves: list[str] = []
        ctrl.events.on_game_over.append(results.append)
        ctrl.events.on_move.append(lambda _r, notation, _s: moves.append(notation))

        result = ctrl.run_until_over()

        assert ctrl.state.is_game_over
        assert result in (GameResult.BLACK_WINS, GameResult.WHITE_WINS)
        assert results == [result]
        assert len(moves) == ctrl.state.ply_count
        assert ctrl.current_player is None
        assert not ctrl.poll()

    def test_run_until_over_respects_max_turns(self) -> None:
        ctrl = _make_ai_controller()
        ctrl.run_until_over(max_turns=3)
        assert ctrl.state.ply_count == 3 or ctrl.state.is_game_over
        assert ctrl.state.ply_count <= 3

    def test_ai_games_are_reproducible(self) -> None:
        a = _make_ai_controller(depth=2)
        b = _make_ai_controller(depth=2)
        a.run_until_over()
        b.run_until_over()
        assert a.state.move_log == b.state.move_log


class TestLoadGame:
    def test_load_finished_game(self) -> None:
        source = _make_ai_controller(board_size=4)
        source.run_until_over()

        ctrl = _make_hh_controller()
        results: list[GameResult] = []
        ctrl.events.on_game_over.append(results.append)
        ctrl.load_game(export_game(source.state))

        assert ctrl.state == source.state
        assert results == [source.state.result]

    def test_load_unfinished_game_continues(self) -> None:
        source = _make_ai_controller()
        source.run_until_over(max_turns=4)

        ctrl = _make_ai_controller()
        ctrl.load_game(export_game(source.state))
        assert ctrl.state.ply_count == source.state.ply_count
        ctrl.run_until_over()
        assert ctrl.state.is_game_over

    def test_malformed_record_keeps_state(self) -> None:
        ctrl = _make_hh_controller()
        before = ctrl.state
        with pytest.raises(MalformedRecord):
            ctrl.load_game({"board_size": 8, "moves": [{"Jump": {}}]})
        assert ctrl.state is before
