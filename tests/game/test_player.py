"""Tests for Player implementations."""

from konane.core.enums import Color
from konane.core.move import Jump, OpeningRemoval
from konane.core.rules import Rules
from konane.core.state import GameState
from konane.core.types import Position
from konane.engine.search import CancelCheck, SearchLimits, SearchResult
from konane.game.interfaces import InputCancelled, JumpSelected, PositionSelected
from konane.game.player import AIPlayer, HumanPlayer


def _opened() -> GameState:
    state = Rules.apply_opening_removal(GameState(6), Position(2, 2))
    return Rules.apply_opening_removal(state, Position(2, 3))


class _RecordingEngine:
    def __init__(self) -> None:
        self.limits: list[SearchLimits] = []

    def search(
        self,
        state: GameState,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        del is_cancelled
        self.limits.append(limits)
        return SearchResult(Rules.legal_actions(state)[-1], 0, limits.max_depth, 1)


class TestHumanPlayer:
    def test_properties(self) -> None:
        p = HumanPlayer(Color.WHITE, "Alice")
        assert p.color == Color.WHITE
        assert p.name == "Alice"
        assert p.is_human is True

    def test_default_name(self) -> None:
        p = HumanPlayer(Color.BLACK)
        assert "black" in p.name.lower()

    def test_no_move_until_input(self) -> None:
        p = HumanPlayer(Color.BLACK)
        assert not p.is_ready()
        assert p.request_move(GameState()) is None

    def test_position_selection_becomes_removal(self) -> None:
        p = HumanPlayer(Color.BLACK)
        p.receive_input(PositionSelected(Position(3, 3)))
        assert p.is_ready()
        assert p.request_move(GameState()) == OpeningRemoval(Color.BLACK, Position(3, 3))
        # Handed over once.
        assert p.request_move(GameState()) is None
        assert not p.is_ready()

    def test_jump_selection(self) -> None:
        state = _opened()
        jump = Rules.legal_moves(state)[0]
        p = HumanPlayer(Color.BLACK)
        p.receive_input(JumpSelected(jump))
        assert p.request_move(state) == jump

    def test_input_cancelled_clears_pending(self) -> None:
        p = HumanPlayer(Color.BLACK)
        p.receive_input(PositionSelected(Position(0, 0)))
        p.receive_input(InputCancelled())
        assert not p.is_ready()

    def test_latest_input_wins(self) -> None:
        p = HumanPlayer(Color.BLACK)
        p.receive_input(PositionSelected(Position(0, 0)))
        p.receive_input(PositionSelected(Position(3, 3)))
        move = p.request_move(GameState())
        assert isinstance(move, OpeningRemoval) and move.position == Position(3, 3)

    def test_cancel(self) -> None:
        p = HumanPlayer(Color.WHITE)
        p.receive_input(PositionSelected(Position(0, 1)))
        p.cancel()
        assert p.request_move(GameState()) is None


class TestAIPlayer:
    def test_properties(self) -> None:
        p = AIPlayer(Color.BLACK, "Konane AI", depth=3)
        assert p.color == Color.BLACK
        assert p.name == "Konane AI"
        assert p.is_human is False
        assert p.depth == 3

    def test_synchronous_search(self) -> None:
        state = _opened()
        p = AIPlayer(Color.BLACK, depth=2)
        assert p.is_ready()
        move = p.request_move(state)
        assert isinstance(move, Jump)
        assert move in Rules.legal_moves(state)

    def test_depth_fixed_at_construction(self) -> None:
        engine = _RecordingEngine()
        p = AIPlayer(Color.BLACK, depth=5, engine=engine)
        state = _opened()
        assert p.request_move(state) == Rules.legal_actions(state)[-1]
        p.request_move(state)
        assert [limits.max_depth for limits in engine.limits] == [5, 5]

    def test_bridged_request_dispatches_copy(self) -> None:
        called_with: list[GameState] = []
        p = AIPlayer(Color.BLACK, on_request_move=called_with.append)
        state = _opened()

        assert p.request_move(state) is None
        assert len(called_with) == 1
        assert called_with[0] == state
        assert called_with[0] is not state
        assert p.is_busy
        assert not p.is_ready()

    def test_bridged_request_dispatches_once_while_busy(self) -> None:
        called_with: list[GameState] = []
        p = AIPlayer(Color.BLACK, on_request_move=called_with.append)
        state = _opened()
        p.request_move(state)
        p.request_move(state)
        assert len(called_with) == 1

    def test_delivered_move_handed_over_once(self) -> None:
        p = AIPlayer(Color.BLACK, on_request_move=lambda _state: None)
        state = _opened()
        p.request_move(state)
        jump = Rules.legal_moves(state)[0]
        p.deliver_move(jump)

        assert not p.is_busy
        assert p.is_ready()
        assert p.request_move(state) == jump
        assert not p.is_ready()

    def test_cancel_calls_callback(self) -> None:
        cancelled = []
        p = AIPlayer(
            Color.BLACK,
            on_request_move=lambda _state: None,
            on_cancel=lambda: cancelled.append(True),
        )
        p.request_move(_opened())
        p.cancel()
        assert cancelled == [True]
        assert not p.is_busy

    def test_cancel_drops_delivered_move(self) -> None:
        p = AIPlayer(Color.BLACK, on_request_move=lambda _state: None)
        p.deliver_move(Rules.legal_moves(_opened())[0])
        p.cancel()
        assert not p.is_ready()

    def test_ignores_ui_input(self) -> None:
        p = AIPlayer(Color.BLACK, on_request_move=lambda _state: None)
        p.receive_input(PositionSelected(Position(0, 0)))
        assert not p.is_ready()

    def test_no_callback_no_error(self) -> None:
        p = AIPlayer(Color.BLACK)
        p.cancel()
