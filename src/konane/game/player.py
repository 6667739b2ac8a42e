"""Concrete player implementations."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from konane.core.enums import Color
from konane.core.move import OpeningRemoval
from konane.engine.minimax import MinimaxSearchEngine
from konane.engine.search import DEFAULT_DEPTH, IEngine, SearchLimits
from konane.game.interfaces import (
    InputCancelled,
    IPlayer,
    JumpSelected,
    PlayerInput,
    PositionSelected,
)

if TYPE_CHECKING:
    from konane.core.move import Move
    from konane.core.state import GameState

_LOGGER = logging.getLogger(__name__)


class HumanPlayer(IPlayer):
    """A human participant whose moves come from UI input events.

    The move built from the latest input is handed over exactly once by
    ``request_move``.
    """

    __slots__ = ("_color", "_name", "_pending")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"
        self._pending: Move | None = None

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, state: GameState) -> Move | None:
        move, self._pending = self._pending, None
        return move

    def receive_input(self, event: PlayerInput) -> None:
        if isinstance(event, PositionSelected):
            self._pending = OpeningRemoval(self._color, event.position)
        elif isinstance(event, JumpSelected):
            self._pending = event.jump
        elif isinstance(event, InputCancelled):
            self._pending = None
        else:
            raise TypeError(f"Unsupported player input: {event!r}")

    def is_ready(self) -> bool:
        return self._pending is not None

    def cancel(self) -> None:
        self._pending = None


class AIPlayer(IPlayer):
    """An AI participant backed by the search engine.

    Without a bridge, ``request_move`` searches synchronously and returns
    the move. With *on_request_move* set, the first call hands a copy of the
    state to the bridge (in production an ``EngineWorker`` living in a
    ``QThread``) and returns ``None``; the player stays busy until the
    bridge calls :meth:`deliver_move`, after which the next
    ``request_move`` returns the move.

    Args:
        color: Side the AI plays.
        name: Display name.
        depth: Search depth in plies, fixed for this player.
        engine: Engine used in synchronous mode.
        on_request_move: ``(GameState) -> None`` background dispatcher.
        on_cancel: ``() -> None`` that aborts a running search.
    """

    __slots__ = (
        "_color",
        "_name",
        "_engine",
        "_limits",
        "_on_request_move",
        "_on_cancel",
        "_pending",
        "_busy",
    )

    def __init__(
        self,
        color: Color,
        name: str = "Engine",
        depth: int = DEFAULT_DEPTH,
        engine: IEngine | None = None,
        on_request_move: Callable[[GameState], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self._color = color
        self._name = name
        self._engine = engine or MinimaxSearchEngine()
        self._limits = SearchLimits(max_depth=depth)
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel
        self._pending: Move | None = None
        self._busy = False

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    @property
    def depth(self) -> int:
        return self._limits.max_depth

    @property
    def is_busy(self) -> bool:
        """A background search is in flight."""
        return self._busy

    def request_move(self, state: GameState) -> Move | None:
        if self._pending is not None:
            move, self._pending = self._pending, None
            return move

        if self._on_request_move is None:
            return self._engine.search(state, self._limits).best_move

        if not self._busy:
            self._busy = True
            self._on_request_move(state.copy())
        return None

    def deliver_move(self, move: Move) -> None:
        """Accept the result of a background search."""
        self._pending = move
        self._busy = False

    def receive_input(self, event: PlayerInput) -> None:
        _LOGGER.debug("%s ignores UI input %r", self._name, event)

    def is_ready(self) -> bool:
        if self._pending is not None:
            return True
        return self._on_request_move is None

    def cancel(self) -> None:
        self._pending = None
        self._busy = False
        if self._on_cancel is not None:
            self._on_cancel()
