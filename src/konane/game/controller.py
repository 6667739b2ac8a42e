"""GameController — the central orchestrator of a Kōnane game.

Coordinates: Players, GameState, Rules.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from konane.core.enums import Color, GameResult
from konane.core.errors import KonaneError
from konane.core.move import Move, MoveRecord
from konane.core.notation import move_to_notation
from konane.core.record import import_game
from konane.core.rules import Rules
from konane.core.state import GameState
from konane.game.interfaces import IPlayer

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, str, GameState], None]  # record, notation, state
RejectedCallback = Callable[[Move, KonaneError], None]
GameOverCallback = Callable[[GameResult], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_rejected: list[RejectedCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Orchestrates a full game: polls players, validates moves through
    :class:`Rules`, swaps in the successor state and notifies listeners.

    Thread-safety: call from a single thread. Background AI results are
    delivered to the player (``AIPlayer.deliver_move``) on that thread and
    picked up by the next :meth:`poll`.
    """

    __slots__ = ("_state", "_players", "events")

    def __init__(self) -> None:
        self._state = GameState()
        self._players: dict[Color, IPlayer] = {}
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def current_player(self) -> IPlayer | None:
        if self._state.is_game_over:
            return None
        return self._players.get(self._state.side_to_move)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(self, black: IPlayer, white: IPlayer, board_size: int = 8) -> None:
        if black.color != Color.BLACK or white.color != Color.WHITE:
            raise ValueError("Players must be given as (black, white)")

        self._cancel_players()
        self._players = {Color.BLACK: black, Color.WHITE: white}
        self._state = GameState(board_size)
        _LOGGER.info(
            "New %dx%d game: %s (black) vs %s (white)",
            board_size,
            board_size,
            black.name,
            white.name,
        )

    def load_game(self, data: Mapping[str, Any]) -> None:
        """Replace the current state with an imported game record.

        Raises:
            MalformedRecord: if the record does not replay; the current
                state is kept.
        """
        state = import_game(data)
        self._cancel_players()
        self._state = state
        _LOGGER.info("Loaded game with %d moves", state.ply_count)
        if state.is_game_over:
            self._emit_game_over(state.result)

    def submit_move(self, move: Move) -> bool:
        """Apply *move* for the side to move.

        Returns ``False`` and fires ``on_rejected`` when the rules refuse
        the move; the state is left untouched in that case.
        """
        try:
            new_state = Rules.apply_move(self._state, move)
        except KonaneError as exc:
            _LOGGER.debug("Rejected %s: %s", move, exc)
            self._emit_rejected(move, exc)
            return False

        self._state = new_state
        record = new_state.move_log[-1]
        self._emit_move(record, move_to_notation(record))

        if new_state.is_game_over:
            self._emit_game_over(new_state.result)
        return True

    def poll(self) -> bool:
        """Ask the current player for a move and apply it if one is ready.

        Returns whether a move was applied.
        """
        cp = self.current_player
        if cp is None:
            return False
        move = cp.request_move(self._state)
        if move is None:
            return False
        return self.submit_move(move)

    def run_until_over(self, max_turns: int | None = None) -> GameResult:
        """Poll until the game ends, a player has nothing to offer, or
        *max_turns* moves have been applied."""
        turns = 0
        while not self._state.is_game_over:
            if max_turns is not None and turns >= max_turns:
                break
            if not self.poll():
                break
            turns += 1
        return self._state.result

    # ── Internal helpers ─────────────────────────────────────────────────

    def _cancel_players(self) -> None:
        for p in self._players.values():
            if not p.is_human:
                p.cancel()

    def _emit_move(self, record: MoveRecord, notation: str) -> None:
        for cb in self.events.on_move:
            cb(record, notation, self._state)

    def _emit_rejected(self, move: Move, error: KonaneError) -> None:
        for cb in self.events.on_rejected:
            cb(move, error)

    def _emit_game_over(self, result: GameResult) -> None:
        _LOGGER.info("Game over: %s after %d moves", result.name, self._state.ply_count)
        for cb in self.events.on_game_over:
            cb(result)
