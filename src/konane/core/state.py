"""GameState: board, phase, turn and move log, with an incremental fingerprint.

Only :class:`~konane.core.rules.Rules` mutates a state, through the
underscore helpers below; everything else treats states as values.
"""

from __future__ import annotations

from konane.core.board import Board
from konane.core.enums import Color, GamePhase, GameResult
from konane.core.move import MoveRecord, OpeningRemoval
from konane.core.types import Position
from konane.core.zobrist import (
    phase_key as zobrist_phase_key,
)
from konane.core.zobrist import (
    side_to_move_key as zobrist_side_to_move_key,
)
from konane.core.zobrist import (
    size_key as zobrist_size_key,
)
from konane.core.zobrist import (
    stone_key as zobrist_stone_key,
)


class GameState:
    """Complete state of one Kōnane game.

    A fresh state is the full checkerboard with Black to make the first
    opening removal. Tests and loaders may pass an explicit *board*,
    *phase* and *side_to_move* to start from an arbitrary position.
    """

    __slots__ = (
        "board",
        "phase",
        "side_to_move",
        "winner",
        "_move_log",
        "_zobrist_hash",
    )

    def __init__(
        self,
        board_size: int = 8,
        *,
        board: Board | None = None,
        phase: GamePhase = GamePhase.OPENING_BLACK_REMOVAL,
        side_to_move: Color = Color.BLACK,
        winner: Color | None = None,
        move_log: list[MoveRecord] | None = None,
    ) -> None:
        self.board = board if board is not None else Board.initial(board_size)
        self.phase = phase
        self.side_to_move = side_to_move
        self.winner = winner if phase == GamePhase.GAME_OVER else None
        self._move_log: list[MoveRecord] = list(move_log) if move_log else []
        self._zobrist_hash = self._compute_zobrist_hash()

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def board_size(self) -> int:
        return self.board.size

    @property
    def move_log(self) -> tuple[MoveRecord, ...]:
        """Append-only history, oldest first."""
        return tuple(self._move_log)

    @property
    def ply_count(self) -> int:
        return len(self._move_log)

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def result(self) -> GameResult:
        if self.phase != GamePhase.GAME_OVER:
            return GameResult.IN_PROGRESS
        if self.winner == Color.BLACK:
            return GameResult.BLACK_WINS
        if self.winner == Color.WHITE:
            return GameResult.WHITE_WINS
        return GameResult.DRAW

    @property
    def fingerprint(self) -> int:
        """64-bit Zobrist key of board + phase + side to move."""
        return self._zobrist_hash

    @property
    def first_removal(self) -> Position | None:
        """Cell emptied by Black's opening removal, once it happened."""
        if self._move_log and isinstance(self._move_log[0], OpeningRemoval):
            return self._move_log[0].position
        empty = self.board.empty_cells()
        if self.phase == GamePhase.OPENING_WHITE_REMOVAL and len(empty) == 1:
            return empty[0]
        return None

    # ── Mutation (rules engine only) ─────────────────────────────────────

    def _remove_stone(self, pos: Position) -> None:
        stone = self.board[pos]
        if stone is None:
            return
        self._zobrist_hash ^= zobrist_stone_key(stone, pos)
        self.board[pos] = None

    def _move_stone(self, from_pos: Position, to_pos: Position) -> None:
        stone = self.board[from_pos]
        if stone is None:
            raise ValueError(f"No stone on {from_pos}")
        self._remove_stone(from_pos)
        self._remove_stone(to_pos)
        self.board[to_pos] = stone
        self._zobrist_hash ^= zobrist_stone_key(stone, to_pos)

    def _end_turn(self) -> None:
        self.side_to_move = self.side_to_move.opposite
        self._zobrist_hash ^= zobrist_side_to_move_key()

    def _set_phase(self, phase: GamePhase, winner: Color | None = None) -> None:
        self._zobrist_hash ^= zobrist_phase_key(self.phase, self.winner)
        self.phase = phase
        self.winner = winner if phase == GamePhase.GAME_OVER else None
        self._zobrist_hash ^= zobrist_phase_key(self.phase, self.winner)

    def _append(self, record: MoveRecord) -> None:
        self._move_log.append(record)

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> GameState:
        """Independent copy; shares only immutable move records."""
        state = GameState.__new__(GameState)
        state.board = self.board.copy()
        state.phase = self.phase
        state.side_to_move = self.side_to_move
        state.winner = self.winner
        state._move_log = self._move_log.copy()
        state._zobrist_hash = self._zobrist_hash
        return state

    def _compute_zobrist_hash(self) -> int:
        key = zobrist_size_key(self.board.size)
        key ^= zobrist_phase_key(self.phase, self.winner)
        if self.side_to_move == Color.WHITE:
            key ^= zobrist_side_to_move_key()
        for color in Color:
            for pos in self.board.stones(color):
                key ^= zobrist_stone_key(color, pos)
        return key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameState):
            return NotImplemented
        return (
            self.board == other.board
            and self.phase == other.phase
            and self.side_to_move == other.side_to_move
            and self.winner == other.winner
            and self._move_log == other._move_log
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        status = self.phase.name
        if self.winner is not None:
            status += f" ({self.winner} wins)"
        return f"{self.board!r}\n{status}, {self.side_to_move} to move"
