"""Kōnane rules: opening removals, jump generation, the phase machine.

Phase machine::

    OPENING_BLACK_REMOVAL --apply_opening_removal--> OPENING_WHITE_REMOVAL
    OPENING_WHITE_REMOVAL --apply_opening_removal--> PLAY (or GAME_OVER)
    PLAY --apply_jump--> PLAY | GAME_OVER

Every ``apply_*`` returns a new :class:`GameState`; the argument is never
touched.
"""

from __future__ import annotations

from collections.abc import Iterator

from konane.core.board import Board
from konane.core.enums import Color, Direction, GamePhase, GameResult
from konane.core.errors import IllegalMove, IllegalRemoval, InvalidPhase
from konane.core.move import Jump, Move, OpeningRemoval
from konane.core.state import GameState
from konane.core.types import Position


def _jumps_from(board: Board, origin: Position, color: Color) -> Iterator[Jump]:
    """Yield every jump *color* could make from *origin* on *board*.

    Each direction is extended hop by hop; every prefix of a chain is a
    separate jump. The board is only read.
    """
    opponent = color.opposite
    for direction in Direction:
        d_row, d_col = direction.value
        path = [origin]
        captured: list[Position] = []
        current = origin
        while True:
            over = current.offset(d_row, d_col)
            landing = current.offset(d_row, d_col, steps=2)
            if not board.in_bounds(landing):
                break
            if board[over] != opponent or board[landing] is not None:
                break
            captured.append(over)
            path.append(landing)
            yield Jump(color, tuple(path), tuple(captured))
            current = landing


def _has_jump(board: Board, color: Color) -> bool:
    return any(True for origin in board.stones(color) for _ in _jumps_from(board, origin, color))


def _play_removal(state: GameState, position: Position) -> GameState:
    color = state.side_to_move
    new_state = state.copy()
    new_state._remove_stone(position)
    new_state._append(OpeningRemoval(color, position))
    new_state._end_turn()

    if state.phase == GamePhase.OPENING_BLACK_REMOVAL:
        new_state._set_phase(GamePhase.OPENING_WHITE_REMOVAL)
    else:
        new_state._set_phase(GamePhase.PLAY)
        if not _has_jump(new_state.board, new_state.side_to_move):
            new_state._set_phase(GamePhase.GAME_OVER, winner=color)
    return new_state


def _play_jump(state: GameState, jump: Jump) -> GameState:
    mover = state.side_to_move
    new_state = state.copy()
    new_state._move_stone(jump.origin, jump.destination)
    for captured in jump.captured:
        new_state._remove_stone(captured)
    new_state._append(jump)
    new_state._end_turn()

    if not _has_jump(new_state.board, new_state.side_to_move):
        new_state._set_phase(GamePhase.GAME_OVER, winner=mover)
    return new_state


class Rules:
    """Static rule-engine operating on :class:`GameState` values."""

    # ── Opening ──────────────────────────────────────────────────────────

    @staticmethod
    def legal_opening_removals(state: GameState) -> list[Position]:
        """Cells the player to move may empty during the opening."""
        board = state.board
        if state.phase == GamePhase.OPENING_BLACK_REMOVAL:
            candidates = set(board.center_positions()) | set(board.corner_positions())
            return sorted(p for p in candidates if board[p] == Color.BLACK)

        if state.phase == GamePhase.OPENING_WHITE_REMOVAL:
            emptied = state.first_removal
            if emptied is None:
                return []
            return sorted(
                p
                for p in board.orthogonal_neighbors(emptied)
                if board[p] == Color.WHITE
            )

        raise InvalidPhase(f"No opening removals during {state.phase.name}")

    @staticmethod
    def apply_opening_removal(state: GameState, position: Position) -> GameState:
        """Remove the mover's stone at *position* and advance the phase."""
        if not state.phase.is_opening:
            raise InvalidPhase(f"Opening removal not allowed during {state.phase.name}")

        color = state.side_to_move
        if position not in Rules.legal_opening_removals(state):
            raise IllegalRemoval(f"{color} may not remove the stone at {position}")

        return _play_removal(state, position)

    # ── Jumps ────────────────────────────────────────────────────────────

    @staticmethod
    def legal_jumps_from(state: GameState, position: Position) -> list[Jump]:
        """All jumps available to the stone on *position*.

        Empty when the cell is empty, holds an opponent stone, or the game
        is over.
        """
        if state.phase.is_opening:
            raise InvalidPhase(f"No jumps during {state.phase.name}")
        if not state.board.in_bounds(position):
            raise ValueError(f"Position {position!r} is off the board")
        if state.phase == GamePhase.GAME_OVER:
            return []
        color = state.side_to_move
        if state.board[position] != color:
            return []
        return list(_jumps_from(state.board, position, color))

    @staticmethod
    def legal_moves(state: GameState) -> list[Jump]:
        """Every jump of the player to move, origins in row-major order."""
        if state.phase.is_opening:
            raise InvalidPhase(f"No jumps during {state.phase.name}")
        if state.phase == GamePhase.GAME_OVER:
            return []
        color = state.side_to_move
        board = state.board
        return [
            jump for origin in board.stones(color) for jump in _jumps_from(board, origin, color)
        ]

    @staticmethod
    def apply_jump(state: GameState, jump: Jump) -> GameState:
        """Play *jump* and hand the turn over, ending the game if needed."""
        if state.phase != GamePhase.PLAY:
            raise InvalidPhase(f"Jumps not allowed during {state.phase.name}")

        mover = state.side_to_move
        if jump.color != mover:
            raise IllegalMove(f"It is {mover}'s turn, not {jump.color}'s")
        if not state.board.in_bounds(jump.origin) or jump not in Rules.legal_jumps_from(
            state, jump.origin
        ):
            raise IllegalMove(f"Jump {jump} is not legal in the current position")

        return _play_jump(state, jump)

    # ── Uniform move interface ───────────────────────────────────────────

    @staticmethod
    def legal_actions(state: GameState) -> list[Move]:
        """Removals during the opening, jumps during play, nothing after."""
        if state.phase.is_opening:
            color = state.side_to_move
            return [OpeningRemoval(color, p) for p in Rules.legal_opening_removals(state)]
        return list(Rules.legal_moves(state))

    @staticmethod
    def apply_move(state: GameState, move: Move) -> GameState:
        """Dispatch *move* to the transition its variant belongs to."""
        if isinstance(move, OpeningRemoval):
            if state.phase.is_opening and move.color != state.side_to_move:
                raise IllegalRemoval(
                    f"It is {state.side_to_move}'s turn, not {move.color}'s"
                )
            return Rules.apply_opening_removal(state, move.position)
        if isinstance(move, Jump):
            return Rules.apply_jump(state, move)
        raise TypeError(f"Not a move: {move!r}")

    @staticmethod
    def successor(state: GameState, move: Move) -> GameState:
        """State after *move*, which must come from ``legal_actions(state)``.

        Skips the legality re-check done by :meth:`apply_move`.
        """
        if isinstance(move, OpeningRemoval):
            return _play_removal(state, move.position)
        return _play_jump(state, move)

    # ── Queries ──────────────────────────────────────────────────────────

    @staticmethod
    def movable_stones(state: GameState) -> list[Position]:
        """Origins of the mover's legal jumps."""
        origins: list[Position] = []
        for jump in Rules.legal_moves(state):
            if not origins or origins[-1] != jump.origin:
                origins.append(jump.origin)
        return origins

    @staticmethod
    def count_jumps(board: Board, color: Color) -> int:
        """Number of jumps *color* would have on *board*, whoever is to move."""
        return sum(
            1 for origin in board.stones(color) for _ in _jumps_from(board, origin, color)
        )

    @staticmethod
    def is_terminal(state: GameState) -> bool:
        return state.phase == GamePhase.GAME_OVER

    @staticmethod
    def game_result(state: GameState) -> GameResult:
        return state.result
