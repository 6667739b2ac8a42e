"""Move notation and result tokens.

* Opening removal: the emptied cell, e.g. ``e4``.
* Jump: ``<start>-<end>``, e.g. ``c3-e3`` or ``c3-i3`` for a three-hop
  chain. Captured cells are implied by the direction lock.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from konane.core.enums import GameResult
from konane.core.errors import IllegalMove, IllegalRemoval
from konane.core.move import Move, OpeningRemoval
from konane.core.rules import Rules
from konane.core.types import parse_position

if TYPE_CHECKING:
    from konane.core.state import GameState

_RESULT_TOKENS: dict[GameResult, str] = {
    GameResult.BLACK_WINS: "1-0",
    GameResult.WHITE_WINS: "0-1",
    GameResult.DRAW: "1/2-1/2",
    GameResult.IN_PROGRESS: "*",
}
_TOKEN_RESULTS: dict[str, GameResult] = {v: k for k, v in _RESULT_TOKENS.items()}


def move_to_notation(move: Move) -> str:
    """``e4`` for a removal, ``c3-e3`` for a jump."""
    return str(move)


def parse_move(text: str, state: GameState) -> Move:
    """Resolve *text* against the legal actions of *state*.

    Raises :class:`ValueError` for malformed text, :class:`IllegalRemoval` or
    :class:`IllegalMove` when the text names no legal action.
    """
    text = text.strip()
    if "-" in text:
        start_name, _, end_name = text.partition("-")
        start = parse_position(start_name)
        end = parse_position(end_name)
        if state.phase.is_opening:
            raise IllegalMove(f"Jump {text!r} not allowed during {state.phase.name}")
        for jump in Rules.legal_moves(state):
            if jump.origin == start and jump.destination == end:
                return jump
        raise IllegalMove(f"No legal jump {text!r} for {state.side_to_move}")

    position = parse_position(text)
    if not state.phase.is_opening:
        raise IllegalRemoval(f"Removal {text!r} not allowed during {state.phase.name}")
    for move in Rules.legal_actions(state):
        if isinstance(move, OpeningRemoval) and move.position == position:
            return move
    raise IllegalRemoval(f"{state.side_to_move} may not remove the stone at {text}")


def moves_to_notation(moves: list[Move]) -> str:
    """Numbered move list, one number per Black/White pair."""
    parts: list[str] = []
    for ply, move in enumerate(moves):
        if ply % 2 == 0:
            parts.append(f"{(ply // 2) + 1}.")
        parts.append(move_to_notation(move))
    return " ".join(parts)


def result_token(result: GameResult) -> str:
    """Convert :class:`GameResult` to ``1-0`` / ``0-1`` / ``1/2-1/2`` / ``*``."""
    return _RESULT_TOKENS[result]


def result_from_token(token: str) -> GameResult:
    """Inverse of :func:`result_token`; unknown tokens raise ValueError."""
    try:
        return _TOKEN_RESULTS[token.strip()]
    except KeyError:
        raise ValueError(f"Invalid result token: {token!r}") from None
