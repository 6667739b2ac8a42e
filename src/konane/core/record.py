"""Game-record exchange shape and replay.

Records are externally tagged mappings::

    {"OpeningRemoval": {"color": "Black", "position": {"row": 3, "col": 3}}}
    {"Jump": {"color": "White", "from": {...}, "to": {...}, "captured": [...]}}

A game is ``{"board_size": 8, "winner": "Black" | None, "move_count": n,
"moves": [...]}``. Text encoding (JSON or otherwise) is left to the caller.
Replaying a record list through the rules engine must rebuild the exact
state that produced it; any rejected record is a :class:`MalformedRecord`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from konane.core.enums import Color, GamePhase
from konane.core.errors import KonaneError, MalformedRecord
from konane.core.move import Jump, MoveRecord, OpeningRemoval
from konane.core.rules import Rules
from konane.core.state import GameState
from konane.core.types import Position, validate_board_size

_COLOR_NAMES: dict[Color, str] = {Color.BLACK: "Black", Color.WHITE: "White"}


# ── Value conversion ─────────────────────────────────────────────────────────


def _color_to_wire(color: Color) -> str:
    return _COLOR_NAMES[color]


def _color_from_wire(value: Any) -> Color:
    if isinstance(value, str):
        lowered = value.strip().lower()
        for color, name in _COLOR_NAMES.items():
            if lowered == name.lower():
                return color
    raise MalformedRecord(f"Invalid color: {value!r} (expected \"Black\" or \"White\")")


def _position_to_wire(pos: Position) -> dict[str, int]:
    return {"row": pos.row, "col": pos.col}


def _position_from_wire(value: Any) -> Position:
    if not isinstance(value, Mapping):
        raise MalformedRecord(f"Invalid position: {value!r}")
    row, col = value.get("row"), value.get("col")
    if not isinstance(row, int) or not isinstance(col, int) or isinstance(row, bool):
        raise MalformedRecord(f"Invalid position: {value!r}")
    if row < 0 or col < 0:
        raise MalformedRecord(f"Negative coordinates in position: {value!r}")
    return Position(row, col)


def record_to_dict(record: MoveRecord) -> dict[str, Any]:
    """Wire shape of one move record."""
    if isinstance(record, OpeningRemoval):
        return {
            "OpeningRemoval": {
                "color": _color_to_wire(record.color),
                "position": _position_to_wire(record.position),
            }
        }
    return {
        "Jump": {
            "color": _color_to_wire(record.color),
            "from": _position_to_wire(record.origin),
            "to": _position_to_wire(record.destination),
            "captured": [_position_to_wire(p) for p in record.captured],
        }
    }


def record_from_dict(data: Any) -> MoveRecord:
    """Parse one wire record.

    A jump's intermediate landing cells are not on the wire; they are
    rebuilt from the captured list, one landing two cells past each capture.
    """
    if not isinstance(data, Mapping) or len(data) != 1:
        raise MalformedRecord(f"Record must have exactly one tag: {data!r}")

    tag, body = next(iter(data.items()))
    if not isinstance(body, Mapping):
        raise MalformedRecord(f"Record body must be a mapping: {data!r}")

    if tag == "OpeningRemoval":
        return OpeningRemoval(
            _color_from_wire(body.get("color")),
            _position_from_wire(body.get("position")),
        )

    if tag == "Jump":
        color = _color_from_wire(body.get("color"))
        origin = _position_from_wire(body.get("from"))
        destination = _position_from_wire(body.get("to"))
        raw_captured = body.get("captured")
        if not isinstance(raw_captured, list) or not raw_captured:
            raise MalformedRecord("Jump must capture at least one stone")
        captured = tuple(_position_from_wire(p) for p in raw_captured)

        path = [origin]
        for over in captured:
            prev = path[-1]
            path.append(Position(2 * over.row - prev.row, 2 * over.col - prev.col))
        if path[-1] != destination:
            raise MalformedRecord(
                f"Captured stones do not lead from {origin!r} to {destination!r}"
            )
        try:
            return Jump(color, tuple(path), captured)
        except ValueError as exc:
            raise MalformedRecord(str(exc)) from exc

    raise MalformedRecord(f"Unknown record tag: {tag!r}")


# ── Replay ───────────────────────────────────────────────────────────────────


def _check_record(state: GameState, record: MoveRecord) -> None:
    if record.color != state.side_to_move:
        raise MalformedRecord(f"Expected {state.side_to_move} to move, got {record.color}")

    positions = (
        (record.position,)
        if isinstance(record, OpeningRemoval)
        else (*record.path, *record.captured)
    )
    for pos in positions:
        if not state.board.in_bounds(pos):
            raise MalformedRecord(f"Position {pos!r} is out of bounds")

    if isinstance(record, OpeningRemoval) and not state.phase.is_opening:
        raise MalformedRecord(f"Opening removal not allowed during {state.phase.name}")
    if isinstance(record, Jump) and state.phase != GamePhase.PLAY:
        raise MalformedRecord(f"Jump not allowed during {state.phase.name}")


def replay_records(records: Iterable[MoveRecord], board_size: int = 8) -> GameState:
    """Apply *records* to a fresh board, in order."""
    try:
        validate_board_size(board_size)
    except ValueError as exc:
        raise MalformedRecord(str(exc)) from exc

    state = GameState(board_size)
    for move_number, record in enumerate(records, start=1):
        try:
            _check_record(state, record)
            state = Rules.apply_move(state, record)
        except KonaneError as exc:
            raise MalformedRecord(f"Move {move_number}: {exc}") from exc
    return state


def export_game(state: GameState) -> dict[str, Any]:
    """Wire shape of a whole game."""
    return {
        "board_size": state.board_size,
        "winner": _color_to_wire(state.winner) if state.winner is not None else None,
        "move_count": state.ply_count,
        "moves": [record_to_dict(r) for r in state.move_log],
    }


def import_game(data: Mapping[str, Any]) -> GameState:
    """Rebuild a game from its wire shape, checking the declared winner."""
    board_size = data.get("board_size")
    if not isinstance(board_size, int) or isinstance(board_size, bool):
        raise MalformedRecord(f"Invalid board_size: {board_size!r}")

    raw_moves = data.get("moves", [])
    if not isinstance(raw_moves, list):
        raise MalformedRecord("moves must be a list")

    records: list[MoveRecord] = []
    for move_number, raw in enumerate(raw_moves, start=1):
        try:
            records.append(record_from_dict(raw))
        except MalformedRecord as exc:
            raise MalformedRecord(f"Move {move_number}: {exc}") from exc

    state = replay_records(records, board_size)

    winner = data.get("winner")
    if winner is not None:
        declared = _color_from_wire(winner)
        if state.phase != GamePhase.GAME_OVER:
            raise MalformedRecord("Winner specified but game is not over")
        if state.winner != declared:
            raise MalformedRecord(f"Winner mismatch: expected {declared}, got {state.winner}")
    return state
