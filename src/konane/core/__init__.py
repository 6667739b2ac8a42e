"""Core domain layer: pure Kōnane rules with zero external dependencies.

Quick start::

    from konane.core import GameState, Rules

    state = GameState(board_size=6)
    state = Rules.apply_opening_removal(state, Rules.legal_opening_removals(state)[0])
    for pos in Rules.legal_opening_removals(state):
        print(pos)
"""

from konane.core.board import Board
from konane.core.enums import Color, Direction, GamePhase, GameResult
from konane.core.errors import (
    IllegalMove,
    IllegalRemoval,
    InvalidPhase,
    KonaneError,
    MalformedRecord,
    NoLegalMove,
)
from konane.core.move import Jump, Move, MoveRecord, OpeningRemoval
from konane.core.notation import (
    move_to_notation,
    moves_to_notation,
    parse_move,
    result_from_token,
    result_token,
)
from konane.core.record import (
    export_game,
    import_game,
    record_from_dict,
    record_to_dict,
    replay_records,
)
from konane.core.rules import Rules
from konane.core.state import GameState
from konane.core.types import Position, parse_position, position_name

__all__ = [
    # Enums
    "Color",
    "Direction",
    "GamePhase",
    "GameResult",
    # Errors
    "IllegalMove",
    "IllegalRemoval",
    "InvalidPhase",
    "KonaneError",
    "MalformedRecord",
    "NoLegalMove",
    # Types / helpers
    "Position",
    "parse_position",
    "position_name",
    # Domain objects
    "Board",
    "GameState",
    "Jump",
    "Move",
    "MoveRecord",
    "OpeningRemoval",
    "Rules",
    # Notation / records
    "export_game",
    "import_game",
    "move_to_notation",
    "moves_to_notation",
    "parse_move",
    "record_from_dict",
    "record_to_dict",
    "replay_records",
    "result_from_token",
    "result_token",
]
