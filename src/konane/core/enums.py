"""Core enumerations for the Kōnane domain."""

from __future__ import annotations

from enum import Enum, IntEnum, auto


class Color(IntEnum):
    """Stone color. Black always opens."""

    BLACK = 0
    WHITE = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class Direction(Enum):
    """Orthogonal jump directions as ``(d_row, d_col)``.

    Declaration order is the enumeration order used by move generation.
    """

    UP = (1, 0)
    DOWN = (-1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def d_row(self) -> int:
        return self.value[0]

    @property
    def d_col(self) -> int:
        return self.value[1]


class GamePhase(IntEnum):
    """Forward-only phase machine of a single game."""

    OPENING_BLACK_REMOVAL = auto()
    OPENING_WHITE_REMOVAL = auto()
    PLAY = auto()
    GAME_OVER = auto()

    @property
    def is_opening(self) -> bool:
        return self in (GamePhase.OPENING_BLACK_REMOVAL, GamePhase.OPENING_WHITE_REMOVAL)


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    BLACK_WINS = 1
    WHITE_WINS = 2
    DRAW = 3
