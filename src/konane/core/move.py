"""Move value objects.

A move is one of two tagged variants and doubles as the immutable record
appended to a game's move log:

* :class:`OpeningRemoval` - one of the two forced removals that open a game.
* :class:`Jump` - a straight-line capture of one or more stones.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from konane.core.enums import Color, Direction
from konane.core.types import Position


@dataclass(frozen=True, slots=True)
class OpeningRemoval:
    """*color* lifts its own stone at *position* off the board."""

    color: Color
    position: Position

    def __str__(self) -> str:
        return str(self.position)

    @property
    def notation(self) -> str:
        return str(self)


@dataclass(frozen=True, slots=True)
class Jump:
    """Direction-locked (multi-)jump.

    ``path`` holds the origin followed by every landing cell; ``captured``
    holds one opponent stone per hop, in hop order.
    """

    color: Color
    path: tuple[Position, ...]
    captured: tuple[Position, ...]

    def __post_init__(self) -> None:
        if len(self.path) < 2 or len(self.captured) != len(self.path) - 1:
            raise ValueError(
                f"Jump needs one capture per hop: path={self.path}, "
                f"captured={self.captured}"
            )

    @property
    def origin(self) -> Position:
        return self.path[0]

    @property
    def destination(self) -> Position:
        return self.path[-1]

    @property
    def hops(self) -> int:
        return len(self.captured)

    @property
    def direction(self) -> Direction:
        start, first = self.path[0], self.path[1]
        delta = ((first.row - start.row) // 2, (first.col - start.col) // 2)
        return Direction(delta)

    def __str__(self) -> str:
        return f"{self.origin}-{self.destination}"

    @property
    def notation(self) -> str:
        return str(self)


Move: TypeAlias = OpeningRemoval | Jump
MoveRecord: TypeAlias = OpeningRemoval | Jump
