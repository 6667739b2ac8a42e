"""Board coordinates and algebraic-notation helpers.

Coordinate layout:
    (row 0, col 0) is the bottom-left cell, ``a1``.
    Columns map to file letters left-to-right (a, b, c, ...).
    Rows map to rank numbers bottom-to-top (1, 2, 3, ...).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

MIN_BOARD_SIZE = 4
MAX_BOARD_SIZE = 16

_FILES = "abcdefghijklmnop"
_NAME_RE = re.compile(r"^([a-p])([1-9][0-9]?)$")


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Immutable ``(row, col)`` cell coordinate."""

    row: int
    col: int

    def offset(self, d_row: int, d_col: int, steps: int = 1) -> Position:
        return Position(self.row + d_row * steps, self.col + d_col * steps)

    @property
    def name(self) -> str:
        return position_name(self)

    def __str__(self) -> str:
        return position_name(self)


def position_name(pos: Position) -> str:
    """Algebraic name, e.g. ``Position(3, 4)`` → ``'e4'``."""
    if not (0 <= pos.col < MAX_BOARD_SIZE and pos.row >= 0):
        raise ValueError(f"Position has no algebraic name: {pos!r}")
    return f"{_FILES[pos.col]}{pos.row + 1}"


def parse_position(name: str) -> Position:
    """Parse an algebraic name, e.g. ``'e4'`` → ``Position(3, 4)``."""
    match = _NAME_RE.match(name.strip().lower())
    if match is None:
        raise ValueError(f"Invalid position name: {name!r}")
    rank = int(match.group(2))
    if rank > MAX_BOARD_SIZE:
        raise ValueError(f"Invalid position name: {name!r}")
    return Position(rank - 1, _FILES.index(match.group(1)))


def validate_board_size(size: int) -> None:
    """Board sides are even and between 4 and 16 inclusive."""
    if size % 2 or not MIN_BOARD_SIZE <= size <= MAX_BOARD_SIZE:
        raise ValueError(
            f"Invalid board size {size}: must be even and between "
            f"{MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}"
        )
