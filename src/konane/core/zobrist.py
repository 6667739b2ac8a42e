"""Zobrist hashing keys for incremental state fingerprints."""

from __future__ import annotations

from typing import Final

from konane.core.enums import Color, GamePhase
from konane.core.types import MAX_BOARD_SIZE, Position

_SEED: Final = 0x12345678_9ABCDEF0
_MASK_64: Final = 0xFFFFFFFFFFFFFFFF
_CELLS: Final = MAX_BOARD_SIZE * MAX_BOARD_SIZE


def _splitmix64(state: int) -> int:
    """Deterministic 64-bit bit-mixer suitable for static key generation."""
    z = (state + 0x9E3779B97F4A7C15) & _MASK_64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK_64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK_64
    return z ^ (z >> 31)


def _nth_key(index: int) -> int:
    return _splitmix64(_SEED + index)


# Cells are indexed on a 16x16 grid so keys do not depend on board size.
_STONE_KEYS: Final = tuple(
    tuple(_nth_key(color * _CELLS + cell) for cell in range(_CELLS))
    for color in range(2)
)
_SIDE_TO_MOVE_KEY: Final = _nth_key(2 * _CELLS)
# One key per phase, with GAME_OVER split by winner.
_PHASE_KEYS: Final = tuple(_nth_key(2 * _CELLS + 1 + idx) for idx in range(5))
_SIZE_KEYS: Final = tuple(
    _nth_key(2 * _CELLS + 6 + idx) for idx in range(MAX_BOARD_SIZE + 1)
)


def stone_key(color: Color, pos: Position) -> int:
    """Hash key for a *color* stone on *pos*."""
    return _STONE_KEYS[int(color)][pos.row * MAX_BOARD_SIZE + pos.col]


def side_to_move_key() -> int:
    """Hash toggle key, present while White is to move."""
    return _SIDE_TO_MOVE_KEY


def phase_key(phase: GamePhase, winner: Color | None = None) -> int:
    """Hash key for the current phase (and winner, once the game is over)."""
    if phase == GamePhase.GAME_OVER:
        return _PHASE_KEYS[3 + int(winner if winner is not None else Color.BLACK)]
    return _PHASE_KEYS[int(phase) - 1]


def size_key(size: int) -> int:
    """Hash key distinguishing board sizes."""
    return _SIZE_KEYS[size]
