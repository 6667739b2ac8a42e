"""Board - stone placement on an N x N grid."""

from __future__ import annotations

from konane.core.enums import Color, Direction
from konane.core.types import Position, position_name, validate_board_size


class Board:
    """Mutable square board. Each cell holds a :class:`Color` or ``None``."""

    __slots__ = ("_size", "_cells", "_counts")

    def __init__(self, size: int = 8) -> None:
        validate_board_size(size)
        self._size = size
        self._cells: list[Color | None] = [None] * (size * size)
        # [color] -> number of stones of that color on the board.
        self._counts: list[int] = [0, 0]

    @property
    def size(self) -> int:
        return self._size

    def _index(self, pos: Position) -> int:
        if not self.in_bounds(pos):
            raise ValueError(f"Position {pos!r} is off a {self._size}x{self._size} board")
        return pos.row * self._size + pos.col

    # -- Element access -----------------------------------------------------

    def __getitem__(self, pos: Position) -> Color | None:
        return self._cells[self._index(pos)]

    def __setitem__(self, pos: Position, stone: Color | None) -> None:
        idx = self._index(pos)
        old = self._cells[idx]
        if old == stone:
            return
        if old is not None:
            self._counts[int(old)] -= 1
        if stone is not None:
            self._counts[int(stone)] += 1
        self._cells[idx] = stone

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.row < self._size and 0 <= pos.col < self._size

    def is_empty(self, pos: Position) -> bool:
        return self[pos] is None

    # -- Query helpers ------------------------------------------------------

    def positions(self) -> list[Position]:
        """Every cell in row-major order, bottom row first."""
        n = self._size
        return [Position(row, col) for row in range(n) for col in range(n)]

    def stones(self, color: Color) -> list[Position]:
        """Cells occupied by *color*, row-major."""
        n = self._size
        return [
            Position(idx // n, idx % n)
            for idx, stone in enumerate(self._cells)
            if stone == color
        ]

    def empty_cells(self) -> list[Position]:
        n = self._size
        return [
            Position(idx // n, idx % n)
            for idx, stone in enumerate(self._cells)
            if stone is None
        ]

    def count(self, color: Color) -> int:
        return self._counts[int(color)]

    def center_positions(self) -> list[Position]:
        """The four cells around the middle of the board."""
        mid = self._size // 2
        return [
            Position(mid - 1, mid - 1),
            Position(mid - 1, mid),
            Position(mid, mid - 1),
            Position(mid, mid),
        ]

    def corner_positions(self) -> list[Position]:
        last = self._size - 1
        return [
            Position(0, 0),
            Position(0, last),
            Position(last, 0),
            Position(last, last),
        ]

    def orthogonal_neighbors(self, pos: Position) -> list[Position]:
        neighbors = (pos.offset(d.d_row, d.d_col) for d in Direction)
        return [p for p in neighbors if self.in_bounds(p)]

    def cells(self) -> tuple[Color | None, ...]:
        """Row-major snapshot of every cell."""
        return tuple(self._cells)

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board.__new__(Board)
        b._size = self._size
        b._cells = self._cells.copy()
        b._counts = self._counts.copy()
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls, size: int = 8) -> Board:
        """Full checkerboard: ``a1`` is Black, colors alternate."""
        b = cls(size)
        for pos in b.positions():
            b[pos] = Color.BLACK if (pos.row + pos.col) % 2 == 0 else Color.WHITE
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._size == other._size and self._cells == other._cells

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(self._size - 1, -1, -1):
            marks = []
            for col in range(self._size):
                stone = self[Position(row, col)]
                if stone is None:
                    marks.append(".")
                else:
                    marks.append("x" if stone == Color.BLACK else "o")
            rows.append(f"{row + 1:>2} {' '.join(marks)}")
        files = " ".join(position_name(Position(0, c))[0] for c in range(self._size))
        rows.append(f"   {files}")
        return "\n".join(rows)
