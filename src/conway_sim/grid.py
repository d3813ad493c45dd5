"""
grid.py — bounded Game of Life grid

Cells are stored as a flat row-major list of CellState values
(index = row * cols + col). Grid edges are hard boundaries: positions
outside the grid are never wrapped around and never read.
"""

import hashlib
import random
from enum import Enum
from typing import Iterable, List, Sequence, Tuple

from .errors import InvalidDimensionsError, OutOfBoundsError

Coord = Tuple[int, int]

DEAD_GLYPH = "◻"
ALIVE_GLYPH = "◼"

# (d_row, d_col) offsets of the Moore neighbourhood, centre excluded
NEIGHBOR_OFFSETS: Tuple[Coord, ...] = tuple(
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if not (dr == 0 and dc == 0)
)


class CellState(Enum):
    DEAD = 0
    ALIVE = 1

    def __str__(self) -> str:
        return self.name


def check_dimension(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDimensionsError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidDimensionsError(f"{name} must be non-negative, got {value}")
    return value


class Grid:
    def __init__(self, rows: int, cols: int):
        self._rows = check_dimension("rows", rows)
        self._cols = check_dimension("cols", cols)
        self._cells: List[CellState] = [CellState.DEAD] * (self._rows * self._cols)

    @classmethod
    def from_rows(cls, data: Sequence[Sequence[int]]) -> "Grid":
        """Build a grid from nested 0/1 rows (anything truthy is alive)."""
        rows = len(data)
        cols = len(data[0]) if rows else 0
        grid = cls(rows, cols)
        for r, row in enumerate(data):
            if len(row) != cols:
                raise InvalidDimensionsError(
                    f"row {r} has {len(row)} cells, expected {cols}"
                )
            for c, value in enumerate(row):
                if value:
                    grid._cells[r * cols + c] = CellState.ALIVE
        return grid

    @classmethod
    def random(
        cls, rows: int, cols: int, density: float = 0.5, seed: int | None = None
    ) -> "Grid":
        if not 0.0 <= density <= 1.0:
            raise ValueError(f"density must be within [0, 1], got {density}")
        rng = random.Random(seed)
        grid = cls(rows, cols)
        grid._cells = [
            CellState.ALIVE if rng.random() < density else CellState.DEAD
            for _ in range(grid._rows * grid._cols)
        ]
        return grid

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._rows and 0 <= col < self._cols

    def _index(self, row: int, col: int) -> int:
        if not self.in_bounds(row, col):
            raise OutOfBoundsError(row, col, self._rows, self._cols)
        return row * self._cols + col

    def get(self, row: int, col: int) -> CellState:
        return self._cells[self._index(row, col)]

    def set(self, row: int, col: int, state: CellState) -> None:
        self._cells[self._index(row, col)] = state

    def set_cells(self, coords: Iterable[Coord]) -> None:
        """Mark every (row, col) in ``coords`` alive.

        The whole batch is bounds-checked before any cell is written, so a
        bad coordinate leaves the grid untouched.
        """
        indices = [self._index(row, col) for row, col in coords]
        for idx in indices:
            self._cells[idx] = CellState.ALIVE

    def is_any_alive(self) -> bool:
        return CellState.ALIVE in self._cells

    def alive_count(self) -> int:
        return self._cells.count(CellState.ALIVE)

    def alive_cells(self) -> List[Coord]:
        """Live cell positions in row-major order."""
        return [
            divmod(idx, self._cols)
            for idx, cell in enumerate(self._cells)
            if cell is CellState.ALIVE
        ]

    def neighbor_count(self, row: int, col: int) -> int:
        """Count live cells in the Moore neighbourhood of (row, col).

        Neighbours that would fall outside the grid are absent and count
        as zero; there is no wrap-around.
        """
        self._index(row, col)
        count = 0
        for dr, dc in NEIGHBOR_OFFSETS:
            r, c = row + dr, col + dc
            if 0 <= r < self._rows and 0 <= c < self._cols:
                if self._cells[r * self._cols + c] is CellState.ALIVE:
                    count += 1
        return count

    def to_rows(self) -> List[List[int]]:
        return [
            [self._cells[r * self._cols + c].value for c in range(self._cols)]
            for r in range(self._rows)
        ]

    def fingerprint(self) -> str:
        """Return SHA-256 hex digest of the grid as a flat string of 0s and 1s"""
        flat_str = "".join(str(cell.value) for cell in self._cells)
        return hashlib.sha256(flat_str.encode("utf-8")).hexdigest()

    def render(self, dead: str = DEAD_GLYPH, alive: str = ALIVE_GLYPH) -> str:
        """One line per row, one glyph per cell, each line newline-terminated."""
        lines = []
        for r in range(self._rows):
            start = r * self._cols
            line = "".join(
                alive if cell is CellState.ALIVE else dead
                for cell in self._cells[start : start + self._cols]
            )
            lines.append(line + "\n")
        return "".join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self._rows == other._rows
            and self._cols == other._cols
            and self._cells == other._cells
        )

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Grid({self._rows}×{self._cols}, alive={self.alive_count()})"
