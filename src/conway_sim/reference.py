"""
reference.py — vectorised NumPy Game of Life with bounded edges

Used to cross-check the cell-by-cell engine in simulation.py. The grid
is zero-padded before summing shifted views, so cells outside the edge
count as absent rather than wrapping around.
"""

import hashlib

import numpy as np

from .grid import Grid, check_dimension


class GridNP:
    def __init__(self, data: np.ndarray):
        self.data = np.asarray(data).astype(np.uint8)
        if self.data.ndim != 2:
            raise ValueError(f"expected a 2-D array, got shape {self.data.shape}")
        self.rows, self.cols = self.data.shape

    @classmethod
    def random(
        cls, rows: int, cols: int, density: float = 0.5, seed: int | None = None
    ) -> "GridNP":
        check_dimension("rows", rows)
        check_dimension("cols", cols)
        rng = np.random.default_rng(seed)
        data = (rng.random((rows, cols)) < density).astype(np.uint8)
        return cls(data)

    @classmethod
    def from_grid(cls, grid: Grid) -> "GridNP":
        return cls(np.array(grid.to_rows(), dtype=np.uint8).reshape(grid.rows, grid.cols))

    def to_grid(self) -> Grid:
        if self.rows == 0:
            return Grid(0, self.cols)
        return Grid.from_rows(self.data.tolist())

    def neighbor_counts(self) -> np.ndarray:
        padded = np.pad(self.data, 1, mode="constant", constant_values=0)
        counts = np.zeros_like(self.data, dtype=np.uint8)
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                counts += padded[
                    1 + dr : 1 + dr + self.rows, 1 + dc : 1 + dc + self.cols
                ]
        return counts

    def evolve(self) -> "GridNP":
        neighbors = self.neighbor_counts()
        new_state = ((self.data == 1) & (neighbors == 2)) | (neighbors == 3)
        return GridNP(new_state.astype(np.uint8))

    def fingerprint(self) -> str:
        """Same digest as Grid.fingerprint for identical cell contents."""
        flat_str = "".join("1" if cell else "0" for cell in self.data.flat)
        return hashlib.sha256(flat_str.encode("utf-8")).hexdigest()

    def __repr__(self) -> str:
        return f"GridNP({self.rows}×{self.cols}, alive={int(self.data.sum())})"
