"""
simulation.py — Conway's Game of Life rule engine

Each step evaluates every cell against the grid as it stood at the start
of the step, collects the resulting PendingChange entries, and only then
commits them. Rules never see a neighbour's already-updated value.
"""

from typing import Iterable, List, NamedTuple, Optional

from loguru import logger

from .grid import ALIVE_GLYPH, DEAD_GLYPH, CellState, Coord, Grid


class PendingChange(NamedTuple):
    row: int
    col: int
    state: CellState

    def __str__(self) -> str:
        return f"PendingChange[row: {self.row}, col: {self.col}, state: {self.state}]"


class Simulation:
    def __init__(self, rows: int, cols: int):
        self._grid = Grid(rows, cols)
        self._generation = 0

    @classmethod
    def from_grid(cls, grid: Grid) -> "Simulation":
        """Adopt an existing grid; the simulation owns it from now on."""
        sim = cls(0, 0)
        sim._grid = grid
        return sim

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def generation(self) -> int:
        return self._generation

    def get_generation(self) -> int:
        return self._generation

    def is_cell_alive(self, row: int, col: int) -> bool:
        return self._grid.get(row, col) is CellState.ALIVE

    def is_any_cell_alive(self) -> bool:
        return self._grid.is_any_alive()

    def get_neighbor_count(self, row: int, col: int) -> int:
        return self._grid.neighbor_count(row, col)

    def set_cells(self, coords: Iterable[Coord]) -> None:
        self._grid.set_cells(coords)

    def _evaluate(self, row: int, col: int) -> Optional[PendingChange]:
        neighbors = self._grid.neighbor_count(row, col)

        if self.is_cell_alive(row, col):
            # underpopulation
            if neighbors < 2:
                return PendingChange(row, col, CellState.DEAD)
            # survives
            if neighbors <= 3:
                return None
            # overcrowding
            return PendingChange(row, col, CellState.DEAD)

        # reproduction
        if neighbors == 3:
            return PendingChange(row, col, CellState.ALIVE)
        return None

    def step(self) -> List[PendingChange]:
        """Advance one generation and return the changes that were applied."""
        self._generation += 1

        changes: List[PendingChange] = []
        for row in range(self._grid.rows):
            for col in range(self._grid.cols):
                change = self._evaluate(row, col)
                if change is not None:
                    changes.append(change)

        for change in changes:
            self._grid.set(change.row, change.col, change.state)

        logger.debug(
            f"Generation {self._generation}: {len(changes)} changes, "
            f"{self._grid.alive_count()} alive"
        )
        return changes

    def run(self, max_generations: int) -> int:
        """Step until ``max_generations`` steps were taken or nothing is alive.

        Returns the generation reached.
        """
        if max_generations < 0:
            raise ValueError(f"max_generations must be non-negative, got {max_generations}")
        for _ in range(max_generations):
            self.step()
            if not self.is_any_cell_alive():
                logger.info(f"Extinct at generation {self._generation}")
                break
        return self._generation

    def render(self, dead: str = DEAD_GLYPH, alive: str = ALIVE_GLYPH) -> str:
        return self._grid.render(dead, alive)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Simulation(generation={self._generation}, grid={self._grid!r})"
