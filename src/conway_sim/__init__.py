"""Conway's Game of Life on a fixed-size, bounded grid."""

from .errors import ConfigError, ConwaySimError, InvalidDimensionsError, OutOfBoundsError
from .grid import CellState, Grid
from .simulation import PendingChange, Simulation

__all__ = [
    "CellState",
    "ConfigError",
    "ConwaySimError",
    "Grid",
    "InvalidDimensionsError",
    "OutOfBoundsError",
    "PendingChange",
    "Simulation",
]

__version__ = "0.1.0"
