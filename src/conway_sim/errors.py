"""Exceptions raised by conway_sim."""


class ConwaySimError(Exception):
    """Base class for all conway_sim errors."""


class OutOfBoundsError(ConwaySimError, IndexError):
    """A (row, col) position lies outside the grid."""

    def __init__(self, row: int, col: int, rows: int, cols: int):
        self.row = row
        self.col = col
        self.rows = rows
        self.cols = cols
        super().__init__(
            f"cell ({row}, {col}) is outside a {rows}×{cols} grid"
        )


class InvalidDimensionsError(ConwaySimError, ValueError):
    """Grid dimensions are negative, non-integer or inconsistent."""


class ConfigError(ConwaySimError):
    """A run configuration file could not be read or is invalid."""
