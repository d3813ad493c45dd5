"""Run configuration loaded from a TOML file.

Example ``life_config.toml``::

    [grid]
    rows = 5
    cols = 5
    cells = [[2, 1], [2, 2], [2, 3]]

    [run]
    generations = 105
    random = false
    seed = 42
    density = 0.5

    [output]
    log_level = "INFO"
    log_file = "logs/conway_sim.log"
    dead_glyph = "◻"
    alive_glyph = "◼"

    [display]
    window_width = 600
    window_height = 600
    background_color = "black"
    cell_color = "green"
    pause = 0.1
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from loguru import logger

from .errors import ConfigError
from .grid import ALIVE_GLYPH, DEAD_GLYPH, Coord

# The blinker the console driver seeds by default
DEFAULT_CELLS: Tuple[Coord, ...] = ((2, 1), (2, 2), (2, 3))
DEFAULT_GENERATIONS = 105


@dataclass(frozen=True)
class DisplayConfig:
    window_width: int = 600
    window_height: int = 600
    background_color: str = "black"
    cell_color: str = "green"
    pause: float = 0.1


@dataclass(frozen=True)
class RunConfig:
    rows: int = 5
    cols: int = 5
    cells: Tuple[Coord, ...] = DEFAULT_CELLS
    generations: int = DEFAULT_GENERATIONS
    random: bool = False
    seed: Optional[int] = None
    density: float = 0.5
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    dead_glyph: str = DEAD_GLYPH
    alive_glyph: str = ALIVE_GLYPH
    display: DisplayConfig = field(default_factory=DisplayConfig)

    def with_overrides(self, **overrides: Any) -> "RunConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def check_log_level(level: str) -> str:
    """Normalise ``level`` to upper case and make sure loguru knows it."""
    level = level.upper()
    try:
        logger.level(level)
    except ValueError as e:
        raise ConfigError(f"unknown log level {level!r}") from e
    return level


def _section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = cfg.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table")
    return section


def _typed(section: Dict[str, Any], key: str, kind: type, name: str) -> Any:
    value = section[key]
    # bool is an int subclass; never accept it where a number is expected
    if kind is not bool and isinstance(value, bool):
        raise ConfigError(f"{name}.{key} must be {kind.__name__}, got bool")
    if kind is float and isinstance(value, int):
        value = float(value)
    if not isinstance(value, kind):
        raise ConfigError(
            f"{name}.{key} must be {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _parse_cells(raw: Any) -> Tuple[Coord, ...]:
    if not isinstance(raw, list):
        raise ConfigError("grid.cells must be a list of [row, col] pairs")
    cells = []
    for item in raw:
        if (
            not isinstance(item, list)
            or len(item) != 2
            or not all(isinstance(v, int) and not isinstance(v, bool) for v in item)
        ):
            raise ConfigError(f"grid.cells entry {item!r} is not a [row, col] pair")
        cells.append((item[0], item[1]))
    return tuple(cells)


def parse_config(cfg: Dict[str, Any]) -> RunConfig:
    """Build a RunConfig from an already-decoded TOML document."""
    g = _section(cfg, "grid")
    r = _section(cfg, "run")
    o = _section(cfg, "output")
    d = _section(cfg, "display")

    values: Dict[str, Any] = {}
    for key in ("rows", "cols"):
        if key in g:
            values[key] = _typed(g, key, int, "grid")
            if values[key] < 0:
                raise ConfigError(f"grid.{key} must be non-negative")
    if "cells" in g:
        values["cells"] = _parse_cells(g["cells"])

    if "generations" in r:
        values["generations"] = _typed(r, "generations", int, "run")
        if values["generations"] < 0:
            raise ConfigError("run.generations must be non-negative")
    if "random" in r:
        values["random"] = _typed(r, "random", bool, "run")
    if "seed" in r:
        values["seed"] = _typed(r, "seed", int, "run")
    if "density" in r:
        values["density"] = _typed(r, "density", float, "run")
        if not 0.0 <= values["density"] <= 1.0:
            raise ConfigError("run.density must be within [0, 1]")

    if "log_level" in o:
        values["log_level"] = check_log_level(_typed(o, "log_level", str, "output"))
    if "log_file" in o:
        values["log_file"] = Path(_typed(o, "log_file", str, "output"))
    for key in ("dead_glyph", "alive_glyph"):
        if key in o:
            values[key] = _typed(o, key, str, "output")

    display_values: Dict[str, Any] = {}
    for key in ("window_width", "window_height"):
        if key in d:
            display_values[key] = _typed(d, key, int, "display")
    for key in ("background_color", "cell_color"):
        if key in d:
            display_values[key] = _typed(d, key, str, "display")
    if "pause" in d:
        display_values["pause"] = _typed(d, "pause", float, "display")
    values["display"] = DisplayConfig(**display_values)

    return RunConfig(**values)


def load_config(path: Path | str) -> RunConfig:
    path = Path(path)
    try:
        with open(path, "rb") as f:
            cfg = tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"{path} not found") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path} is not valid TOML: {e}") from e
    return parse_config(cfg)
