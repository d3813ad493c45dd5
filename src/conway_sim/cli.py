"""
Console driver for conway_sim.

Usage:
    conway-sim run                         # 5×5 blinker, up to 105 generations
    conway-sim run --config life.toml      # settings from a TOML file
    conway-sim run --random --seed 7 --rows 20 --cols 40
    conway-sim run --display               # pygame window instead of text
    conway-sim verify --generations 100    # cell engine vs NumPy engine
    conway-sim bench --rows 128 --cols 128 # time both engines
"""

import argparse
import sys
import time
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger

from .config import RunConfig, check_log_level, load_config
from .errors import ConfigError, ConwaySimError
from .grid import Coord, Grid
from .reference import GridNP
from .simulation import Simulation


def setup_logging(level: str, log_file: Optional[Path] = None) -> None:
    logger.remove()  # Remove default handler
    logger.add(sys.stderr, level=level)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, rotation="10 MB", retention="30 days", level="DEBUG")


def parse_cell(text: str) -> Coord:
    try:
        row, col = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected ROW,COL, got {text!r}")
    return row, col


def resolve_config(args: argparse.Namespace) -> RunConfig:
    """Defaults, then the config file, then command-line overrides."""
    cfg = load_config(args.config) if args.config else RunConfig()
    if args.density is not None and not 0.0 <= args.density <= 1.0:
        raise ConfigError(f"--density must be within [0, 1], got {args.density}")
    if args.generations is not None and args.generations < 0:
        raise ConfigError(f"--generations must be non-negative, got {args.generations}")
    return cfg.with_overrides(
        rows=args.rows,
        cols=args.cols,
        generations=args.generations,
        cells=tuple(args.cell) if args.cell else None,
        random=getattr(args, "random", None),
        seed=args.seed,
        density=args.density,
        log_level=check_log_level(args.log_level) if args.log_level else None,
    )


def build_simulation(cfg: RunConfig) -> Simulation:
    if cfg.random:
        grid = Grid.random(cfg.rows, cfg.cols, density=cfg.density, seed=cfg.seed)
        logger.info(
            f"Seeded {cfg.rows}×{cfg.cols} grid randomly "
            f"(density={cfg.density}, seed={cfg.seed}): {grid.alive_count()} alive"
        )
        return Simulation.from_grid(grid)

    sim = Simulation(cfg.rows, cfg.cols)
    sim.set_cells(cfg.cells)
    logger.info(f"Seeded {cfg.rows}×{cfg.cols} grid with {len(cfg.cells)} live cells")
    return sim


def cmd_run(cfg: RunConfig, use_display: bool = False) -> int:
    sim = build_simulation(cfg)

    if use_display:
        from .display import run_display

        run_display(sim, cfg.generations, cfg.display)
        return 0

    for _ in range(cfg.generations):
        sim.step()

        print(f"Generation: {sim.get_generation()}")
        print(sim.render(cfg.dead_glyph, cfg.alive_glyph), end="")
        print(f"Any cell alive? {str(sim.is_any_cell_alive()).lower()}")
        print()

        if not sim.is_any_cell_alive():
            break

    logger.info(f"Finished at generation {sim.get_generation()}")
    return 0


def _random_pair(cfg: RunConfig) -> tuple[Simulation, GridNP]:
    reference = GridNP.random(cfg.rows, cfg.cols, density=cfg.density, seed=cfg.seed)
    sim = Simulation.from_grid(reference.to_grid())
    return sim, reference


def cmd_verify(cfg: RunConfig) -> int:
    """Run both engines from the same seed and compare fingerprints."""
    print("Grid Correctness Verification")
    print(f"Grid size: {cfg.rows}×{cfg.cols}")
    print(f"Generations: {cfg.generations}")
    print(f"Seed: {cfg.seed}\n")

    sim, reference = _random_pair(cfg)
    for generation in range(1, cfg.generations + 1):
        sim.step()
        reference = reference.evolve()
        if sim.grid.fingerprint() != reference.fingerprint():
            logger.error(f"Engines diverged at generation {generation}")
            print(f"✗ MISMATCH at generation {generation}")
            return 1

    print(f"  SHA256: {reference.fingerprint()}")
    print("✓ ALL IMPLEMENTATIONS PRODUCE IDENTICAL RESULTS")
    logger.info("Correctness verification passed")
    return 0


def cmd_bench(cfg: RunConfig) -> int:
    sim, reference = _random_pair(cfg)

    start = time.perf_counter()
    for _ in range(cfg.generations):
        sim.step()
    cell_time = time.perf_counter() - start

    start = time.perf_counter()
    for _ in range(cfg.generations):
        reference = reference.evolve()
    numpy_time = time.perf_counter() - start

    match = sim.grid.fingerprint() == reference.fingerprint()
    logger.info(f"Simulation: {cell_time:.6f}s, NumPy: {numpy_time:.6f}s")

    print("═" * 60)
    print(f" GRID EVOLUTION BENCHMARK — {cfg.rows}×{cfg.cols} grid, {cfg.generations} generations")
    print(f" Seed: {cfg.seed}")
    print("═" * 60)
    print(f" {'Implementation':<20} {'Time (s)':<12} {'Speedup'}")
    print("─" * 60)
    for name, t in (("Simulation", cell_time), ("NumPy", numpy_time)):
        speedup = cell_time / t if t > 0 else float("inf")
        print(f" {name:<20} {t:>10.6f} s   {speedup:>6.2f}×")
    print("─" * 60)
    print("   ✓ results match" if match else "   ✗ RESULTS DIFFER")

    return 0 if match else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="conway-sim",
        description="Conway's Game of Life on a bounded grid",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", "-c", type=Path, help="TOML run configuration")
    common.add_argument("--rows", type=int, help="Grid rows")
    common.add_argument("--cols", type=int, help="Grid columns")
    common.add_argument("--generations", "-g", type=int, help="Maximum generations")
    common.add_argument("--seed", type=int, help="Random seed")
    common.add_argument("--density", type=float, help="Alive probability for random seeding")
    common.add_argument("--log-level", help="Log level (default: INFO)")

    run = sub.add_parser("run", parents=[common], help="Step and print a simulation")
    run.add_argument(
        "--cell",
        action="append",
        type=parse_cell,
        metavar="ROW,COL",
        help="Initial live cell; repeat for more cells",
    )
    run.add_argument(
        "--random",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Seed cells randomly (--no-random uses the listed cells)",
    )
    run.add_argument("--display", action="store_true", help="Open a pygame window")

    sub.add_parser("verify", parents=[common], help="Compare the cell engine with NumPy")
    sub.add_parser("bench", parents=[common], help="Time both engines")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command != "run":
        args.cell = None

    try:
        cfg = resolve_config(args)
        setup_logging(cfg.log_level, cfg.log_file)
        if args.command == "run":
            return cmd_run(cfg, use_display=args.display)
        if args.command == "verify":
            return cmd_verify(cfg)
        return cmd_bench(cfg)
    except ConwaySimError as e:
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
