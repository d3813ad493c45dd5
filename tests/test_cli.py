"""End-to-end tests for the conway-sim console driver."""

from __future__ import annotations

from pathlib import Path

import pytest

from conway_sim.cli import main


def test_default_run_prints_blinker(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["run", "--generations", "2"]) == 0

    out = capsys.readouterr().out
    assert out == (
        "Generation: 1\n"
        "◻◻◻◻◻\n◻◻◼◻◻\n◻◻◼◻◻\n◻◻◼◻◻\n◻◻◻◻◻\n"
        "Any cell alive? true\n"
        "\n"
        "Generation: 2\n"
        "◻◻◻◻◻\n◻◻◻◻◻\n◻◼◼◼◻\n◻◻◻◻◻\n◻◻◻◻◻\n"
        "Any cell alive? true\n"
        "\n"
    )


def test_default_run_reaches_generation_limit(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["run"]) == 0

    out = capsys.readouterr().out
    assert out.count("Generation: ") == 105
    assert "Generation: 105\n" in out


def test_run_stops_when_extinct(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["run", "--cell", "0,0", "--generations", "50"]) == 0

    out = capsys.readouterr().out
    assert out.count("Generation: ") == 1
    assert "Any cell alive? false" in out


def test_run_with_config_and_cli_override(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config = tmp_path / "life.toml"
    config.write_text(
        '[grid]\nrows = 4\ncols = 4\ncells = [[1, 1], [1, 2], [2, 1], [2, 2]]\n'
        '[run]\ngenerations = 10\n'
        '[output]\ndead_glyph = "."\nalive_glyph = "#"\n',
        encoding="utf-8",
    )

    assert main(["run", "--config", str(config), "--generations", "1"]) == 0

    out = capsys.readouterr().out
    assert out == "Generation: 1\n....\n.##.\n.##.\n....\nAny cell alive? true\n\n"


def test_random_run_is_reproducible(capsys: pytest.CaptureFixture[str]) -> None:
    args = ["run", "--random", "--seed", "3", "--rows", "6", "--cols", "6", "-g", "3"]

    assert main(args) == 0
    first = capsys.readouterr().out
    assert main(args) == 0
    assert capsys.readouterr().out == first


def test_out_of_bounds_cell_exits_with_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["run", "--cell", "5,5"]) == 2
    assert "outside a 5×5 grid" in capsys.readouterr().err


def test_negative_rows_exit_with_error() -> None:
    assert main(["run", "--rows", "-2"]) == 2


def test_bad_density_exits_with_error() -> None:
    assert main(["verify", "--density", "3"]) == 2


def test_missing_config_exits_with_error(tmp_path: Path) -> None:
    assert main(["run", "--config", str(tmp_path / "missing.toml")]) == 2


def test_malformed_cell_is_rejected_by_argparse() -> None:
    with pytest.raises(SystemExit):
        main(["run", "--cell", "1-2"])


def test_verify_passes(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["verify", "--rows", "12", "--cols", "20", "-g", "30", "--seed", "42"]) == 0
    assert "IDENTICAL RESULTS" in capsys.readouterr().out


def test_bench_reports_both_engines(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["bench", "--rows", "10", "--cols", "10", "-g", "5", "--seed", "1"]) == 0

    out = capsys.readouterr().out
    assert "Simulation" in out
    assert "NumPy" in out
    assert "results match" in out


def test_log_file_sink(tmp_path: Path) -> None:
    config = tmp_path / "life.toml"
    log_file = tmp_path / "logs" / "run.log"
    config.write_text(f'[output]\nlog_file = "{log_file.as_posix()}"\n', encoding="utf-8")

    assert main(["run", "--config", str(config), "-g", "1"]) == 0

    assert "Generation 1" in log_file.read_text(encoding="utf-8")


@pytest.mark.parametrize("command", ["run", "verify", "bench"])
@pytest.mark.parametrize("flag", ["--rows", "--cols"])
def test_negative_dimensions_exit_with_error(
    command: str, flag: str, capsys: pytest.CaptureFixture[str]
) -> None:
    args = [command, flag, "-1", "-g", "1"]
    if command == "run":
        args.append("--random")

    assert main(args) == 2
    assert "must be non-negative" in capsys.readouterr().err


@pytest.mark.parametrize("command", ["run", "verify", "bench"])
def test_unknown_log_level_exits_with_error(command: str) -> None:
    assert main([command, "--log-level", "bogus", "-g", "1"]) == 2


def test_unknown_log_level_in_config_exits_with_error(tmp_path: Path) -> None:
    config = tmp_path / "life.toml"
    config.write_text('[output]\nlog_level = "bogus"\n', encoding="utf-8")

    assert main(["run", "--config", str(config), "-g", "1"]) == 2


def test_log_level_flag_is_case_insensitive() -> None:
    assert main(["run", "--log-level", "debug", "-g", "1"]) == 0


def test_no_random_overrides_config(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config = tmp_path / "life.toml"
    config.write_text(
        "[grid]\nrows = 5\ncols = 5\ncells = [[2, 1], [2, 2], [2, 3]]\n"
        "[run]\nrandom = true\nseed = 9\n",
        encoding="utf-8",
    )

    assert main(["run", "--config", str(config), "--no-random", "-g", "1"]) == 0
    assert "◻◻◻◻◻\n◻◻◼◻◻\n◻◻◼◻◻\n◻◻◼◻◻\n◻◻◻◻◻\n" in capsys.readouterr().out


def test_random_flag_overrides_config(capsys: pytest.CaptureFixture[str]) -> None:
    # Full density fills the grid, and a full 2×2 block is a still life
    assert main(["run", "--random", "--density", "1", "--rows", "2", "--cols", "2", "-g", "1"]) == 0
    assert "◼◼\n◼◼\n" in capsys.readouterr().out
