"""Tests for the command-line driver."""

from pathlib import Path

import pytest
from battleship_solver import cli


@pytest.fixture(autouse=True)
def _no_telemetry(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "init_telemetry", lambda *_: None)
    monkeypatch.delenv("BATTLESHIP_SOLVER_BOARD_SIZE", raising=False)
    monkeypatch.delenv("BATTLESHIP_SOLVER_FLEET", raising=False)


def test_solve_prints_remaining_placements(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    log = tmp_path / "moves.txt"
    log.write_text("A1P\nA2\n", encoding="utf-8")

    assert cli.main(["solve", str(log), "--board-size", "5"]) == 0
    out = capsys.readouterr().out
    assert "Patrol     (  1): A1-B1" in out
    assert "Carrier" in out


def test_overlap_query(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["overlap", "carrier", "71", "P", "9"]) == 0
    assert capsys.readouterr().out.strip() == "true"


def test_errors_exit_with_status_two(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    log = tmp_path / "moves.txt"
    log.write_text("Z9\n", encoding="utf-8")
    assert cli.main(["solve", str(log)]) == 2
    assert "line 1" in capsys.readouterr().err

    assert cli.main(["overlap", "P", "500", "C", "0"]) == 2
    assert cli.main(["solve", str(tmp_path / "missing.txt")]) == 2
    assert cli.main(["solve", str(log), "--board-size", "3"]) == 2


def test_board_size_accepted_on_each_subcommand(capsys: pytest.CaptureFixture[str]) -> None:
    # Carrier 0 covers A1-A5 on a 5x5 board; Patrol 24 is the vertical one anchored at A5.
    assert cli.main(["overlap", "C", "0", "P", "24", "--board-size", "5"]) == 0
    assert capsys.readouterr().out.strip() == "true"

    parser = cli.build_parser()
    assert parser.parse_args(["solve", "--board-size", "6"]).board_size == 6
    assert parser.parse_args(["solve"]).board_size is None


def test_non_utf8_log_exits_with_status_two(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    log = tmp_path / "moves.txt"
    log.write_bytes(b"A1P\n\xff\xfe\n")
    assert cli.main(["solve", str(log)]) == 2
    assert "not valid UTF-8" in capsys.readouterr().err
