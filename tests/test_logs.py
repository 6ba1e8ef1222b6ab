from pathlib import Path

from functions.lib import logs


def test_tail_returns_last_lines_in_order(tmp_path: Path):
    log_file = tmp_path / "emulator.log"
    log_file.write_text("one\ntwo\nthree\nfour\n")

    assert logs.tail(log_file, 2) == ["three", "four"]


def test_tail_with_fewer_lines_than_limit(tmp_path: Path):
    log_file = tmp_path / "emulator.log"
    log_file.write_text("only\n")

    assert logs.tail(log_file, 20) == ["only"]


def test_tail_missing_file_or_zero_limit(tmp_path: Path):
    log_file = tmp_path / "emulator.log"
    assert logs.tail(log_file) == []

    log_file.write_text("one\n")
    assert logs.tail(log_file, 0) == []


def test_clear_truncates(tmp_path: Path):
    log_file = tmp_path / "emulator.log"
    assert not logs.clear(log_file)

    log_file.write_text("one\n")
    assert logs.clear(log_file)
    assert log_file.read_text() == ""


def test_ensure_creates_parent(tmp_path: Path):
    log_file = tmp_path / "nested" / "logs" / "emulator.log"

    assert logs.ensure(log_file) == log_file
    assert log_file.parent.is_dir()
