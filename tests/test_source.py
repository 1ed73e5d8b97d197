from pathlib import Path

import pytest

from fx_consolidator.ingestion.source import read_lines, read_text


def test_read_lines_strips_terminators(tmp_path: Path) -> None:
    path = tmp_path / "input.txt"
    path.write_bytes(b"Company Code\tA\r\nC1\tx\r\n\r\n")

    assert read_lines(path) == ["Company Code\tA", "C1\tx", ""]


def test_read_text_returns_whole_file(tmp_path: Path) -> None:
    path = tmp_path / "input.txt"
    path.write_text("a\nb\n", encoding="utf-8")

    assert read_text(path) == "a\nb\n"


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_lines(tmp_path / "missing.txt")
