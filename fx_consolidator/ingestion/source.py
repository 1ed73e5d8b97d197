"""Read transaction files into the raw lines consumed by the loader."""

from __future__ import annotations

from pathlib import Path

__all__ = ["read_lines", "read_text"]


def read_text(path: str | Path, *, encoding: str = "utf-8") -> str:
    """Return the whole file at ``path`` as a string."""

    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(file_path)
    return file_path.read_text(encoding=encoding)


def read_lines(path: str | Path, *, encoding: str = "utf-8") -> list[str]:
    """Return the lines of ``path`` without their line terminators."""

    return read_text(path, encoding=encoding).splitlines()
