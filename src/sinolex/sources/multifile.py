"""Iterate the lines of several UTF-8 source files as one stream."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Sequence

from sinolex.models import SourceLine

BOM = "\ufeff"


def iter_lines(paths: Sequence[Path]) -> Iterator[SourceLine]:
    """Yield every line of ``paths`` in order with its file and line number.

    Line breaks are dropped and a byte order mark at the start of a file is
    removed. ``file_index`` and ``line_number`` are both 1-based.

    Args:
        paths: Files to read, in order.

    Yields:
        One ``SourceLine`` per physical line.

    Raises:
        ValueError: If ``paths`` is empty.
        FileNotFoundError: If a file does not exist.
    """

    if not paths:
        raise ValueError("No source files given.")
    missing = [str(path) for path in paths if not path.exists()]
    if missing:
        raise FileNotFoundError(f"Source file not found: {', '.join(missing)}")

    for file_index, path in enumerate(paths, start=1):
        with path.open("r", encoding="utf-8", newline=None) as handle:
            for line_number, line in enumerate(handle, start=1):
                text = line.rstrip("\r\n")
                if line_number == 1 and text.startswith(BOM):
                    text = text[len(BOM) :]
                yield SourceLine(file_index=file_index, line_number=line_number, text=text)
