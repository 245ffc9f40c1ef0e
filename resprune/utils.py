"""Shared text and filesystem helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .logging import get_logger

_logger = get_logger("utils")


def read_text(path: Path) -> Optional[str]:
    """Return file contents for scanning, or None when the file is unreadable."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        _logger.warning("Skipping unreadable file %s: %s", path, exc)
        return None


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` / ``\\r\\n`` only, without a phantom trailing line."""
    if not text:
        return []
    lines = text.replace("\r\n", "\n").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def iter_files(roots: Iterable[Path], extensions: Sequence[str]) -> Iterator[Path]:
    """Walk ``roots`` recursively, yielding files whose suffix is in ``extensions``."""
    wanted = {ext.lower() for ext in extensions}
    for root in roots:
        root = Path(root)
        if root.is_file():
            if root.suffix.lower() in wanted:
                yield root
            continue
        if not root.is_dir():
            continue
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            for filename in sorted(filenames):
                path = Path(dirpath) / filename
                if path.suffix.lower() in wanted:
                    yield path


def find_tag_end(text: str, quote: Optional[str] = None) -> Tuple[int, Optional[str]]:
    """Return the index of the '>' closing an opening tag, or -1, plus the open quote.

    Quotes carry across calls so an opening tag may span several lines and
    a '>' inside an attribute value does not end it.
    """
    for index, char in enumerate(text):
        if quote is not None:
            if char == quote:
                quote = None
        elif char in {'"', "'"}:
            quote = char
        elif char == ">":
            return index, None
    return -1, quote


def posix(path: Path) -> str:
    return Path(path).as_posix()


__all__ = ["find_tag_end", "iter_files", "posix", "read_text", "split_lines"]
