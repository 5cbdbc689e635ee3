"""Utility helpers for reading sources and warnings."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]

STDIN_MARKER = "-"


def read_source(path: PathLike) -> str:
    """Read UTF-8 source text; ``-`` reads standard input."""
    if str(path) == STDIN_MARKER:
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def warn(msg: str) -> None:
    print(msg, file=sys.stderr)
