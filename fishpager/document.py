"""Whole-file document loading and line indexing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import FileAccessError

logger = logging.getLogger(__name__)


def read_text(path: Path) -> str:
    """Read ``path`` as UTF-8, replacing undecodable bytes."""
    try:
        raw = path.read_bytes()
    except OSError as exc:
        reason = exc.strerror or exc.__class__.__name__
        raise FileAccessError(f"cannot read {path}: {reason}") from exc
    return raw.decode("utf-8", errors="replace")


def split_lines(text: str) -> tuple[str, ...]:
    """Split on newline boundaries, dropping one trailing carriage return per line.

    A trailing newline yields a final empty line, so an empty text still has
    exactly one line.
    """
    return tuple(line[:-1] if line.endswith("\r") else line for line in text.split("\n"))


@dataclass(frozen=True)
class Document:
    """Immutable line index for one file."""

    path: Path
    lines: tuple[str, ...]

    @property
    def total_lines(self) -> int:
        return len(self.lines)

    @property
    def name(self) -> str:
        return self.path.name

    @classmethod
    def load(cls, path: Path) -> Document:
        if path.is_dir():
            raise FileAccessError(f"cannot read {path}: is a directory")
        lines = split_lines(read_text(path))
        logger.info("loaded %s (%d lines)", path, len(lines))
        return cls(path=path, lines=lines)
