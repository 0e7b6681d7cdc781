"""Reading-progress persistence.

The record is one JSON object mapping absolute file paths to the first
visible line offset. The whole object is rewritten on every distinct change.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .errors import FileAccessError, ProgressCorruptError

logger = logging.getLogger(__name__)


def _coerce_offset(value: object) -> int | None:
    """Return ``value`` if it is a non-negative JSON integer, else ``None``."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value >= 0 else None


class ProgressStore:
    """Owns the in-memory progress record and its on-disk file."""

    def __init__(self, record_path: Path) -> None:
        self.record_path = record_path
        self._record: dict[str, int] = {}
        self._last_saved: dict[str, int] = {}

    @property
    def record(self) -> dict[str, int]:
        return dict(self._record)

    def load(self) -> dict[str, int]:
        """Read the record, creating an empty one when the file does not exist.

        Raises ``ProgressCorruptError`` when the file is not a JSON object;
        existing progress for other files is never silently discarded.
        """
        try:
            if not self.record_path.exists():
                self.record_path.parent.mkdir(parents=True, exist_ok=True)
                self.record_path.write_text("{}", encoding="utf-8")
            raw = self.record_path.read_text(encoding="utf-8")
        except OSError as exc:
            reason = exc.strerror or exc.__class__.__name__
            raise FileAccessError(f"cannot access progress file {self.record_path}: {reason}") from exc

        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise ProgressCorruptError(
                f"progress file {self.record_path} is not valid JSON: {exc}"
            ) from exc
        if not isinstance(data, dict):
            raise ProgressCorruptError(f"progress file {self.record_path} does not hold a JSON object")

        self._record = {}
        for key, value in data.items():
            offset = _coerce_offset(value)
            if isinstance(key, str) and offset is not None:
                self._record[key] = offset
        self._last_saved = dict(self._record)
        return self.record

    def get(self, path: str) -> int | None:
        return self._record.get(path)

    def save(self, path: str, line: int) -> bool:
        """Persist ``line`` for ``path``; returns ``False`` when nothing was written."""
        line = max(0, line)
        if self._last_saved.get(path) == line:
            return False
        self._record[path] = line
        payload = json.dumps(self._record, indent=2) + "\n"
        try:
            self.record_path.write_text(payload, encoding="utf-8")
        except OSError as exc:
            reason = exc.strerror or exc.__class__.__name__
            raise FileAccessError(f"cannot write progress file {self.record_path}: {reason}") from exc
        self._last_saved[path] = line
        logger.debug("saved progress %s -> %d", path, line)
        return True
