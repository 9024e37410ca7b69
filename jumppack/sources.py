"""History sources feeding raw jumps into a session.

A source returns the raw ordered history plus the current-index marker and
decides whether a jump still points at something addressable.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import IO, Protocol

from .records import RawJump

logger = logging.getLogger(__name__)


class HistoryError(ValueError):
    """Raised when history data cannot be read or has the wrong shape."""


class HistorySource(Protocol):
    name: str

    def load(self) -> tuple[list[RawJump], int]: ...

    def is_listed(self, jump: RawJump) -> bool: ...


class StaticHistorySource:
    """In-memory history; every jump with a path counts as listed."""

    name = "Jumplist"

    def __init__(self, jumps: Iterable[RawJump], current: int) -> None:
        self.jumps = list(jumps)
        self.current = current

    def load(self) -> tuple[list[RawJump], int]:
        return list(self.jumps), self.current

    def is_listed(self, jump: RawJump) -> bool:
        return bool(jump.path)


def _int_field(entry: Mapping[str, object], key: str, position: int, default: int | None = None) -> int:
    value = entry.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise HistoryError(f"jumps[{position}].{key} must be an integer, got {type(value).__name__}")
    return value


def parse_history(data: object) -> tuple[list[RawJump], int]:
    """Validate decoded JSON history into raw jumps and the current index.

    Expected shape::

        {"current": 3, "jumps": [{"path": "a.py", "line": 10, "column": 1}, ...]}

    ``current`` defaults to the number of jumps (the position after the
    newest entry).
    """
    if not isinstance(data, dict):
        raise HistoryError(f"history must be a JSON object, got {type(data).__name__}")
    entries = data.get("jumps", [])
    if not isinstance(entries, list):
        raise HistoryError(f"jumps must be a list, got {type(entries).__name__}")

    jumps: list[RawJump] = []
    for position, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise HistoryError(f"jumps[{position}] must be an object, got {type(entry).__name__}")
        path = entry.get("path", "")
        if not isinstance(path, str):
            raise HistoryError(f"jumps[{position}].path must be a string, got {type(path).__name__}")
        buffer_id = entry.get("buffer")
        if buffer_id is not None and (isinstance(buffer_id, bool) or not isinstance(buffer_id, int)):
            raise HistoryError(f"jumps[{position}].buffer must be an integer, got {type(buffer_id).__name__}")
        jumps.append(
            RawJump(
                path=path,
                line=max(1, _int_field(entry, "line", position, 1)),
                column=max(1, _int_field(entry, "column", position, 1)),
                buffer_id=buffer_id,
            )
        )

    current = data.get("current", len(jumps))
    if isinstance(current, bool) or not isinstance(current, int):
        raise HistoryError(f"current must be an integer, got {type(current).__name__}")
    return jumps, max(0, current)


class JsonHistorySource:
    """History read from a JSON file, or from stdin when ``path`` is ``-``.

    Jumps whose file no longer exists are reported as unlisted. Relative
    paths are checked against ``base_dir``.
    """

    name = "Jumplist"

    def __init__(self, path: str | Path = "-", base_dir: str | None = None, stream: IO[str] | None = None) -> None:
        self.path = str(path)
        self.base_dir = base_dir or os.getcwd()
        self.stream = stream

    def _read_text(self) -> str:
        if self.path == "-":
            stream = self.stream or sys.stdin
            return stream.read()
        try:
            return Path(self.path).read_text(encoding="utf-8")
        except OSError as exc:
            raise HistoryError(f"cannot read history {self.path}: {exc.strerror or exc}") from exc

    def load(self) -> tuple[list[RawJump], int]:
        text = self._read_text()
        if not text.strip():
            logger.info("history input is empty")
            return [], 0
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise HistoryError(f"history is not valid JSON: {exc}") from exc
        jumps, current = parse_history(data)
        logger.debug("loaded %d jumps (current=%d) from %s", len(jumps), current, self.path)
        return jumps, current

    def is_listed(self, jump: RawJump) -> bool:
        if not jump.path:
            return False
        path = os.path.expanduser(jump.path)
        if not os.path.isabs(path):
            path = os.path.join(self.base_dir, path)
        return os.path.isfile(path)
