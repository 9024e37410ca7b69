"""Jump records and offset computation.

Converts a raw ordered position history plus a "current index" marker into
records annotated with signed offsets, ordered most-recent-first for display.
This module intentionally has no UI concerns.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawJump:
    """One raw history entry as provided by a history source."""

    path: str
    line: int
    column: int
    buffer_id: object = None


@dataclass
class JumpRecord:
    """One historical cursor position with its offset from "now"."""

    buffer_id: object
    path: str
    line: int
    column: int
    source_index: int
    is_current: bool
    offset: int
    hidden: bool = False

    @property
    def hide_key(self) -> str:
        return hide_key(self.path, self.line, self.column)

    def same_location(self, other: JumpRecord | None) -> bool:
        """Return whether ``other`` points at the same ``(path, line)``."""
        if other is None:
            return False
        return self.path == other.path and self.line == other.line


def hide_key(path: str, line: int, column: int) -> str:
    """Deterministic identity for one location, used by the hide store."""
    return f"{path}:{line}:{column}"


def offset_for_index(index: int, current_index: int) -> int:
    """Return the navigation offset of 1-based history ``index``.

    Entries at or before ``current_index`` are older (negative), the entry
    right after it is the current position (zero), later ones are newer.
    """
    if index <= current_index:
        return -(current_index - index + 1)
    if index == current_index + 1:
        return 0
    return index - current_index - 1


def build_records(
    jumps: Sequence[RawJump],
    current_index: int,
    is_listed: Callable[[RawJump], bool] | None = None,
) -> list[JumpRecord]:
    """Build display-ordered records from raw history.

    Entries without a path, or that ``is_listed`` rejects, are dropped
    silently. The result is reversed so the most recent entries come first.
    """
    records: list[JumpRecord] = []
    for index, jump in enumerate(jumps, start=1):
        if not jump.path:
            continue
        if is_listed is not None and not is_listed(jump):
            logger.debug("dropping unlisted jump %s:%s", jump.path, jump.line)
            continue
        records.append(
            JumpRecord(
                buffer_id=jump.buffer_id,
                path=jump.path,
                line=jump.line,
                column=jump.column,
                source_index=index,
                is_current=index == current_index + 1,
                offset=offset_for_index(index, current_index),
            )
        )
    records.reverse()
    return records
