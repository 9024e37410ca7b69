"""Filter engine for jump records.

Three independent boolean filters (same file, same directory, show hidden)
are evaluated against a filter context captured when the session started,
never against live host state.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass

from .records import JumpRecord

logger = logging.getLogger(__name__)

FILTER_BRACKET_OPEN = "["
FILTER_BRACKET_CLOSE = "]"
FILTER_SEPARATOR = ","
FILTER_FILE = "f"
FILTER_CWD = "c"
FILTER_HIDDEN = "."


@dataclass
class FilterState:
    file_only: bool = False
    cwd_only: bool = False
    show_hidden: bool = False

    def toggle_file(self) -> FilterState:
        self.file_only = not self.file_only
        logger.info("file filter %s", "enabled" if self.file_only else "disabled")
        return self

    def toggle_cwd(self) -> FilterState:
        self.cwd_only = not self.cwd_only
        logger.info("cwd filter %s", "enabled" if self.cwd_only else "disabled")
        return self

    def toggle_show_hidden(self) -> FilterState:
        self.show_hidden = not self.show_hidden
        logger.info("show hidden %s", "enabled" if self.show_hidden else "disabled")
        return self

    def reset(self) -> FilterState:
        self.file_only = False
        self.cwd_only = False
        self.show_hidden = False
        logger.info("all filters reset")
        return self

    def is_active(self) -> bool:
        return self.file_only or self.cwd_only or self.show_hidden

    def active_names(self) -> list[str]:
        names: list[str] = []
        if self.file_only:
            names.append("file_only")
        if self.cwd_only:
            names.append("cwd_only")
        if self.show_hidden:
            names.append("show_hidden")
        return names

    def copy(self) -> FilterState:
        return FilterState(self.file_only, self.cwd_only, self.show_hidden)


@dataclass(frozen=True)
class FilterContext:
    """File and directory snapshot taken once at session creation."""

    original_file: str
    original_cwd: str

    @classmethod
    def capture(cls, original_file: str | None, original_cwd: str | None = None) -> FilterContext:
        """Freeze host context into resolved absolute paths."""
        cwd = resolve_path(original_cwd or os.getcwd())
        current = resolve_path(original_file, cwd) if original_file else ""
        return cls(original_file=current, original_cwd=cwd)


def resolve_path(path: str, base: str | None = None) -> str:
    """Normalize ``path`` to an absolute, symlink-free, trailing-slash-free form.

    Relative paths are anchored at ``base`` when given, so results do not
    depend on the process working directory.
    """
    expanded = os.path.expanduser(path)
    if not os.path.isabs(expanded) and base:
        expanded = os.path.join(base, expanded)
    resolved = os.path.realpath(os.path.abspath(expanded))
    if len(resolved) > 1:
        resolved = resolved.rstrip(os.sep) or os.sep
    return resolved


def is_within_directory(path: str, directory: str) -> bool:
    """Return whether resolved ``path`` equals or lives under ``directory``."""
    if directory == os.sep:
        return path.startswith(os.sep)
    return path == directory or path.startswith(directory + os.sep)


def record_matches(record: JumpRecord, filters: FilterState, context: FilterContext) -> bool:
    if filters.file_only or filters.cwd_only:
        item_path = resolve_path(record.path, context.original_cwd)
        if filters.file_only and item_path != context.original_file:
            return False
        if filters.cwd_only:
            item_dir = resolve_path(os.path.dirname(item_path))
            if not is_within_directory(item_dir, context.original_cwd):
                return False
    if not filters.show_hidden and record.hidden:
        return False
    return True


def apply_filters(
    items: Iterable[JumpRecord],
    filters: FilterState,
    context: FilterContext,
) -> list[JumpRecord]:
    """Return records passing every active filter, preserving order."""
    items = list(items)
    if not items:
        return []

    filtered = [item for item in items if record_matches(item, filters, context)]
    logger.debug(
        "filters applied (%s): %d -> %d",
        ", ".join(filters.active_names()) or "none",
        len(items),
        len(filtered),
    )
    if not filtered:
        logger.warning("all items filtered out")
    return filtered


def filter_status_text(filters: FilterState) -> str:
    """Return compact indicator like ``[f,c,.] `` or ``""`` when idle."""
    parts: list[str] = []
    if filters.file_only:
        parts.append(FILTER_FILE)
    if filters.cwd_only:
        parts.append(FILTER_CWD)
    if filters.show_hidden:
        parts.append(FILTER_HIDDEN)
    if not parts:
        return ""
    return FILTER_BRACKET_OPEN + FILTER_SEPARATOR.join(parts) + FILTER_BRACKET_CLOSE + " "
