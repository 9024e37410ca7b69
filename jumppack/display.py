"""Text formatting for jump records and the footer status.

Pure string helpers shared by the renderer: position markers, short file
names, one-line previews, and the compact ``↑U●↓D`` position indicator.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from .filters import filter_status_text, is_within_directory, resolve_path
from .highlight import read_text
from .records import JumpRecord
from .state import SessionSnapshot

SYMBOL_CURRENT = "●"
SYMBOL_HIDDEN = "✗"
SYMBOL_UP = "↑"
SYMBOL_DOWN = "↓"
SEPARATOR_SPACED = " │ "

PREVIEW_MAX_CHARS = 50
EMPTY_MESSAGE = "No items available"
EMPTY_FILTERED_MESSAGE = "No matching items"

# File names too generic to show without their parent directory.
AMBIGUOUS_NAMES = frozenset(
    {
        "init.lua",
        "index.js",
        "index.ts",
        "index.jsx",
        "index.tsx",
        "__init__.py",
        "main.py",
        "setup.py",
        "index.html",
        "index.css",
        "config.json",
        "package.json",
        "tsconfig.json",
        "Makefile",
        "CMakeLists.txt",
        "Dockerfile",
    }
)


def position_marker(record: JumpRecord | None) -> str:
    if record is None:
        return " "
    if record.is_current or record.offset == 0:
        return SYMBOL_CURRENT
    if record.offset < 0:
        return f"{SYMBOL_UP}{abs(record.offset)}"
    return f"{SYMBOL_DOWN}{record.offset}"


def smart_filename(path: str, cwd: str | None = None) -> str:
    """Return a short display name for ``path``.

    Generic names keep their parent directory; files outside ``cwd`` are
    shown relative to home (``~/...``) or to ``cwd``.
    """
    if not path:
        return ""
    name = os.path.basename(path)
    if name in AMBIGUOUS_NAMES:
        parent = os.path.basename(os.path.dirname(os.path.abspath(os.path.expanduser(path))))
        return f"{parent}/{name}"

    cwd = resolve_path(cwd or os.getcwd())
    full_path = resolve_path(path, cwd)
    if is_within_directory(full_path, cwd):
        return name
    home = resolve_path("~")
    if home != os.sep and is_within_directory(full_path, home):
        return "~" + full_path[len(home) :]
    return os.path.relpath(full_path, cwd)


@lru_cache(maxsize=64)
def _file_lines(path: str, mtime: float) -> tuple[str, ...]:
    return tuple(read_text(Path(path)).splitlines())


def source_lines(path: str, cwd: str | None = None) -> tuple[str, ...]:
    """Return the lines of ``path``; unreadable files yield no lines."""
    full_path = resolve_path(path, cwd)
    try:
        mtime = os.path.getmtime(full_path)
        return _file_lines(full_path, mtime)
    except OSError:
        return ()


def line_preview(record: JumpRecord, cwd: str | None = None) -> str:
    """Return the stripped text of ``record``'s line, truncated for the list."""
    lines = source_lines(record.path, cwd)
    if not 1 <= record.line <= len(lines):
        return ""
    content = lines[record.line - 1].strip()
    if len(content) > PREVIEW_MAX_CHARS:
        content = content[: PREVIEW_MAX_CHARS - 3] + "..."
    return content


def item_to_string(record: JumpRecord, cwd: str | None = None, show_preview: bool = True) -> str:
    """Format ``[marker] name line:col`` with an optional line preview."""
    indicator = SYMBOL_HIDDEN if record.hidden else position_marker(record)
    core = f"{indicator} {smart_filename(record.path, cwd)} {record.line}:{record.column}"
    if not show_preview:
        return core
    preview = line_preview(record, cwd)
    if not preview:
        return core
    return f"{core}{SEPARATOR_SPACED}{preview}"


def empty_message(snapshot: SessionSnapshot) -> str:
    return EMPTY_FILTERED_MESSAGE if snapshot.filters.is_active() else EMPTY_MESSAGE


def position_indicator(snapshot: SessionSnapshot) -> str:
    """Return ``↑U●↓D`` for the selection, with ``×N`` while a count is pending."""
    if not snapshot.items or snapshot.selected_index is None:
        indicator = SYMBOL_CURRENT
    else:
        up = snapshot.selected_index - 1
        down = len(snapshot.items) - snapshot.selected_index
        indicator = f"{SYMBOL_UP}{up}{SYMBOL_CURRENT}{SYMBOL_DOWN}{down}"
    if snapshot.pending_count:
        indicator += f"×{snapshot.pending_count}"
    return indicator


def status_text(snapshot: SessionSnapshot) -> str:
    """Footer status: position indicator plus active filter flags."""
    filters = filter_status_text(snapshot.filters).strip()
    if not filters:
        return position_indicator(snapshot)
    return f"{position_indicator(snapshot)}{SEPARATOR_SPACED}{filters}"
