"""Frame rendering for the jump selector.

Builds full-screen frames from a ``SessionSnapshot``: the record list or a
highlighted file preview, plus a one-row footer with the source name and
position status. Frames are written in one ``os.write`` call.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path

from .ansi import display_width, pad_ansi_line
from .display import empty_message, item_to_string, source_lines, status_text
from .filters import resolve_path
from .highlight import DEFAULT_STYLE, colorize_source
from .records import JumpRecord
from .state import SessionSnapshot, ViewMode

RESET = "\033[0m"
REVERSE = "\033[7m"
BOLD = "\033[1m"
DIM = "\033[2m"


@lru_cache(maxsize=16)
def _highlighted_lines(path: str, mtime: float, style: str) -> tuple[str, ...]:
    source = "\n".join(source_lines(path))
    return tuple(colorize_source(source, Path(path), style).splitlines())


def highlighted_lines(path: str, style: str = DEFAULT_STYLE) -> tuple[str, ...]:
    try:
        mtime = os.path.getmtime(path)
    except OSError:
        return ()
    return _highlighted_lines(path, mtime, style)


def build_footer(snapshot: SessionSnapshot, width: int) -> str:
    """Inverse-video footer: source (or status message) left, position right."""
    left = f" {snapshot.status_message or snapshot.source_name} "
    right = f" {status_text(snapshot)} "
    gap = width - display_width(left) - display_width(right)
    if gap < 1:
        line = pad_ansi_line(right, width)
    else:
        line = left + " " * gap + right
    return REVERSE + line + RESET


def list_rows(snapshot: SessionSnapshot, width: int, height: int) -> list[str]:
    if not snapshot.items:
        return [pad_ansi_line(f" {empty_message(snapshot)}", width)]

    rows: list[str] = []
    visible = snapshot.visible_range
    start = visible.start if visible is not None else 1
    end = min(len(snapshot.items), start + height - 1)
    for index in range(start, end + 1):
        record = snapshot.items[index - 1]
        text = pad_ansi_line(item_to_string(record, snapshot.original_cwd), width)
        if index == snapshot.selected_index:
            text = REVERSE + text + RESET
        rows.append(text)
    return rows


def preview_rows(
    record: JumpRecord,
    snapshot: SessionSnapshot,
    width: int,
    height: int,
    style: str = DEFAULT_STYLE,
) -> list[str]:
    """Title row and a window of highlighted source centred on the jump line."""
    title = BOLD + pad_ansi_line(item_to_string(record, snapshot.original_cwd, show_preview=False), width) + RESET
    body_height = max(0, height - 1)
    lines = highlighted_lines(resolve_path(record.path, snapshot.original_cwd), style)
    if not lines:
        return [title, pad_ansi_line(f" {DIM}(no preview available){RESET}", width)]

    start = max(1, min(record.line - body_height // 2, len(lines) - body_height + 1))
    gutter_width = len(str(len(lines)))
    rows = [title]
    for lineno in range(start, min(len(lines), start + body_height - 1) + 1):
        gutter = f"{lineno:>{gutter_width}} "
        if lineno == record.line:
            gutter = REVERSE + gutter + RESET
        else:
            gutter = DIM + gutter + RESET
        rows.append(pad_ansi_line(gutter + lines[lineno - 1] + RESET, width) + RESET)
    return rows


def build_frame(
    snapshot: SessionSnapshot,
    width: int,
    height: int,
    style: str = DEFAULT_STYLE,
    preview: list[str] | None = None,
) -> str:
    """Return a full-screen frame for ``snapshot``.

    ``preview`` supplies already built preview rows; they are used only in
    preview mode with a selected record.
    """
    width = max(1, width)
    body_height = max(1, height - 1)
    record = snapshot.selected
    if snapshot.view_mode is ViewMode.PREVIEW and record is not None:
        rows = preview if preview is not None else preview_rows(record, snapshot, width, body_height, style)
    else:
        rows = list_rows(snapshot, width, body_height)

    out = ["\033[H\033[J"]
    for row in rows[:body_height]:
        out.append(row)
        out.append("\r\n")
    out.extend("\r\n" for _ in range(body_height - len(rows)))
    out.append(build_footer(snapshot, width))
    return "".join(out)


class TerminalRenderer:
    """Render snapshots to the terminal.

    Preview rows are rebuilt only when the snapshot marks the preview stale
    or the selected record or terminal size changed since the last frame.
    """

    def __init__(
        self,
        write: Callable[[str], None],
        size: Callable[[], os.terminal_size],
        style: str = DEFAULT_STYLE,
    ) -> None:
        self.write = write
        self.size = size
        self.style = style
        self._preview_key: tuple[JumpRecord, int, int] | None = None
        self._preview_rows: list[str] = []

    def _preview_for(self, snapshot: SessionSnapshot, width: int, height: int) -> list[str] | None:
        record = snapshot.selected
        if snapshot.view_mode is not ViewMode.PREVIEW or record is None:
            return None
        width = max(1, width)
        body_height = max(1, height - 1)
        key = (record, width, body_height)
        if snapshot.preview_stale or key != self._preview_key:
            self._preview_rows = preview_rows(record, snapshot, width, body_height, self.style)
            self._preview_key = key
        return self._preview_rows

    def __call__(self, snapshot: SessionSnapshot) -> None:
        term = self.size()
        preview = self._preview_for(snapshot, term.columns, term.lines)
        self.write(build_frame(snapshot, term.columns, term.lines, self.style, preview))
