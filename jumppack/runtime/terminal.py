"""Terminal control for the interactive session.

Owns raw-mode lifecycle, alternate-screen switching, and cursor visibility.
The input fd may differ from stdin when history arrives on a pipe.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

FOOTER_ROWS = 1
MIN_LIST_ROWS = 3


class TerminalController:
    """Manage terminal mode transitions for one session."""

    def __init__(self, input_fd: int, output_fd: int) -> None:
        """Capture tty state and bind input/output file descriptors."""
        self.input_fd = input_fd
        self.output_fd = output_fd
        self._saved_tty_state = termios.tcgetattr(input_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.input_fd, termios.TCSAFLUSH)
        os.write(self.output_fd, b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Show the cursor, restore the main screen, and restore tty state."""
        os.write(self.output_fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.input_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def size(self) -> os.terminal_size:
        try:
            return os.get_terminal_size(self.output_fd)
        except OSError:
            return terminal_size()

    def write(self, text: str) -> None:
        os.write(self.output_fd, text.encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


def terminal_size() -> os.terminal_size:
    return shutil.get_terminal_size((80, 24))


def list_rows(size: os.terminal_size | None = None) -> int:
    """Rows available to the list view once the footer is reserved."""
    size = size or terminal_size()
    return max(MIN_LIST_ROWS, size.lines - FOOTER_ROWS)
