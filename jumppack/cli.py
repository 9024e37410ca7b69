"""Command-line front door for jumppack.

Parses CLI options, loads settings and history, and runs one interactive
session on the terminal. The chosen location is printed to stdout so shell
wrappers and editors can open it.
"""

from __future__ import annotations

import argparse
import contextlib
import json
import logging
import os
import sys
from functools import partial

from .config import LOG_LEVELS, VIEW_MODES, ConfigError, load_settings
from .hide import ConfigHidePersistence
from .input import read_key
from .logs import setup_logging
from .records import JumpRecord
from .render import TerminalRenderer
from .runtime import SessionHost, start
from .runtime.terminal import TerminalController, list_rows
from .sources import HistoryError, JsonHistorySource

logger = logging.getLogger(__name__)

EXIT_CHOSEN = 0
EXIT_CANCELLED = 1
EXIT_ERROR = 2


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jumppack",
        description="Browse a jump history interactively and print the chosen location.",
    )
    parser.add_argument(
        "--history",
        default="-",
        metavar="FILE",
        help='JSON history file, or "-" to read it from stdin (default).',
    )
    parser.add_argument("--offset", type=int, default=-1, help="Initial jump offset (default: -1, one step back).")
    parser.add_argument("--file", default=None, help="File the jump was started from (for the file filter).")
    parser.add_argument("--cwd", default=None, help="Directory for the cwd filter (default: current directory).")
    parser.add_argument(
        "--wrap-edges",
        action="store_true",
        default=None,
        help="Wrap around when moving past either end of the list.",
    )
    parser.add_argument("--view", choices=VIEW_MODES, default=None, help="Initial view mode.")
    parser.add_argument(
        "--count-timeout-ms",
        type=_positive_int,
        default=None,
        help="Milliseconds before a pending count is discarded.",
    )
    parser.add_argument("--log-level", choices=LOG_LEVELS, default=None, help="Log level for the log file.")
    parser.add_argument("--style", default=None, help="Pygments style name for the preview.")
    parser.add_argument("--json", action="store_true", help="Print the chosen jump as a JSON object.")
    return parser


def format_choice(record: JumpRecord, open_mode: str, as_json: bool = False) -> str:
    if not as_json:
        return f"{record.path}:{record.line}:{record.column}"
    return json.dumps(
        {
            "path": record.path,
            "line": record.line,
            "column": record.column,
            "offset": record.offset,
            "open_mode": open_mode,
        }
    )


def _open_tty(history_from_stdin: bool) -> tuple[int, int, int | None]:
    """Return ``(input_fd, output_fd, owned_fd)`` for the interactive UI.

    Keys come from stdin unless it carries the history; frames go to stdout
    unless it is captured. Otherwise both use a fresh ``/dev/tty`` fd.
    """
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    needs_tty = history_from_stdin or not os.isatty(stdin_fd) or not os.isatty(stdout_fd)
    if not needs_tty:
        return stdin_fd, stdout_fd, None
    tty_fd = os.open("/dev/tty", os.O_RDWR)
    input_fd = stdin_fd if not history_from_stdin and os.isatty(stdin_fd) else tty_fd
    output_fd = stdout_fd if os.isatty(stdout_fd) else tty_fd
    return input_fd, output_fd, tty_fd


def _stdin_is_tty() -> bool:
    try:
        return os.isatty(sys.stdin.fileno())
    except (AttributeError, OSError, ValueError):
        return False


def _parent_alive(initial_ppid: int) -> bool:
    return os.getppid() == initial_ppid


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run a session, and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.history == "-" and _stdin_is_tty():
        sys.stderr.write("jumppack: no history on stdin; pipe JSON history in or pass --history FILE\n")
        parser.print_usage(sys.stderr)
        return EXIT_ERROR

    try:
        settings = load_settings(
            wrap_edges=args.wrap_edges,
            default_view=args.view,
            count_timeout_ms=args.count_timeout_ms,
            log_level=args.log_level,
            style=args.style,
        )
    except ConfigError as exc:
        sys.stderr.write(f"jumppack: config error: {exc}\n")
        return EXIT_ERROR
    setup_logging(settings.options.log_level)

    cwd = os.path.abspath(args.cwd or os.getcwd())
    source = JsonHistorySource(args.history, base_dir=cwd)
    history_from_stdin = args.history == "-"

    chosen: list[tuple[JumpRecord, str]] = []
    try:
        input_fd, output_fd, owned_fd = _open_tty(history_from_stdin)
    except OSError as exc:
        sys.stderr.write(f"jumppack: no terminal available: {exc}\n")
        return EXIT_ERROR
    try:
        terminal = TerminalController(input_fd, output_fd)
        host = SessionHost(
            render=TerminalRenderer(terminal.write, terminal.size, settings.options.style),
            read_input=partial(read_key, input_fd),
            hide_persistence=ConfigHidePersistence(),
            current_file=args.file,
            cwd=cwd,
            list_height=lambda: list_rows(terminal.size()),
            liveness_check=partial(_parent_alive, os.getppid()),
            on_choose=lambda record, mode: chosen.append((record, mode)),
            terminal_context=terminal.raw_mode,
        )
        record = start(source, args.offset, settings, host=host)
    except HistoryError as exc:
        sys.stderr.write(f"jumppack: {exc}\n")
        return EXIT_ERROR
    finally:
        if owned_fd is not None:
            with contextlib.suppress(OSError):
                os.close(owned_fd)

    if record is None:
        logger.info("no jump chosen")
        return EXIT_CANCELLED
    open_mode = chosen[-1][1] if chosen else "edit"
    sys.stdout.write(format_choice(record, open_mode, args.json) + "\n")
    return EXIT_CHOSEN


if __name__ == "__main__":
    raise SystemExit(main())
