"""Public session entry points.

``start`` builds a session from a history source, runs the loop inside the
host's terminal context, and returns the chosen record. Only one session can
be active at a time; ``current_state``, ``refresh`` and ``is_active`` observe
it from host callbacks.
"""

from __future__ import annotations

import contextlib
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from ..config import ConfigError, Settings, load_settings
from ..filters import FilterState
from ..hide import ConfigHidePersistence, HidePersistence, HideStore
from ..records import JumpRecord, build_records
from ..selection import find_target_offset
from ..sources import HistorySource
from ..state import Session, SessionSnapshot, ViewMode
from .actions import build_bindings
from .events import EventChannel
from .instance import create_session, destroy, set_items
from .loop import SessionLoopCallbacks, run_session_loop, sync_list_height

logger = logging.getLogger(__name__)

LIVENESS_INTERVAL_MS = 1000


def _ignore_message(message: str) -> None:
    return None


@dataclass(frozen=True)
class SessionHost:
    """Host collaborators a session needs: drawing, input, and persistence."""

    render: Callable[[SessionSnapshot], None]
    read_input: Callable[[int], str]
    notify: Callable[[str], None] = _ignore_message
    hide_persistence: HidePersistence = field(default_factory=ConfigHidePersistence)
    current_file: str | None = None
    cwd: str | None = None
    list_height: Callable[[], int] | None = None
    liveness_check: Callable[[], bool] | None = None
    on_choose: Callable[[JumpRecord, str], object] | None = None
    terminal_context: Callable[[], contextlib.AbstractContextManager] | None = None
    clock: Callable[[], float] = time.monotonic


@dataclass
class _ActiveSession:
    session: Session
    channel: EventChannel
    host: SessionHost


_ACTIVE: _ActiveSession | None = None


def _check_liveness(active: _ActiveSession) -> None:
    check = active.host.liveness_check
    if active.session.is_destroyed or check is None:
        return
    if not check():
        logger.info("host went away; ending session")
        destroy(active.session, active.channel)


def start(
    source: HistorySource,
    offset: int = -1,
    settings: Settings | None = None,
    *,
    host: SessionHost,
) -> JumpRecord | None:
    """Run an interactive session and return the chosen record, if any.

    ``offset`` is the requested jump relative to the current position
    (``-1`` is one step back). Returns ``None`` when the user cancels or the
    history is empty.
    """
    global _ACTIVE
    if _ACTIVE is not None:
        raise RuntimeError("a jumppack session is already active")
    if isinstance(offset, bool) or not isinstance(offset, int):
        raise ConfigError(f"offset must be an integer, got {type(offset).__name__}")

    settings = settings or load_settings()
    options = settings.options

    jumps, current = source.load()
    records = build_records(jumps, current, source.is_listed)
    if not records:
        logger.info("no jumps available")
        host.notify("No jumps available")
        return None

    session = create_session(
        bindings=build_bindings(settings),
        hide_store=HideStore(host.hide_persistence),
        original_file=host.current_file,
        original_cwd=host.cwd,
        wrap_edges=options.wrap_edges,
        count_timeout_ms=options.count_timeout_ms,
        view_mode=ViewMode(options.default_view),
        filters=FilterState(cwd_only=options.cwd_only),
        source_name=source.name,
        on_choose=host.on_choose,
    )
    if host.list_height is not None:
        session.list_height = max(1, host.list_height())
    target = find_target_offset(records, offset, wrap_edges=options.wrap_edges)
    logger.info("start: offset=%s -> index %s of %d", offset, target, len(records))
    set_items(session, records, target)

    channel = EventChannel(host.read_input, clock=host.clock)
    active = _ActiveSession(session, channel, host)
    if host.liveness_check is not None:
        session.liveness_timer = channel.start_timer(
            "liveness",
            LIVENESS_INTERVAL_MS,
            lambda: _check_liveness(active),
            repeat_ms=LIVENESS_INTERVAL_MS,
        )

    callbacks = SessionLoopCallbacks(
        render=host.render,
        notify=host.notify,
        list_height=host.list_height,
    )
    terminal_context = host.terminal_context() if host.terminal_context is not None else contextlib.nullcontext()
    _ACTIVE = active
    try:
        with terminal_context:
            return run_session_loop(session, channel, callbacks)
    finally:
        _ACTIVE = None


def is_active() -> bool:
    return _ACTIVE is not None and not _ACTIVE.session.is_destroyed


def current_state() -> SessionSnapshot | None:
    """Return a snapshot of the running session, or ``None`` when idle."""
    if not is_active():
        return None
    return _ACTIVE.session.snapshot()


def refresh() -> bool:
    """Re-measure and redraw the active session. Returns ``False`` when idle."""
    if not is_active():
        return False
    active = _ACTIVE
    session = active.session
    if active.host.list_height is not None:
        sync_list_height(session, active.host.list_height())
    active.host.render(session.snapshot())
    session.dirty = False
    session.preview_stale = False
    return True
