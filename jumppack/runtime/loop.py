"""Main session loop.

Each iteration re-measures the list area, expires status messages, renders
when dirty, then blocks briefly for the next key or timer event. Key
classification goes through the count accumulator before dispatch.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..input import KeyOutcome
from ..records import JumpRecord
from ..state import Phase, Session, SessionSnapshot
from .actions import STOP_ACTION
from .events import POLL_INTERVAL_MS, EventChannel, TimerEvent
from .instance import clear_count_timer, destroy, notify, restart_count_timer
from .navigation import set_selection

logger = logging.getLogger(__name__)

CANCEL_KEY = "CTRL_C"


@dataclass(frozen=True)
class SessionLoopCallbacks:
    """Injected host operations used by ``run_session_loop``."""

    render: Callable[[SessionSnapshot], None]
    notify: Callable[[str], None] | None = None
    list_height: Callable[[], int] | None = None


def sync_list_height(session: Session, height: int) -> None:
    """Adopt a new list height and recentre the visible range."""
    height = max(1, height)
    if height == session.list_height:
        return
    session.list_height = height
    set_selection(session, session.selected_index, force_update=True)


def dispatch_key(
    session: Session,
    channel: EventChannel,
    key: str,
    report: Callable[[str], None] | None = None,
) -> bool:
    """Feed one key through the count machine and run its action.

    Returns ``True`` when the session should terminate.
    """
    if key == CANCEL_KEY and key not in session.bindings:
        logger.info("cancelled with %s", key)
        return True

    decision = session.counter.feed(key, session.bindings)
    if decision.restart_timer:
        restart_count_timer(session, channel)
        session.dirty = True
        return False

    clear_count_timer(session)
    if decision.had_pending_count:
        session.dirty = True
    if decision.outcome is KeyOutcome.IGNORE or decision.action is None:
        return False

    spec = decision.action
    if spec.name == STOP_ACTION and decision.had_pending_count:
        logger.debug("stop cleared pending count %r", decision.pending_before)
        return False

    try:
        return bool(spec.handler(session, decision.count))
    except Exception as exc:
        logger.exception("action %s failed", spec.name)
        message = f"(jumppack) {spec.name} failed: {exc}"
        notify(session, message, logging.ERROR)
        if report is not None:
            report(message)
        return False


def run_session_loop(
    session: Session,
    channel: EventChannel,
    callbacks: SessionLoopCallbacks,
    poll_ms: int = POLL_INTERVAL_MS,
) -> JumpRecord | None:
    """Run until an action terminates the session or it is destroyed.

    Returns the selected record when the session was accepted, else ``None``.
    """
    session.phase = Phase.RUNNING
    try:
        while not session.is_destroyed:
            if callbacks.list_height is not None:
                sync_list_height(session, callbacks.list_height())

            if session.status_message and time.monotonic() >= session.status_message_until:
                session.status_message = ""
                session.status_message_until = 0.0
                session.dirty = True

            if session.dirty:
                callbacks.render(session.snapshot())
                session.dirty = False
                session.preview_stale = False

            try:
                event = channel.next_event(poll_ms)
            except KeyboardInterrupt:
                # Ignore SIGINT-style interrupts; CTRL_C arrives as a key in raw mode.
                continue
            if event is None:
                continue
            if isinstance(event, TimerEvent):
                if not session.is_destroyed:
                    event.timer.callback()
                continue
            if dispatch_key(session, channel, event.key, callbacks.notify):
                break
    finally:
        destroy(session, channel)

    if not session.accepted:
        return None
    return session.selection()
