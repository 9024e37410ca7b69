"""Session construction and item-list maintenance.

A session owns the unfiltered records, the filtered view, selection, and
its timers. Everything that replaces ``items`` goes through this module so
selection preservation is applied consistently.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping, Sequence

from ..filters import FilterContext, FilterState, apply_filters
from ..hide import HideStore
from ..records import JumpRecord
from ..selection import preserve_selection
from ..state import Phase, Session, ViewMode
from .events import EventChannel
from .navigation import set_selection

logger = logging.getLogger(__name__)

STATUS_MESSAGE_SECONDS = 2.5


def create_session(
    *,
    bindings: Mapping[str, object],
    hide_store: HideStore,
    original_file: str | None,
    original_cwd: str | None = None,
    wrap_edges: bool = False,
    count_timeout_ms: int = 1000,
    view_mode: ViewMode = ViewMode.PREVIEW,
    filters: FilterState | None = None,
    source_name: str = "Jumplist",
    on_choose: Callable[[JumpRecord, str], object] | None = None,
) -> Session:
    """Create a session in the ``CREATED`` phase with a frozen filter context."""
    context = FilterContext.capture(original_file, original_cwd)
    logger.debug("session created: file=%s cwd=%s", context.original_file, context.original_cwd)
    return Session(
        filter_context=context,
        hide_store=hide_store,
        bindings=dict(bindings),
        wrap_edges=wrap_edges,
        count_timeout_ms=count_timeout_ms,
        view_mode=view_mode,
        source_name=source_name,
        filters=filters or FilterState(),
        on_choose=on_choose,
    )


def set_items(
    session: Session,
    records: Sequence[JumpRecord],
    initial_selection: int | None = None,
) -> None:
    """Replace all records and select the one at ``initial_selection``.

    ``initial_selection`` indexes the unfiltered list; when the filtered view
    no longer contains that record the nearest one by offset is chosen.
    """
    session.all_items = list(records)
    session.hide_store.mark_items(session.all_items)
    session.items = apply_filters(session.all_items, session.filters, session.filter_context)

    previous: JumpRecord | None = None
    if initial_selection is not None and 1 <= initial_selection <= len(session.all_items):
        previous = session.all_items[initial_selection - 1]
    session.anchor = previous
    set_selection(session, preserve_selection(session.items, previous), force_update=True)
    session.preview_stale = True
    logger.info(
        "items set: %d total, %d shown, selected=%s",
        len(session.all_items),
        len(session.items),
        session.selected_index,
    )


def apply_filters_and_update(session: Session) -> None:
    """Re-filter ``all_items`` and keep the user's place in the new view.

    When the view becomes empty the last selected record stays as the
    anchor, so it is selected again once a later change brings it back.
    """
    previous = session.selection() or session.anchor
    session.items = apply_filters(session.all_items, session.filters, session.filter_context)
    set_selection(session, preserve_selection(session.items, previous), force_update=True)
    if session.view_mode is ViewMode.PREVIEW:
        session.preview_stale = True


def notify(session: Session, message: str, level: int = logging.INFO) -> None:
    """Show ``message`` in the status line for a short while."""
    logger.log(level, "notify: %s", message)
    session.status_message = message
    session.status_message_until = time.monotonic() + STATUS_MESSAGE_SECONDS
    session.dirty = True


def on_count_timeout(session: Session) -> None:
    if session.is_destroyed:
        return
    session.count_timer = None
    if session.counter.reset():
        logger.debug("pending count expired")
    session.dirty = True


def restart_count_timer(session: Session, channel: EventChannel) -> None:
    clear_count_timer(session)
    session.count_timer = channel.start_timer(
        "count",
        session.count_timeout_ms,
        lambda: on_count_timeout(session),
    )


def clear_count_timer(session: Session) -> None:
    if session.count_timer is not None:
        session.count_timer.cancel()
        session.count_timer = None


def destroy(session: Session, channel: EventChannel | None = None) -> None:
    """Cancel timers and mark the session destroyed. Safe to call twice."""
    if session.is_destroyed:
        return
    clear_count_timer(session)
    if session.liveness_timer is not None:
        session.liveness_timer.cancel()
        session.liveness_timer = None
    if channel is not None:
        channel.cancel_all()
    session.counter.reset()
    session.phase = Phase.DESTROYED
    logger.info("session destroyed (accepted=%s)", session.accepted)
