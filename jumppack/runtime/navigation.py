"""Selection movement for the jump list.

Bounded or circular index movement, jump-to-edge, and the visible-range
window that follows the selection. No drawing happens here; movements only
flag the session for re-render.
"""

from __future__ import annotations

import logging
import math

from ..logs import TRACE
from ..state import Session, ViewMode, VisibleRange

logger = logging.getLogger(__name__)


def compute_visible_range(
    index: int,
    item_count: int,
    height: int,
    current: VisibleRange | None = None,
    force: bool = False,
) -> VisibleRange:
    """Return the row window showing ``index``.

    An existing window is kept while it still contains ``index``; otherwise
    the window is recentred around it.
    """
    height = max(1, height)
    if not force and current is not None and current.contains(index) and current.end <= item_count:
        return current
    end = min(item_count, math.floor(index + 0.5 * height))
    start = max(1, end - height + 1)
    end = start + min(height, item_count) - 1
    return VisibleRange(start, end)


def set_selection(session: Session, index: int | None, force_update: bool = False) -> None:
    """Select ``index`` (clamped) and update the visible range.

    Empty lists always end with no selection and no visible range.
    """
    if not session.items or index is None:
        session.selected_index = None
        session.visible_range = None
        session.dirty = True
        return

    count = len(session.items)
    index = max(1, min(count, index))
    session.visible_range = compute_visible_range(
        index,
        count,
        session.list_height,
        session.visible_range,
        force=force_update,
    )
    session.selected_index = index
    session.anchor = session.items[index - 1]
    session.dirty = True


def move_selection(session: Session, by: int = 0, to: int | None = None) -> bool:
    """Move the selection by ``by`` steps or directly to ``to``.

    With ``wrap_edges`` stepping past either end re-enters from the opposite
    end; otherwise the target is clamped. Returns ``False`` for empty lists.
    """
    if not session.items:
        logger.debug("move_selection: empty items")
        return False

    count = len(session.items)
    if to is None:
        current = session.selected_index or 1
        target = current + by
        if session.wrap_edges:
            if target < 1:
                target = count
                logger.debug("move_selection: wrapped to end")
            elif target > count:
                target = 1
                logger.debug("move_selection: wrapped to start")
        elif target < 1 or target > count:
            logger.debug("move_selection: edge reached, clamping")
        to = target

    to = max(1, min(count, to))
    logger.log(TRACE, "move_selection: by=%s final=%s", by, to)
    set_selection(session, to)

    if session.view_mode is ViewMode.PREVIEW:
        session.preview_stale = True
    return True
