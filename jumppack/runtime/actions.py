"""Action table for session key bindings.

Every handler takes ``(session, count)`` and returns ``True`` when the
session should terminate. Handlers mutate session state only; drawing is
left to the loop.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..config import Settings
from ..state import Session, ViewMode
from .instance import apply_filters_and_update, notify
from .navigation import move_selection

logger = logging.getLogger(__name__)

ActionHandler = Callable[[Session, int], bool]

STOP_ACTION = "stop"
OPEN_MODES = ("edit", "split", "vsplit", "tab")


@dataclass(frozen=True)
class ActionSpec:
    name: str
    handler: ActionHandler


def jump_back(session: Session, count: int) -> bool:
    # Older entries sit further down the list.
    move_selection(session, by=count)
    return False


def jump_forward(session: Session, count: int) -> bool:
    move_selection(session, by=-count)
    return False


def jump_to_top(session: Session, count: int) -> bool:
    move_selection(session, to=1)
    return False


def jump_to_bottom(session: Session, count: int) -> bool:
    move_selection(session, to=len(session.items))
    return False


def _choose_with(open_mode: str) -> ActionHandler:
    def choose(session: Session, count: int) -> bool:
        session.open_mode = open_mode
        record = session.selection()
        if record is None:
            logger.info("choose (%s) with no selection", open_mode)
            return True
        session.accepted = True
        logger.info("chose %s:%s:%s (%s)", record.path, record.line, record.column, open_mode)
        if session.on_choose is not None:
            session.on_choose(record, open_mode)
        return True

    return choose


choose = _choose_with("edit")
choose_in_split = _choose_with("split")
choose_in_vsplit = _choose_with("vsplit")
choose_in_tabpage = _choose_with("tab")


def stop(session: Session, count: int) -> bool:
    return True


def toggle_preview(session: Session, count: int) -> bool:
    if session.view_mode is ViewMode.PREVIEW:
        session.view_mode = ViewMode.LIST
    else:
        session.view_mode = ViewMode.PREVIEW
        session.preview_stale = True
    session.dirty = True
    return False


def toggle_file_filter(session: Session, count: int) -> bool:
    session.filters.toggle_file()
    apply_filters_and_update(session)
    return False


def toggle_cwd_filter(session: Session, count: int) -> bool:
    session.filters.toggle_cwd()
    apply_filters_and_update(session)
    return False


def toggle_show_hidden(session: Session, count: int) -> bool:
    session.filters.toggle_show_hidden()
    apply_filters_and_update(session)
    return False


def reset_filters(session: Session, count: int) -> bool:
    session.filters.reset()
    apply_filters_and_update(session)
    return False


def toggle_hidden(session: Session, count: int) -> bool:
    record = session.selection()
    if record is None:
        return False
    hidden = session.hide_store.toggle(record)
    session.hide_store.mark_items(session.all_items)
    apply_filters_and_update(session)
    notify(session, f"{'Hidden' if hidden else 'Unhidden'}: {record.path}:{record.line}")
    return False


ACTIONS: dict[str, ActionHandler] = {
    "jump_back": jump_back,
    "jump_forward": jump_forward,
    "jump_to_top": jump_to_top,
    "jump_to_bottom": jump_to_bottom,
    "choose": choose,
    "choose_in_split": choose_in_split,
    "choose_in_tabpage": choose_in_tabpage,
    "choose_in_vsplit": choose_in_vsplit,
    "stop": stop,
    "toggle_preview": toggle_preview,
    "toggle_file_filter": toggle_file_filter,
    "toggle_cwd_filter": toggle_cwd_filter,
    "toggle_show_hidden": toggle_show_hidden,
    "reset_filters": reset_filters,
    "toggle_hidden": toggle_hidden,
}


def build_bindings(settings: Settings) -> dict[str, ActionSpec]:
    """Map key tokens to ``ActionSpec`` entries for the configured mappings."""
    bindings: dict[str, ActionSpec] = {}
    for token, name in settings.key_bindings().items():
        handler = ACTIONS.get(name)
        if handler is None:
            continue
        bindings[token] = ActionSpec(name, handler)
    return bindings
