from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from .filters import FilterContext, FilterState
from .hide import HideStore
from .input.counting import CountAccumulator
from .records import JumpRecord

if TYPE_CHECKING:
    from .runtime.actions import ActionSpec
    from .runtime.events import Timer


class ViewMode(str, Enum):
    LIST = "list"
    PREVIEW = "preview"


class Phase(str, Enum):
    CREATED = "created"
    RUNNING = "running"
    DESTROYED = "destroyed"


@dataclass(frozen=True)
class VisibleRange:
    """Inclusive 1-based window of displayed rows."""

    start: int
    end: int

    def contains(self, index: int) -> bool:
        return self.start <= index <= self.end


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view handed to renderers after every state change."""

    items: tuple[JumpRecord, ...]
    selected_index: int | None
    visible_range: VisibleRange | None
    view_mode: ViewMode
    filters: FilterState
    pending_count: str
    source_name: str = "Jumplist"
    status_message: str = ""
    original_cwd: str = ""
    preview_stale: bool = True

    @property
    def selected(self) -> JumpRecord | None:
        if self.selected_index is None or not self.items:
            return None
        return self.items[self.selected_index - 1]


@dataclass
class Session:
    filter_context: FilterContext
    hide_store: HideStore
    bindings: dict[str, ActionSpec]
    wrap_edges: bool = False
    count_timeout_ms: int = 1000
    view_mode: ViewMode = ViewMode.PREVIEW
    source_name: str = "Jumplist"
    all_items: list[JumpRecord] = field(default_factory=list)
    items: list[JumpRecord] = field(default_factory=list)
    filters: FilterState = field(default_factory=FilterState)
    selected_index: int | None = None
    visible_range: VisibleRange | None = None
    list_height: int = 10
    anchor: JumpRecord | None = None
    counter: CountAccumulator = field(default_factory=CountAccumulator)
    count_timer: Timer | None = None
    liveness_timer: Timer | None = None
    phase: Phase = Phase.CREATED
    dirty: bool = True
    preview_stale: bool = True
    status_message: str = ""
    status_message_until: float = 0.0
    accepted: bool = False
    open_mode: str = "edit"
    on_choose: Callable[[JumpRecord, str], object] | None = None

    @property
    def pending_count(self) -> str:
        return self.counter.pending

    @property
    def is_destroyed(self) -> bool:
        return self.phase is Phase.DESTROYED

    def selection(self) -> JumpRecord | None:
        if not self.items or self.selected_index is None:
            return None
        if not 1 <= self.selected_index <= len(self.items):
            return None
        return self.items[self.selected_index - 1]

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            items=tuple(self.items),
            selected_index=self.selected_index,
            visible_range=self.visible_range,
            view_mode=self.view_mode,
            filters=self.filters.copy(),
            pending_count=self.pending_count,
            source_name=self.source_name,
            status_message=self.status_message,
            original_cwd=self.filter_context.original_cwd,
            preview_stale=self.preview_stale,
        )
