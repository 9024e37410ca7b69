"""Repeat-count accumulation for keyboard input.

Digits typed before an action build a pending count (``25j`` style). The
machine is idle while ``pending`` is empty and accumulating otherwise; it
returns to idle on timeout, explicit reset, or when a key consumes the count.
Timers are owned by the caller; ``feed`` reports when one must be (re)started.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

ActionT = TypeVar("ActionT")


class KeyOutcome(Enum):
    ACCUMULATE = "accumulate"
    DISPATCH = "dispatch"
    IGNORE = "ignore"


@dataclass(frozen=True)
class KeyDecision(Generic[ActionT]):
    """Classification of one keypress."""

    outcome: KeyOutcome
    action: ActionT | None = None
    count: int = 1
    pending_before: str = ""

    @property
    def restart_timer(self) -> bool:
        return self.outcome is KeyOutcome.ACCUMULATE

    @property
    def had_pending_count(self) -> bool:
        return self.pending_before != ""


class CountAccumulator(Generic[ActionT]):
    """Accumulates digit keys into a pending count and resolves actions."""

    def __init__(self) -> None:
        self.pending = ""

    @property
    def is_idle(self) -> bool:
        return self.pending == ""

    def feed(self, key: str, bindings: Mapping[str, ActionT]) -> KeyDecision[ActionT]:
        """Classify ``key`` against ``bindings`` and update the pending count."""
        pending_before = self.pending
        if len(key) == 1 and key.isdigit() and key.isascii():
            if self.pending or key != "0":
                self.pending += key
                return KeyDecision(KeyOutcome.ACCUMULATE, pending_before=pending_before)
            # A leading '0' is an ordinary key.
            action = bindings.get(key)
            if action is None:
                return KeyDecision(KeyOutcome.IGNORE)
            return KeyDecision(KeyOutcome.DISPATCH, action=action, count=1)

        self.pending = ""
        action = bindings.get(key)
        if action is None:
            return KeyDecision(KeyOutcome.IGNORE, pending_before=pending_before)
        count = int(pending_before) if pending_before else 1
        return KeyDecision(
            KeyOutcome.DISPATCH,
            action=action,
            count=max(1, count),
            pending_before=pending_before,
        )

    def reset(self) -> bool:
        """Clear the pending count; return whether anything was pending."""
        had_pending = self.pending != ""
        self.pending = ""
        return had_pending
