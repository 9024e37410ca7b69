"""Hide store for jump locations.

Users can permanently hide uninteresting locations. Hidden state is a set of
hide keys (``path:line:column``) kept behind a small persistence port, so the
store never assumes a storage medium.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol

from . import config
from .records import JumpRecord, hide_key

logger = logging.getLogger(__name__)


class HidePersistence(Protocol):
    """Cross-session storage for hide keys."""

    def load_all(self) -> set[str]: ...

    def save_all(self, keys: set[str]) -> None: ...


class MemoryHidePersistence:
    """Process-local persistence; useful for embedding and tests."""

    def __init__(self, keys: Iterable[str] = ()) -> None:
        self.keys: set[str] = set(keys)
        self.save_count = 0

    def load_all(self) -> set[str]:
        return set(self.keys)

    def save_all(self, keys: set[str]) -> None:
        self.keys = set(keys)
        self.save_count += 1


class ConfigHidePersistence:
    """Stores hide keys in the ``hidden_items`` list of the JSON config file."""

    def load_all(self) -> set[str]:
        return config.load_hidden_items()

    def save_all(self, keys: set[str]) -> None:
        config.save_hidden_items(keys)


class HideStore:
    """Query and mutate hidden state; all writes go through ``persistence``."""

    def __init__(self, persistence: HidePersistence) -> None:
        self.persistence = persistence

    def get(self, key: str) -> bool:
        return key in self.persistence.load_all()

    def is_hidden(self, record: JumpRecord) -> bool:
        return self.get(record.hide_key)

    def toggle(self, record: JumpRecord) -> bool:
        """Flip hidden state for ``record``'s location, persist, and return it."""
        hidden = self.persistence.load_all()
        key = record.hide_key
        if key in hidden:
            hidden.discard(key)
            new_state = False
        else:
            hidden.add(key)
            new_state = True
        self.persistence.save_all(hidden)
        logger.info("%s %s", "hid" if new_state else "unhid", key)
        return new_state

    def mark_items(self, records: list[JumpRecord]) -> list[JumpRecord]:
        """Set ``hidden`` on every record in place; order and length are kept."""
        if not records:
            return records
        hidden = self.persistence.load_all()
        for record in records:
            record.hidden = hide_key(record.path, record.line, record.column) in hidden
        return records
