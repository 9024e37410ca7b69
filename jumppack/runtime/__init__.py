"""Public runtime entry points.

This package groups the session lifecycle (`start`, `current_state`,
`refresh`, `is_active`) and the lower-level loop contracts used by tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .app import SessionHost
    from .loop import SessionLoopCallbacks


def start(*args, **kwargs):
    """Lazily import the session entrypoint to avoid package-import cycles."""
    from .app import start as _start

    return _start(*args, **kwargs)


def current_state():
    from .app import current_state as _current_state

    return _current_state()


def refresh() -> bool:
    from .app import refresh as _refresh

    return _refresh()


def is_active() -> bool:
    from .app import is_active as _is_active

    return _is_active()


def __getattr__(name: str):
    if name == "SessionHost":
        from . import app as _app

        return _app.SessionHost
    if name == "SessionLoopCallbacks":
        from . import loop as _loop

        return _loop.SessionLoopCallbacks
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "start",
    "current_state",
    "refresh",
    "is_active",
    "SessionHost",
    "SessionLoopCallbacks",
]
