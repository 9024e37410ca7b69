"""Public package surface for jumppack.

Exports ``main`` for programmatic CLI invocation.
Session entry points live in ``jumppack.runtime``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
