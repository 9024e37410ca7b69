"""Selection resolution for jump lists.

Two related algorithms:

* ``find_target_offset`` picks the record to select when a session starts
  with a requested offset ("jump back 3").
* ``preserve_selection`` keeps the user's place when the displayed list is
  replaced after a filter or hide toggle.

Both are pure, 1-based, and return ``None`` only for empty lists.
"""

from __future__ import annotations

from collections.abc import Sequence

from .records import JumpRecord


def _directional_candidate(
    items: Sequence[JumpRecord],
    target_offset: int,
) -> int | None:
    """Return the index of the closest record in ``target_offset``'s direction.

    Only records that do not overshoot the target qualify, largest magnitude
    first. Ties keep the first occurrence in display order.
    """
    best: int | None = None
    wanted = abs(target_offset)
    forward = target_offset > 0
    for idx, item in enumerate(items, start=1):
        if item.offset == 0 or (item.offset > 0) != forward:
            continue
        distance = abs(item.offset)
        if distance <= wanted and (best is None or distance > abs(items[best - 1].offset)):
            best = idx
    return best


def _wrap_candidate(items: Sequence[JumpRecord], target_offset: int) -> int | None:
    """Return the furthest record opposite ``target_offset`` when none lie toward it."""
    forward = [idx for idx, item in enumerate(items, start=1) if item.offset > 0]
    backward = [idx for idx, item in enumerate(items, start=1) if item.offset < 0]
    if target_offset > 0 and not forward and backward:
        return min(backward, key=lambda idx: items[idx - 1].offset)
    if target_offset < 0 and not backward and forward:
        return max(forward, key=lambda idx: items[idx - 1].offset)
    return None


def find_target_offset(
    items: Sequence[JumpRecord],
    target_offset: int,
    wrap_edges: bool = False,
) -> int | None:
    """Resolve ``target_offset`` to a 1-based index into ``items``.

    Priority: exact offset match, closest record in the requested direction
    that does not overshoot, wrap to the opposite end (when ``wrap_edges``
    and nothing lies in the requested direction), the current position, and
    finally the first record.
    """
    if not items:
        return None

    for idx, item in enumerate(items, start=1):
        if item.offset == target_offset:
            return idx

    if target_offset != 0:
        directional = _directional_candidate(items, target_offset)
        if directional is not None:
            return directional

        if wrap_edges:
            wrapped = _wrap_candidate(items, target_offset)
            if wrapped is not None:
                return wrapped

    for idx, item in enumerate(items, start=1):
        if item.offset == 0:
            return idx
    return 1


def preserve_selection(
    new_items: Sequence[JumpRecord],
    previous: JumpRecord | None,
) -> int | None:
    """Return the index in ``new_items`` that best continues ``previous``.

    Same ``(path, line)`` wins; otherwise the record with the nearest offset
    (first occurrence on ties). Empty lists yield ``None``.
    """
    if not new_items:
        return None
    if previous is None:
        return 1

    for idx, item in enumerate(new_items, start=1):
        if item.same_location(previous):
            return idx

    best_idx = 1
    min_diff = abs(new_items[0].offset - previous.offset)
    for idx, item in enumerate(new_items, start=1):
        diff = abs(item.offset - previous.offset)
        if diff < min_diff:
            min_diff = diff
            best_idx = idx
    return best_idx
