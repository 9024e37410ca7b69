"""Single-threaded event channel for the session loop.

Keys and timer expiries arrive as events on one channel. Timers never run
in parallel with key handling; the loop receives them as ``TimerEvent`` and
invokes the callback itself, between dispatch steps.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

POLL_INTERVAL_MS = 50


@dataclass
class Timer:
    """A one-shot or repeating deadline owned by an ``EventChannel``."""

    name: str
    deadline: float
    callback: Callable[[], object]
    interval: float | None = None
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass(frozen=True)
class KeyEvent:
    key: str


@dataclass(frozen=True)
class TimerEvent:
    timer: Timer


Event = KeyEvent | TimerEvent


@dataclass
class EventChannel:
    """Merge keyboard input and timers into one ordered event stream.

    ``read_input(timeout_ms)`` must return a key token or ``""`` when no key
    arrived within the timeout.
    """

    read_input: Callable[[int], str]
    clock: Callable[[], float] = time.monotonic
    _queue: deque[Event] = field(default_factory=deque)
    _timers: list[Timer] = field(default_factory=list)

    def start_timer(
        self,
        name: str,
        delay_ms: int,
        callback: Callable[[], object],
        repeat_ms: int | None = None,
    ) -> Timer:
        timer = Timer(
            name=name,
            deadline=self.clock() + delay_ms / 1000.0,
            callback=callback,
            interval=(repeat_ms / 1000.0) if repeat_ms else None,
        )
        self._timers.append(timer)
        logger.debug("timer %s started (%sms)", name, delay_ms)
        return timer

    def cancel_all(self) -> None:
        for timer in self._timers:
            timer.cancel()
        self._timers.clear()
        self._queue = deque(event for event in self._queue if not isinstance(event, TimerEvent))

    def push(self, event: Event) -> None:
        self._queue.append(event)

    @property
    def active_timers(self) -> list[Timer]:
        return [timer for timer in self._timers if not timer.cancelled]

    def _collect_due(self) -> None:
        now = self.clock()
        kept: list[Timer] = []
        for timer in self._timers:
            if timer.cancelled:
                continue
            if timer.deadline <= now:
                self._queue.append(TimerEvent(timer))
                if timer.interval:
                    timer.deadline = now + timer.interval
                    kept.append(timer)
            else:
                kept.append(timer)
        self._timers = kept

    def _pop_ready(self) -> Event | None:
        self._collect_due()
        while self._queue:
            event = self._queue.popleft()
            if isinstance(event, TimerEvent) and event.timer.cancelled:
                continue
            return event
        return None

    def _wait_ms(self, poll_ms: int) -> int:
        timers = self.active_timers
        if not timers:
            return poll_ms
        soonest = min(timer.deadline for timer in timers)
        remaining = int(max(0.0, soonest - self.clock()) * 1000)
        return max(0, min(poll_ms, remaining))

    def next_event(self, poll_ms: int = POLL_INTERVAL_MS) -> Event | None:
        """Return the next pending event, waiting at most ``poll_ms`` for input.

        Due timers are queued before input is read so an expired count
        timeout is never reordered behind a later keypress.
        """
        event = self._pop_ready()
        if event is not None:
            return event

        key = self.read_input(self._wait_ms(poll_ms))
        if key:
            return KeyEvent(key)
        return self._pop_ready()
