"""Event channel tests with a fake clock and scripted input."""

from __future__ import annotations

import unittest

from jumppack.runtime.events import EventChannel, KeyEvent, TimerEvent


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class ScriptedInput:
    """Returns scripted keys; an int entry advances the clock by that many ms."""

    def __init__(self, clock: FakeClock, script: list[object]) -> None:
        self.clock = clock
        self.script = list(script)
        self.waits: list[int] = []

    def __call__(self, timeout_ms: int) -> str:
        self.waits.append(timeout_ms)
        if not self.script:
            self.clock.now += timeout_ms / 1000.0
            return ""
        item = self.script.pop(0)
        if isinstance(item, int):
            self.clock.now += item / 1000.0
            return ""
        return str(item)


class EventChannelTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()

    def test_keys_are_delivered_in_order(self) -> None:
        channel = EventChannel(ScriptedInput(self.clock, ["a", "b"]), clock=self.clock)

        self.assertEqual(channel.next_event(), KeyEvent("a"))
        self.assertEqual(channel.next_event(), KeyEvent("b"))

    def test_timer_fires_as_event_after_deadline(self) -> None:
        fired: list[str] = []
        channel = EventChannel(ScriptedInput(self.clock, [60]), clock=self.clock)
        timer = channel.start_timer("count", 50, lambda: fired.append("count"))

        event = channel.next_event()

        self.assertEqual(event, TimerEvent(timer))
        self.assertEqual(fired, [])

    def test_wait_never_exceeds_poll_interval_or_next_deadline(self) -> None:
        scripted = ScriptedInput(self.clock, [])
        channel = EventChannel(scripted, clock=self.clock)
        channel.start_timer("count", 30, lambda: None)

        channel.next_event(poll_ms=50)

        self.assertLessEqual(scripted.waits[0], 30)

    def test_cancelled_timer_never_fires(self) -> None:
        channel = EventChannel(ScriptedInput(self.clock, [100]), clock=self.clock)
        timer = channel.start_timer("count", 50, lambda: None)
        timer.cancel()

        self.assertIsNone(channel.next_event())

    def test_cancel_all_drops_queued_timer_events(self) -> None:
        channel = EventChannel(ScriptedInput(self.clock, []), clock=self.clock)
        timer = channel.start_timer("count", 10, lambda: None)
        self.clock.now += 1.0
        channel.push(TimerEvent(timer))
        channel.push(KeyEvent("q"))

        channel.cancel_all()

        self.assertEqual(channel.next_event(), KeyEvent("q"))
        self.assertEqual(channel.active_timers, [])

    def test_repeating_timer_is_rescheduled(self) -> None:
        channel = EventChannel(ScriptedInput(self.clock, [1000, 1000]), clock=self.clock)
        timer = channel.start_timer("liveness", 1000, lambda: None, repeat_ms=1000)

        self.assertEqual(channel.next_event(poll_ms=1000), TimerEvent(timer))
        self.assertEqual(channel.next_event(poll_ms=1000), TimerEvent(timer))
        self.assertIn(timer, channel.active_timers)


if __name__ == "__main__":
    unittest.main()
