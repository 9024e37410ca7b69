"""Public entry point tests: ``start``, ``current_state``, ``refresh``, ``is_active``."""

from __future__ import annotations

import unittest

from jumppack.config import ConfigError, validate_settings
from jumppack.hide import MemoryHidePersistence
from jumppack.records import RawJump
from jumppack.runtime import app
from jumppack.runtime.app import SessionHost
from jumppack.sources import StaticHistorySource

JUMPS = [RawJump("/w/a.py", 1, 1), RawJump("/w/b.py", 2, 1), RawJump("/w/c.py", 3, 1)]


class FakeClock:
    def __init__(self) -> None:
        self.now = 10.0

    def __call__(self) -> float:
        return self.now


class ScriptedInput:
    def __init__(self, clock: FakeClock, script: list[object]) -> None:
        self.clock = clock
        self.script = list(script)

    def __call__(self, timeout_ms: int) -> str:
        if not self.script:
            return "CTRL_C"
        item = self.script.pop(0)
        if isinstance(item, int):
            self.clock.now += item / 1000.0
            return ""
        return str(item)


def make_host(script: list[object], **kwargs) -> tuple[SessionHost, list]:
    clock = FakeClock()
    frames: list = kwargs.pop("frames", [])
    host = SessionHost(
        render=kwargs.pop("render", frames.append),
        read_input=ScriptedInput(clock, script),
        hide_persistence=MemoryHidePersistence(),
        current_file="/w/a.py",
        cwd="/w",
        clock=clock,
        **kwargs,
    )
    return host, frames


SETTINGS = validate_settings(default_view="list")


class StartTests(unittest.TestCase):
    def test_start_returns_chosen_record(self) -> None:
        host, frames = make_host(["CTRL_O", "ENTER"])

        record = app.start(StaticHistorySource(JUMPS, 2), -1, SETTINGS, host=host)

        self.assertEqual(record.path, "/w/a.py")
        self.assertEqual(record.offset, -2)
        self.assertTrue(frames)
        self.assertFalse(app.is_active())
        self.assertIsNone(app.current_state())

    def test_start_returns_none_on_cancel(self) -> None:
        host, _frames = make_host(["ESC"])

        self.assertIsNone(app.start(StaticHistorySource(JUMPS, 2), -1, SETTINGS, host=host))

    def test_empty_history_returns_none_without_rendering(self) -> None:
        messages: list[str] = []
        host, frames = make_host([], notify=messages.append)

        self.assertIsNone(app.start(StaticHistorySource([], 0), -1, SETTINGS, host=host))
        self.assertEqual(frames, [])
        self.assertEqual(messages, ["No jumps available"])

    def test_non_integer_offset_is_a_config_error(self) -> None:
        host, _frames = make_host([])

        with self.assertRaises(ConfigError) as ctx:
            app.start(StaticHistorySource(JUMPS, 2), "3", SETTINGS, host=host)
        self.assertIn("str", str(ctx.exception))

    def test_state_is_observable_while_running(self) -> None:
        observed: list = []

        def render(snapshot) -> None:
            if not observed:
                observed.append((app.is_active(), app.current_state()))
                with self.assertRaises(RuntimeError):
                    app.start(StaticHistorySource(JUMPS, 2), -1, SETTINGS, host=host)

        host, _frames = make_host(["ESC"], render=render)
        app.start(StaticHistorySource(JUMPS, 2), -1, SETTINGS, host=host)

        active, snapshot = observed[0]
        self.assertTrue(active)
        self.assertEqual(snapshot.selected.path, "/w/b.py")
        self.assertEqual(snapshot.pending_count, "")

    def test_refresh_redraws_active_session(self) -> None:
        refreshed: list[bool] = []
        frames: list = []

        def render(snapshot) -> None:
            frames.append(snapshot)
            if len(frames) == 1:
                refreshed.append(app.refresh())

        host, _frames = make_host(["ESC"], render=render, list_height=lambda: 2)
        app.start(StaticHistorySource(JUMPS, 2), -1, SETTINGS, host=host)

        self.assertEqual(refreshed, [True])
        self.assertEqual(len(frames), 2)
        self.assertFalse(app.refresh())

    def test_liveness_failure_ends_session(self) -> None:
        host, _frames = make_host([1000, 1000, "ENTER"], liveness_check=lambda: False)

        self.assertIsNone(app.start(StaticHistorySource(JUMPS, 2), -1, SETTINGS, host=host))
        self.assertFalse(app.is_active())

    def test_on_choose_receives_open_mode(self) -> None:
        chosen: list = []
        host, _frames = make_host(["CTRL_V"], on_choose=lambda record, mode: chosen.append((record.path, mode)))

        app.start(StaticHistorySource(JUMPS, 2), -1, SETTINGS, host=host)

        self.assertEqual(chosen, [("/w/b.py", "vsplit")])

    def test_cwd_only_option_sets_initial_filter(self) -> None:
        jumps = JUMPS + [RawJump("/elsewhere/z.py", 9, 1)]
        frames: list = []
        host, _frames = make_host(["ESC"], frames=frames)

        app.start(StaticHistorySource(jumps, 2), -1, validate_settings(cwd_only=True), host=host)

        self.assertTrue(frames[0].filters.cwd_only)
        self.assertEqual(len(frames[0].items), 3)


if __name__ == "__main__":
    unittest.main()
