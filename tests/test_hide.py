"""Hide store tests.

Hide state lives behind a persistence port; these tests use the in-memory
port and the JSON config port with a patched config path.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from jumppack.hide import ConfigHidePersistence, HideStore, MemoryHidePersistence
from jumppack.records import RawJump, build_records


def sample_records():
    return build_records(
        [RawJump("/p/a.py", 1, 1), RawJump("/p/b.py", 2, 3), RawJump("/p/c.py", 4, 5)],
        1,
    )


class HideStoreTests(unittest.TestCase):
    def test_toggle_flips_state_and_persists_immediately(self) -> None:
        persistence = MemoryHidePersistence()
        store = HideStore(persistence)
        record = sample_records()[0]

        self.assertTrue(store.toggle(record))
        self.assertEqual(persistence.keys, {record.hide_key})
        self.assertEqual(persistence.save_count, 1)
        self.assertTrue(store.get(record.hide_key))

        self.assertFalse(store.toggle(record))
        self.assertEqual(persistence.keys, set())
        self.assertEqual(persistence.save_count, 2)

    def test_mark_items_sets_hidden_without_reordering(self) -> None:
        records = sample_records()
        store = HideStore(MemoryHidePersistence({"/p/b.py:2:3"}))
        before = [record.path for record in records]

        result = store.mark_items(records)

        self.assertIs(result, records)
        self.assertEqual([record.path for record in records], before)
        self.assertEqual([record.hidden for record in records], [False, True, False])

    def test_mark_items_is_idempotent_and_clears_stale_flags(self) -> None:
        records = sample_records()
        for record in records:
            record.hidden = True
        store = HideStore(MemoryHidePersistence())

        store.mark_items(records)
        store.mark_items(records)

        self.assertEqual([record.hidden for record in records], [False, False, False])

    def test_is_hidden_uses_location_key(self) -> None:
        record = sample_records()[1]
        store = HideStore(MemoryHidePersistence({record.hide_key}))

        self.assertTrue(store.is_hidden(record))


class ConfigHidePersistenceTests(unittest.TestCase):
    def test_round_trips_through_config_file_and_keeps_other_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text(json.dumps({"options": {"wrap_edges": True}}), encoding="utf-8")
            with mock.patch("jumppack.config.CONFIG_PATH", config_path):
                persistence = ConfigHidePersistence()
                persistence.save_all({"/b.py:1:1", "/a.py:2:2"})

                self.assertEqual(persistence.load_all(), {"/a.py:2:2", "/b.py:1:1"})
                saved = json.loads(config_path.read_text(encoding="utf-8"))

        self.assertEqual(saved["hidden_items"], ["/a.py:2:2", "/b.py:1:1"])
        self.assertEqual(saved["options"], {"wrap_edges": True})


if __name__ == "__main__":
    unittest.main()
