from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from jumppack import config
from jumppack.config import ConfigError, validate_settings


class ValidateSettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = validate_settings()

        self.assertFalse(settings.options.wrap_edges)
        self.assertFalse(settings.options.cwd_only)
        self.assertEqual(settings.options.default_view, "preview")
        self.assertEqual(settings.options.count_timeout_ms, 1000)
        self.assertEqual(settings.mappings["jump_back"], "<C-o>")

    def test_default_key_bindings_use_reader_tokens(self) -> None:
        bindings = validate_settings().key_bindings()

        self.assertEqual(bindings["CTRL_O"], "jump_back")
        self.assertEqual(bindings["TAB"], "jump_forward")
        self.assertEqual(bindings["ENTER"], "choose")
        self.assertEqual(bindings["ESC"], "stop")
        self.assertEqual(bindings["g"], "jump_to_top")
        self.assertEqual(bindings["G"], "jump_to_bottom")
        self.assertEqual(bindings["x"], "toggle_hidden")

    def test_user_values_override_defaults(self) -> None:
        settings = validate_settings(
            {"options": {"wrap_edges": True, "default_view": "list"}, "mappings": {"jump_back": "<C-b>"}}
        )

        self.assertTrue(settings.options.wrap_edges)
        self.assertEqual(settings.options.default_view, "list")
        self.assertEqual(settings.key_bindings()["CTRL_B"], "jump_back")
        self.assertNotIn("CTRL_O", settings.key_bindings())

    def test_empty_mapping_disables_action(self) -> None:
        settings = validate_settings({"mappings": {"toggle_hidden": ""}})

        self.assertNotIn("toggle_hidden", settings.key_bindings().values())

    def test_cli_overrides_win_and_none_is_ignored(self) -> None:
        settings = validate_settings({"options": {"count_timeout_ms": 500}}, count_timeout_ms=None, wrap_edges=True)

        self.assertEqual(settings.options.count_timeout_ms, 500)
        self.assertTrue(settings.options.wrap_edges)

    def test_non_string_mapping_names_field_and_type(self) -> None:
        with self.assertRaises(ConfigError) as ctx:
            validate_settings({"mappings": {"jump_back": 5}})

        self.assertIn("mappings.jump_back", str(ctx.exception))
        self.assertIn("int", str(ctx.exception))

    def test_invalid_view_mode_is_rejected(self) -> None:
        with self.assertRaises(ConfigError) as ctx:
            validate_settings({"options": {"default_view": "grid"}})

        self.assertIn("default_view", str(ctx.exception))

    def test_non_bool_option_is_rejected(self) -> None:
        with self.assertRaises(ConfigError) as ctx:
            validate_settings({"options": {"wrap_edges": "yes"}})

        self.assertIn("options.wrap_edges", str(ctx.exception))
        self.assertIn("str", str(ctx.exception))

    def test_bool_is_not_accepted_as_timeout(self) -> None:
        with self.assertRaises(ConfigError):
            validate_settings({"options": {"count_timeout_ms": True}})

    def test_non_positive_timeout_is_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            validate_settings({"options": {"count_timeout_ms": 0}})

    def test_unknown_option_and_action_are_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            validate_settings({"options": {"colour": "red"}})
        with self.assertRaises(ConfigError):
            validate_settings({"mappings": {"teleport": "t"}})

    def test_multi_key_mapping_is_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            validate_settings({"mappings": {"jump_to_top": "gg"}})

    def test_duplicate_keys_are_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            validate_settings({"mappings": {"jump_to_top": "G"}})


class ConfigFileTests(unittest.TestCase):
    def test_missing_or_malformed_file_loads_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("jumppack.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                config_path.write_text("{not json", encoding="utf-8")
                self.assertEqual(config.load_config(), {})
                config_path.write_text("[1, 2]", encoding="utf-8")
                self.assertEqual(config.load_config(), {})

    def test_load_settings_reads_file_and_applies_overrides(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text(json.dumps({"options": {"wrap_edges": True}}), encoding="utf-8")
            with mock.patch("jumppack.config.CONFIG_PATH", config_path):
                settings = config.load_settings(default_view="list")

        self.assertTrue(settings.options.wrap_edges)
        self.assertEqual(settings.options.default_view, "list")

    def test_legacy_path_is_used_when_default_missing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            default_path = Path(tmp) / "new" / "config.json"
            legacy_path = Path(tmp) / "jumppack.json"
            legacy_path.write_text(json.dumps({"hidden_items": ["/a.py:1:1"]}), encoding="utf-8")
            with mock.patch("jumppack.config.CONFIG_PATH", default_path), mock.patch(
                "jumppack.config.DEFAULT_CONFIG_PATH", default_path
            ), mock.patch("jumppack.config.LEGACY_CONFIG_PATH", legacy_path):
                self.assertEqual(config.load_hidden_items(), {"/a.py:1:1"})

    def test_hidden_items_ignore_non_string_entries(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text(json.dumps({"hidden_items": ["/a.py:1:1", 3, None, ""]}), encoding="utf-8")
            with mock.patch("jumppack.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_hidden_items(), {"/a.py:1:1"})


if __name__ == "__main__":
    unittest.main()
