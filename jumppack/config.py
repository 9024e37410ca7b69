"""Persistent JSON config helpers and settings validation.

Stores user options, key mappings, and hidden jump locations.
File access is defensive: malformed or missing config falls back safely.
Validation of the settings themselves is strict and raises ``ConfigError``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

from .input.keys import KeyNotationError, normalize_key_notation

APP_NAME = "jumppack"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LEGACY_CONFIG_PATH = Path.home() / ".config" / "jumppack.json"
CONFIG_PATH = DEFAULT_CONFIG_PATH

VIEW_MODES = ("list", "preview")
LOG_LEVELS = ("off", "error", "warn", "info", "debug", "trace")

DEFAULT_MAPPINGS: dict[str, str] = {
    # Navigation
    "jump_back": "<C-o>",
    "jump_forward": "<C-i>",
    "jump_to_top": "g",
    "jump_to_bottom": "G",
    # Selection
    "choose": "<CR>",
    "choose_in_split": "<C-s>",
    "choose_in_tabpage": "<C-t>",
    "choose_in_vsplit": "<C-v>",
    # Control
    "stop": "<Esc>",
    "toggle_preview": "p",
    # Filtering (reset when the session closes)
    "toggle_file_filter": "f",
    "toggle_cwd_filter": "c",
    "toggle_show_hidden": ".",
    "reset_filters": "r",
    # Hide management
    "toggle_hidden": "x",
}


class ConfigError(ValueError):
    """Invalid user configuration; always aborts setup."""


@dataclass(frozen=True)
class Options:
    cwd_only: bool = False
    wrap_edges: bool = False
    default_view: str = "preview"
    count_timeout_ms: int = 1000
    log_level: str = "off"
    style: str = "monokai"


@dataclass(frozen=True)
class Settings:
    """Resolved, flat configuration handed to a session at construction."""

    options: Options = field(default_factory=Options)
    mappings: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_MAPPINGS))

    def key_bindings(self) -> dict[str, str]:
        """Return ``key token -> action name`` for every non-empty mapping."""
        bindings: dict[str, str] = {}
        for name, notation in self.mappings.items():
            if not notation:
                continue
            bindings[normalize_key_notation(notation)] = name
        return bindings


def _type_name(value: object) -> str:
    return "None" if value is None else type(value).__name__


def check_type(name: str, value: object, expected: type | tuple[type, ...], allow_none: bool = False) -> None:
    """Raise ``ConfigError`` naming ``name`` when ``value`` has the wrong type."""
    if value is None and allow_none:
        return
    expected_types = expected if isinstance(expected, tuple) else (expected,)
    # bool is an int subclass; only accept it where bool is asked for.
    if isinstance(value, bool) and bool not in expected_types:
        ok = False
    else:
        ok = isinstance(value, expected_types)
    if not ok:
        wanted = " or ".join(t.__name__ for t in expected_types)
        raise ConfigError(f"{name} must be {wanted}, got {_type_name(value)}")


def validate_settings(raw: Mapping[str, object] | None = None, **overrides: object) -> Settings:
    """Merge ``raw`` over defaults, validate, and return ``Settings``.

    ``overrides`` are option values (e.g. from CLI flags) applied last;
    ``None`` overrides are ignored.
    """
    check_type("config", raw, Mapping, allow_none=True)
    raw = raw or {}

    raw_options = raw.get("options", {})
    check_type("options", raw_options, Mapping, allow_none=True)
    options_data: dict[str, object] = {
        "cwd_only": Options.cwd_only,
        "wrap_edges": Options.wrap_edges,
        "default_view": Options.default_view,
        "count_timeout_ms": Options.count_timeout_ms,
        "log_level": Options.log_level,
        "style": Options.style,
    }
    options_data.update(raw_options or {})
    options_data.update({key: value for key, value in overrides.items() if value is not None})

    unknown_options = sorted(set(options_data) - set(Options.__dataclass_fields__))
    if unknown_options:
        raise ConfigError(f"options.{unknown_options[0]} is not a known option")

    check_type("options.cwd_only", options_data["cwd_only"], bool)
    check_type("options.wrap_edges", options_data["wrap_edges"], bool)
    check_type("options.default_view", options_data["default_view"], str)
    if options_data["default_view"] not in VIEW_MODES:
        raise ConfigError(
            f'options.default_view must be "list" or "preview", got "{options_data["default_view"]}"'
        )
    check_type("options.count_timeout_ms", options_data["count_timeout_ms"], (int, float))
    if options_data["count_timeout_ms"] <= 0:
        raise ConfigError(f"options.count_timeout_ms must be positive, got {options_data['count_timeout_ms']}")
    check_type("options.log_level", options_data["log_level"], str)
    if options_data["log_level"] not in LOG_LEVELS:
        raise ConfigError(
            f"options.log_level must be one of: {', '.join(LOG_LEVELS)}, got \"{options_data['log_level']}\""
        )
    check_type("options.style", options_data["style"], str)

    raw_mappings = raw.get("mappings", {})
    check_type("mappings", raw_mappings, Mapping, allow_none=True)
    mappings = dict(DEFAULT_MAPPINGS)
    for name, notation in (raw_mappings or {}).items():
        check_type("mapping keys", name, str)
        if name not in DEFAULT_MAPPINGS:
            raise ConfigError(f"mappings.{name} is not a known action")
        check_type(f"mappings.{name}", notation, str)
        mappings[name] = notation

    seen: dict[str, str] = {}
    for name, notation in mappings.items():
        if not notation:
            continue
        try:
            token = normalize_key_notation(notation)
        except KeyNotationError as exc:
            raise ConfigError(f"mappings.{name}: {exc}") from exc
        if token in seen:
            raise ConfigError(f"mappings.{name} uses {notation!r}, already bound to {seen[token]}")
        seen[token] = name

    options = Options(
        cwd_only=options_data["cwd_only"],
        wrap_edges=options_data["wrap_edges"],
        default_view=options_data["default_view"],
        count_timeout_ms=int(options_data["count_timeout_ms"]),
        log_level=options_data["log_level"],
        style=options_data["style"],
    )
    return Settings(options=options, mappings=mappings)


def _load_config_path() -> Path:
    """Return preferred config path, falling back to legacy location when needed."""
    if CONFIG_PATH.exists():
        return CONFIG_PATH
    if CONFIG_PATH == DEFAULT_CONFIG_PATH and LEGACY_CONFIG_PATH.exists():
        return LEGACY_CONFIG_PATH
    return CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = _load_config_path()
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def load_settings(**overrides: object) -> Settings:
    """Validate the persisted config (plus ``overrides``) into ``Settings``."""
    return validate_settings(load_config(), **overrides)


def load_hidden_items() -> set[str]:
    """Return persisted hide keys; non-string entries are dropped."""
    value = load_config().get("hidden_items")
    if not isinstance(value, list):
        return set()
    return {key for key in value if isinstance(key, str) and key}


def save_hidden_items(keys: set[str]) -> None:
    """Persist hide keys as a sorted list, keeping all other config keys."""
    config = load_config()
    config["hidden_items"] = sorted(key for key in keys if isinstance(key, str) and key)
    save_config(config)
