"""Key notation helpers.

Translates Vim-style key notation used in mappings (``<C-o>``, ``<CR>``)
into the normalized key tokens produced by ``read_key``.
"""

from __future__ import annotations

_NAMED_KEYS: dict[str, str] = {
    "cr": "ENTER",
    "enter": "ENTER",
    "return": "ENTER",
    "esc": "ESC",
    "tab": "TAB",
    "bs": "BACKSPACE",
    "backspace": "BACKSPACE",
    "space": " ",
    "up": "UP",
    "down": "DOWN",
    "left": "LEFT",
    "right": "RIGHT",
    "lt": "<",
}

# Control chords that terminals send as dedicated bytes.
_CTRL_ALIASES: dict[str, str] = {
    "i": "TAB",
    "m": "ENTER",
    "[": "ESC",
    "h": "BACKSPACE",
}


class KeyNotationError(ValueError):
    pass


def ctrl_token(letter: str) -> str:
    """Return the token for ``<C-letter>``."""
    letter = letter.lower()
    alias = _CTRL_ALIASES.get(letter)
    if alias is not None:
        return alias
    return f"CTRL_{letter.upper()}"


def normalize_key_notation(notation: str) -> str:
    """Convert one key notation to a key token.

    Raises ``KeyNotationError`` for multi-key sequences or unknown names.
    """
    if len(notation) == 1:
        return notation
    if not (notation.startswith("<") and notation.endswith(">") and len(notation) > 2):
        raise KeyNotationError(f"unsupported key notation {notation!r} (one key per mapping)")

    inner = notation[1:-1]
    lowered = inner.lower()
    if lowered in _NAMED_KEYS:
        return _NAMED_KEYS[lowered]
    if lowered.startswith("c-") and len(inner) == 3:
        letter = inner[2]
        if letter.isalpha() or letter == "[":
            return ctrl_token(letter)
    raise KeyNotationError(f"unsupported key notation {notation!r}")

