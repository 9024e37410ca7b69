"""Input-layer public API for key decoding and count accumulation.

Exports are split between low-level terminal decoding (`read_key`), key
notation used by mappings, and the repeat-count state machine.
"""

from .counting import CountAccumulator, KeyDecision, KeyOutcome
from .keys import KeyNotationError, ctrl_token, normalize_key_notation
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "CountAccumulator",
    "KeyDecision",
    "KeyOutcome",
    "KeyNotationError",
    "ctrl_token",
    "normalize_key_notation",
]
