"""
Game log storage.

This module provides:
- GameLogStore: Size-bounded JSON array store (load/append/trim/persist)
- atomic_write_json / atomic_write_text: temp-file + rename writers
- read_json_array: strict reader for consumers of the store
"""

from .file_store import (
    DEFAULT_MAX_BYTES,
    DEFAULT_MAX_WRITE_RETRIES,
    DEFAULT_RETRY_BASE_DELAY,
    GameLogStore,
)
from .atomic import atomic_write_json, atomic_write_text, read_json_array

__all__ = [
    "DEFAULT_MAX_BYTES",
    "DEFAULT_MAX_WRITE_RETRIES",
    "DEFAULT_RETRY_BASE_DELAY",
    "GameLogStore",
    "atomic_write_json",
    "atomic_write_text",
    "read_json_array",
]
