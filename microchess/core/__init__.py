"""
Core primitives shared by every microchess component.

This module provides:
- GameRecord: Immutable stored game
- Canonical: Store serialization and byte accounting
- Clock: Wall and fixed time sources
- IDs: Seed and temp-name generation
- Errors: Exception taxonomy
"""

from .records import (
    GameRecord,
    PROCESS_TAG,
    STATUS_GENERATED,
    RESULT_WHITE_WINS,
    RESULT_BLACK_WINS,
    RESULT_DRAW,
    RESULT_UNFINISHED,
)
from .canonical import to_plain, store_json_str, store_json_bytes, entry_json_bytes
from .clock import SystemClock, FixedClock, utc_now, iso_timestamp, pgn_date
from .ids import new_seed, temp_path_for
from .errors import (
    MicrochessError,
    ConfigError,
    StoreReadError,
    PersistError,
    PathSecurityError,
    EntryLookupError,
    UploadError,
)

__all__ = [
    "GameRecord",
    "PROCESS_TAG",
    "STATUS_GENERATED",
    "RESULT_WHITE_WINS",
    "RESULT_BLACK_WINS",
    "RESULT_DRAW",
    "RESULT_UNFINISHED",
    "to_plain",
    "store_json_str",
    "store_json_bytes",
    "entry_json_bytes",
    "SystemClock",
    "FixedClock",
    "utc_now",
    "iso_timestamp",
    "pgn_date",
    "new_seed",
    "temp_path_for",
    "MicrochessError",
    "ConfigError",
    "StoreReadError",
    "PersistError",
    "PathSecurityError",
    "EntryLookupError",
    "UploadError",
]
