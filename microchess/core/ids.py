"""
Identifier generation.

Seeds come from a cryptographically strong source; temporary file names
must not collide across concurrent invocations.
"""

import itertools
import os
import secrets
import time

SEED_BYTES = 8

_temp_counter = itertools.count()


def new_seed() -> str:
    """
    Draw a fresh seed string (16 hex characters).

    Example:
        new_seed() -> "9f86d081884c7d65"
    """
    return secrets.token_hex(SEED_BYTES)


def temp_path_for(path: str) -> str:
    """
    Unique sibling temp path for an atomic replace of path.

    Combines wall-clock milliseconds, process id and a per-process counter.
    """
    stamp = int(time.time() * 1000)
    return f"{path}.{stamp}.{os.getpid()}.{next(_temp_counter)}.tmp"
