"""
Size-bounded game log stored as a single JSON array file.

Working copy lifecycle: load() -> append() -> trim() -> persist().
Only the scheduler's single invocation drives that cycle; concurrent
writers to the same path are not supported.
"""

import logging
import os
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..core.canonical import entry_json_bytes, store_json_bytes, to_plain
from ..core.errors import PersistError, StoreReadError
from .atomic import atomic_write_text, read_json_array

logger = logging.getLogger(__name__)

DEFAULT_MAX_BYTES = 1024 * 1024
DEFAULT_MAX_WRITE_RETRIES = 3
DEFAULT_RETRY_BASE_DELAY = 0.1

# "[]" for an empty array
_EMPTY_ARRAY_BYTES = 2
# two-space indent plus the ",\n" / "[\n" ... "\n]" framing per element
_PER_ENTRY_OVERHEAD = 4


class GameLogStore:
    """
    Bounded append-only game log.

    Storage format: UTF-8 JSON array, indent=2, trailing newline,
    rewritten wholesale on every persist.

    Guarantees:
    - Entries only appended at the tail, evicted from the head
    - After trim(): serialized size <= max_bytes, or one oversized entry left
    - persist() never exposes a partially written file
    """

    def __init__(
        self,
        path: str,
        max_bytes: int = DEFAULT_MAX_BYTES,
        max_write_retries: int = DEFAULT_MAX_WRITE_RETRIES,
        retry_base_delay: float = DEFAULT_RETRY_BASE_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize game log store.

        Args:
            path: Path to the JSON array file
            max_bytes: Byte budget for the serialized store
            max_write_retries: Total persist attempts before giving up
            retry_base_delay: Seconds; attempt N waits N * retry_base_delay
            sleep: Sleep function (tests pass a recorder)
        """
        self.path = path
        self.max_bytes = max_bytes
        self.max_write_retries = max(1, max_write_retries)
        self.retry_base_delay = retry_base_delay
        self._sleep = sleep
        self._entries: List[Dict[str, Any]] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> Tuple[Dict[str, Any], ...]:
        """Working copy in wire form (oldest first)."""
        return tuple(self._entries)

    def load(self) -> List[Dict[str, Any]]:
        """
        Load the persisted sequence into the working copy.

        Missing file -> empty. Unparseable or non-array content -> warning
        and empty (the bad file is overwritten by the next persist).

        Returns:
            Loaded entries (oldest first)
        """
        if not os.path.exists(self.path):
            self._entries = []
            return []
        try:
            data = read_json_array(self.path)
        except StoreReadError as ex:
            logger.warning("Failed to load game log (%s). Starting fresh.", ex)
            self._entries = []
            return []

        entries = [e for e in data if isinstance(e, dict)]
        if len(entries) != len(data):
            logger.warning(
                "Discarded %d non-object entries from %s", len(data) - len(entries), self.path
            )
        self._entries = entries
        return list(entries)

    def append(self, record: Any) -> None:
        """Add a record (GameRecord or wire dict) at the tail."""
        self._entries.append(to_plain(record))

    def serialized_size(self) -> int:
        """UTF-8 byte size of the working copy as persisted (sans trailing newline)."""
        return len(store_json_bytes(self._entries))

    def trim(self) -> int:
        """
        Evict oldest entries until the store fits max_bytes.

        A single entry that alone exceeds the budget is kept.

        Returns:
            Number of evicted entries
        """
        sizes = [len(entry_json_bytes(e)) + _PER_ENTRY_OVERHEAD for e in self._entries]
        total = _EMPTY_ARRAY_BYTES + sum(sizes)
        evicted = 0
        while total > self.max_bytes and len(self._entries) > 1:
            self._entries.pop(0)
            total -= sizes[evicted]
            evicted += 1
        if evicted:
            logger.info("Evicted %d oldest entries to fit %d bytes", evicted, self.max_bytes)
        if total > self.max_bytes and self._entries:
            logger.warning(
                "Single entry of %d bytes exceeds budget of %d bytes; keeping it",
                total,
                self.max_bytes,
            )
        return evicted

    def persist(self) -> None:
        """
        Atomically replace the store file with the working copy.

        Retries failed writes with linear backoff (attempt * base delay).

        Raises:
            PersistError: After max_write_retries failed attempts
        """
        text = store_json_bytes(self._entries).decode("utf-8") + "\n"
        last_error: Optional[OSError] = None
        for attempt in range(1, self.max_write_retries + 1):
            try:
                atomic_write_text(self.path, text)
                return
            except OSError as ex:
                last_error = ex
                logger.warning("Attempt %d failed to write game log: %s", attempt, ex)
                if attempt < self.max_write_retries:
                    self._sleep(attempt * self.retry_base_delay)
        logger.error("Exceeded maximum write retries; giving up for this run.")
        raise PersistError(
            f"failed to persist {self.path} after {self.max_write_retries} attempts: {last_error}"
        ) from last_error
