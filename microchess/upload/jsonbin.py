"""
Periodic upload of the game log to a JSON bin endpoint.

Each attempt reads the store, removes duplicate final positions and POSTs
the result as one body. There is no retry inside an attempt; the next
scheduled tick is the retry.
"""

import json
import logging
import urllib.error
import urllib.request
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..config import Settings
from ..core.errors import UploadError
from ..log.atomic import atomic_write_json, read_json_array

logger = logging.getLogger(__name__)

DEDUPE_KEY = "final_fen"


def dedupe_by_final_position(entries: Sequence[Any], key: str = DEDUPE_KEY) -> List[Any]:
    """
    Keep the first entry for each final position, preserving order.

    Entries without the key are always kept.
    """
    seen = set()
    deduped = []
    for entry in entries:
        value = entry.get(key) if isinstance(entry, dict) else None
        if not value:
            deduped.append(entry)
            continue
        if value in seen:
            continue
        seen.add(value)
        deduped.append(entry)
    return deduped


class UploadJob:
    """
    Callable invoked by the upload scheduler.

    Raises (per invocation):
        StoreReadError: Store missing or unreadable (attempt skipped)
        UploadError: Endpoint error, network error or unexpected response
    """

    def __init__(
        self,
        settings: Settings,
        urlopen: Callable[..., Any] = urllib.request.urlopen,
    ) -> None:
        self.settings = settings
        self.access_key = settings.require_access_key()
        self._urlopen = urlopen

    def build_request(self, entries: List[Any]) -> urllib.request.Request:
        body = json.dumps(entries, ensure_ascii=False).encode("utf-8")
        headers = {
            "Content-Type": "application/json",
            "X-Access-Key": self.access_key,
            "X-Bin-Private": "true",
        }
        return urllib.request.Request(self.settings.upload_url, data=body, headers=headers, method="POST")

    def __call__(self) -> Optional[Dict[str, Any]]:
        entries = read_json_array(self.settings.upload_source_path)
        deduped = dedupe_by_final_position(entries)

        req = self.build_request(deduped)
        try:
            with self._urlopen(req, timeout=self.settings.upload_timeout) as response:
                raw = response.read().decode("utf-8")
        except urllib.error.HTTPError as ex:
            detail = ex.read().decode("utf-8", "ignore") if ex.fp else ""
            raise UploadError(f"upload rejected with status {ex.code}: {detail}") from ex
        except OSError as ex:
            raise UploadError(f"upload request failed: {ex}") from ex

        try:
            payload = json.loads(raw)
        except ValueError as ex:
            raise UploadError(f"upload returned invalid JSON: {raw[:200]}") from ex
        if not isinstance(payload, dict) or "record" not in payload:
            raise UploadError(f"Upload failed: {payload}")

        atomic_write_json(self.settings.metadata_path, payload)
        logger.info(
            "Upload successful (%d entries, %d duplicates removed). Metadata saved to %s.",
            len(deduped),
            len(entries) - len(deduped),
            self.settings.metadata_path,
        )
        return payload
