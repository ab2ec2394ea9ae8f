"""
Store serialization.

The persisted store is a human readable JSON array (indent=2, UTF-8).
All size accounting must go through these functions so that the byte
budget matches what actually lands on disk.
"""

import json
from typing import Any, Iterable, List

INDENT = 2


def to_plain(obj: Any) -> Any:
    """
    Convert records and nested containers to plain JSON values.

    Rules:
    - objects exposing to_dict() are converted through it
    - tuples converted to lists
    - dict key order is preserved (persisted field order)
    """
    if hasattr(obj, "to_dict"):
        return to_plain(obj.to_dict())
    if isinstance(obj, dict):
        return {k: to_plain(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_plain(x) for x in obj]
    return obj


def store_json_str(entries: Iterable[Any]) -> str:
    """
    Serialize a sequence of entries exactly as the store file holds it.

    The trailing newline written to disk is not included.
    """
    plain: List[Any] = [to_plain(e) for e in entries]
    return json.dumps(plain, indent=INDENT, ensure_ascii=False)


def store_json_bytes(entries: Iterable[Any]) -> bytes:
    """UTF-8 bytes of store_json_str()."""
    return store_json_str(entries).encode("utf-8")


def entry_json_bytes(entry: Any) -> bytes:
    """
    UTF-8 bytes one entry occupies inside the store array.

    Entries sit one indent level deep, so every nested line gains
    INDENT spaces relative to a standalone dump.
    """
    text = json.dumps(to_plain(entry), indent=INDENT, ensure_ascii=False)
    nested = text.replace("\n", "\n" + " " * INDENT)
    return nested.encode("utf-8")
