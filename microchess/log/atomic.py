"""
Atomic JSON file helpers.

Writers go through a unique sibling temp file and os.replace(), so readers
observe either the old complete file or the new complete file.
"""

import json
import logging
import os
from typing import Any, List

from ..core.canonical import INDENT, to_plain
from ..core.errors import StoreReadError
from ..core.ids import temp_path_for

logger = logging.getLogger(__name__)


def atomic_write_text(path: str, text: str) -> None:
    """
    Replace path with text (UTF-8) atomically.

    Raises:
        OSError: If writing, syncing or renaming fails (temp file is removed)
    """
    directory = os.path.dirname(path) or "."
    os.makedirs(directory, exist_ok=True)
    tmp_path = temp_path_for(path)
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError:
        try:
            os.remove(tmp_path)
        except FileNotFoundError:
            pass
        except OSError as cleanup_err:
            logger.debug("Could not remove temp file %s: %s", tmp_path, cleanup_err)
        raise


def atomic_write_json(path: str, data: Any) -> None:
    """Indented JSON with a trailing newline, written atomically."""
    text = json.dumps(to_plain(data), indent=INDENT, ensure_ascii=False) + "\n"
    atomic_write_text(path, text)


def read_json_array(path: str) -> List[Any]:
    """
    Read a JSON array file.

    Raises:
        StoreReadError: If the file is missing, unparseable or not an array
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as ex:
        raise StoreReadError(f"File not found: {path}") from ex
    except (OSError, ValueError) as ex:
        raise StoreReadError(f"Failed to read/parse {path}: {ex}") from ex
    if not isinstance(data, list):
        raise StoreReadError(f"{path} does not contain a top-level array")
    return data
