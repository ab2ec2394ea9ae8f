"""
Replay target selection.

Paths are resolved and checked against the permitted base directory
before any file access happens.
"""

from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple, Union

from ..core.errors import EntryLookupError, PathSecurityError

DEFAULT_LIST_LIMIT = 5


def resolve_store_path(candidate: Union[str, Path], base_dir: Union[str, Path]) -> Path:
    """
    Resolve candidate and require it to lie strictly inside base_dir.

    Relative candidates are taken relative to the current directory.
    Symlinks are followed on both sides.

    Raises:
        PathSecurityError: If the resolved path escapes base_dir
    """
    base = Path(base_dir).resolve()
    resolved = Path(candidate).resolve()
    try:
        relative = resolved.relative_to(base)
    except ValueError:
        raise PathSecurityError(
            f"Access to paths outside the allowed directory is forbidden: {candidate}"
        ) from None
    if relative == Path("."):
        raise PathSecurityError(f"Not a file inside the allowed directory: {candidate}")
    return resolved


def select_entry(entries: Sequence[Dict[str, Any]], index: int) -> Dict[str, Any]:
    """
    Pick an entry by most-recent-relative index (0 = most recent).

    Raises:
        EntryLookupError: If index is negative or out of range
    """
    if index < 0 or index >= len(entries):
        raise EntryLookupError(f"No entry at index {index} (file has {len(entries)} entries).")
    entry = entries[len(entries) - 1 - index]
    if not isinstance(entry, dict):
        raise EntryLookupError(f"Entry at index {index} is not an object.")
    return entry


def recent_entries(
    entries: Sequence[Any], limit: int = DEFAULT_LIST_LIMIT
) -> List[Tuple[int, Any]]:
    """Most recent entries first, paired with their relative index."""
    newest_first = list(reversed(entries))[:limit]
    return list(enumerate(newest_first))
