"""
Replay system for seed-based game reproduction.

Replay re-drives the generator from a stored seed with a fresh stream.
Must be deterministic: same seed, cap, algorithm and rules -> same game.
"""

from .runner import ReplayComparison, compare, run_to_dict, simulate, verify_entry
from .selection import DEFAULT_LIST_LIMIT, recent_entries, resolve_store_path, select_entry

__all__ = [
    "ReplayComparison",
    "compare",
    "run_to_dict",
    "simulate",
    "verify_entry",
    "DEFAULT_LIST_LIMIT",
    "recent_entries",
    "resolve_store_path",
    "select_entry",
]
