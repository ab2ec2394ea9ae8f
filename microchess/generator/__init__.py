"""
Game generation.

generate_game() plays one random game against a rules provider and returns
a GameRun; GameRun.to_record() turns it into a storable GameRecord.
"""

from .game import DEFAULT_MAX_PLIES, GameRun, generate_game, pick_index, play
from .pgn import build_headers, build_pgn, classify_result, format_movetext, join_movetext, split_headers

__all__ = [
    "DEFAULT_MAX_PLIES",
    "GameRun",
    "generate_game",
    "pick_index",
    "play",
    "build_headers",
    "build_pgn",
    "classify_result",
    "format_movetext",
    "join_movetext",
    "split_headers",
]
