"""
Transcript formatting.

Move numbering: every even 0-based ply index opens a new "N. " pair.
"""

from datetime import datetime
from typing import Sequence, Tuple

from ..core.clock import pgn_date
from ..core.records import (
    RESULT_BLACK_WINS,
    RESULT_DRAW,
    RESULT_UNFINISHED,
    RESULT_WHITE_WINS,
)
from ..rules.provider import WHITE, Termination

EVENT_NAME = "Random Game"
SITE_NAME = "microchess"

_DRAW_REASONS = {
    Termination.STALEMATE: "Draw by stalemate",
    Termination.REPETITION: "Draw by threefold repetition",
    Termination.INSUFFICIENT_MATERIAL: "Draw by insufficient material",
    Termination.DRAW: "Draw",
}


def format_movetext(moves: Sequence[str]) -> str:
    """
    Numbered move list.

    Example:
        format_movetext(["e4", "e5", "Nf3"]) -> "1. e4 e5 2. Nf3"
    """
    parts = []
    for i, move in enumerate(moves):
        if i % 2 == 0:
            parts.append(f"{i // 2 + 1}.")
        parts.append(move)
    return " ".join(parts)


def classify_result(termination: Termination, side_to_move: str) -> Tuple[str, str]:
    """
    Map a terminal classification to (result code, reason).

    Checkmate: the side NOT to move delivered mate.
    """
    if termination is Termination.CHECKMATE:
        result = RESULT_BLACK_WINS if side_to_move == WHITE else RESULT_WHITE_WINS
        return result, "Checkmate"
    if termination in _DRAW_REASONS:
        return RESULT_DRAW, _DRAW_REASONS[termination]
    return RESULT_UNFINISHED, ""


def build_headers(result: str, ply_count: int, played_on: datetime) -> str:
    return "\n".join(
        [
            f'[Event "{EVENT_NAME}"]',
            f'[Site "{SITE_NAME}"]',
            f'[Date "{pgn_date(played_on)}"]',
            f'[Result "{result}"]',
            f'[PlyCount "{ply_count}"]',
        ]
    )


def build_pgn(moves: Sequence[str], result: str, played_on: datetime) -> str:
    """Headers, blank line, movetext, result."""
    headers = build_headers(result, len(moves), played_on)
    return f"{headers}\n\n{join_movetext(format_movetext(moves), result)}"


def join_movetext(movetext: str, result: str) -> str:
    return f"{movetext} {result}"


def split_headers(pgn: str) -> str:
    """Header block of a stored transcript (everything before the first blank line)."""
    return pgn.split("\n\n", 1)[0]
