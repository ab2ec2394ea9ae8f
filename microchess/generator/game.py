"""
Random game generation.

Drives a rules provider with a seeded float stream. Same seed, same ply cap,
same algorithm and same rules engine -> same moves and final position.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from ..core.clock import SystemClock, iso_timestamp
from ..core.ids import new_seed
from ..core.records import PROCESS_TAG, STATUS_GENERATED, GameRecord
from ..rng import create_stream
from ..rng.streams import FloatStream
from ..rules.provider import RulesProvider, Termination
from .pgn import build_pgn, classify_result, format_movetext

logger = logging.getLogger(__name__)

DEFAULT_MAX_PLIES = 100
MESSAGE_PREFIX = "Random Game Of Chess: "


@dataclass(frozen=True)
class GameRun:
    """
    Outcome of one generation loop.

    Fields:
        seed: Seed that drove the stream
        rng: Algorithm actually used
        rng_version: Algorithm version, when known
        moves: Played moves in order
        result: Result code
        reason: Human readable reason
        termination: Terminal classification of the final position
        final_position: Encoded final position
        started_at: Loop start time
        finished_at: Loop end time
    """
    seed: str
    rng: str
    rng_version: Optional[str]
    moves: Tuple[str, ...]
    result: str
    reason: str
    termination: Termination
    final_position: str
    started_at: datetime
    finished_at: datetime

    @property
    def ply_count(self) -> int:
        return len(self.moves)

    @property
    def movetext(self) -> str:
        return format_movetext(self.moves)

    @property
    def pgn(self) -> str:
        return build_pgn(self.moves, self.result, self.started_at)

    def to_record(self) -> GameRecord:
        return GameRecord(
            process=PROCESS_TAG,
            message=MESSAGE_PREFIX + self.movetext,
            status=STATUS_GENERATED,
            timestamp=iso_timestamp(self.finished_at),
            move_count=self.ply_count,
            result=self.result,
            reason=self.reason,
            final_fen=self.final_position,
            pgn=self.pgn,
            rng=self.rng,
            rng_version=self.rng_version,
            seed=self.seed,
        )


def pick_index(draw: float, count: int) -> int:
    """floor(draw * count), kept inside the list."""
    return min(int(draw * count), count - 1)


def play(rules: RulesProvider, stream: FloatStream, max_plies: int):
    """
    Run the move-selection loop.

    Exactly one draw per ply. Stops on a terminal position, on the ply cap,
    or when the provider offers no legal moves.

    Returns:
        (moves, final position object)
    """
    position = rules.new_position()
    moves = []
    while len(moves) < max_plies and not rules.is_terminal(position).is_terminal:
        legal = rules.legal_moves(position)
        if not legal:
            logger.debug("No legal moves at ply %d without a terminal classification", len(moves))
            break
        move = legal[pick_index(stream(), len(legal))]
        position = rules.apply(position, move)
        moves.append(move)
    return moves, position


def generate_game(
    rules: RulesProvider,
    seed: Optional[str] = None,
    max_plies: int = DEFAULT_MAX_PLIES,
    prefer_external: bool = False,
    algorithm: Optional[str] = None,
    clock=None,
) -> GameRun:
    """
    Generate one random game.

    Args:
        rules: Rules provider
        seed: Seed string (None or empty = draw a fresh one)
        max_plies: Ply cap (>= 0)
        prefer_external: Prefer the external RNG when no algorithm is given
        algorithm: Explicit algorithm name (used by replay)
        clock: Time source with now() (default: wall clock)

    Returns:
        GameRun describing the played game

    Raises:
        ValueError: If max_plies is negative
    """
    if max_plies < 0:
        raise ValueError(f"max_plies must be >= 0, got {max_plies}")
    clock = clock or SystemClock()
    seed = seed or new_seed()

    selection = create_stream(seed, prefer_external=prefer_external, algorithm=algorithm)
    started_at = clock.now()
    moves, position = play(rules, selection.stream, max_plies)
    finished_at = clock.now()

    termination = rules.is_terminal(position)
    result, reason = classify_result(termination, rules.side_to_move(position))

    return GameRun(
        seed=seed,
        rng=selection.name,
        rng_version=selection.version,
        moves=tuple(moves),
        result=result,
        reason=reason,
        termination=termination,
        final_position=rules.encode(position),
        started_at=started_at,
        finished_at=finished_at,
    )
