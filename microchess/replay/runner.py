"""
Replay runner: reproduce a stored game from its seed.

Replay always builds a fresh stream. A mismatch means the rules engine or
RNG differs from the one that produced the record; it is reported, not raised.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..generator import DEFAULT_MAX_PLIES, GameRun, generate_game, join_movetext, split_headers
from ..rules.provider import RulesProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplayComparison:
    """
    Stored entry vs. simulated run.

    Fields:
        stored: Stored entry (wire form)
        simulated: Fresh run from the stored seed
        pgn_match: Transcript reproduced
        fen_match: Final position reproduced
    """
    stored: Dict[str, Any]
    simulated: GameRun
    pgn_match: bool
    fen_match: bool

    @property
    def matched(self) -> bool:
        return self.pgn_match and self.fen_match

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.simulated.seed,
            "stored": {
                "rng": self.stored.get("rng"),
                "rng_version": self.stored.get("rng_version"),
                "move_count": self.stored.get("move_count"),
                "final_fen": self.stored.get("final_fen"),
                "pgn": self.stored.get("pgn"),
            },
            "simulated": run_to_dict(self.simulated),
            "pgn_match": self.pgn_match,
            "fen_match": self.fen_match,
        }


def run_to_dict(run: GameRun) -> Dict[str, Any]:
    return {
        "seed": run.seed,
        "rng": run.rng,
        "rng_version": run.rng_version,
        "move_count": run.ply_count,
        "final_fen": run.final_position,
        "pgn_moves": run.movetext,
        "result": run.result,
    }


def simulate(
    seed: str,
    max_plies: int,
    rules: RulesProvider,
    algorithm: Optional[str] = None,
    prefer_external: bool = False,
) -> GameRun:
    """
    Replay a seed with a fresh stream.

    Args:
        seed: Seed string
        max_plies: Ply cap
        rules: Rules provider
        algorithm: Stored algorithm name (None = use prefer_external)
        prefer_external: Prefer the external RNG when algorithm is None
    """
    return generate_game(
        rules,
        seed=seed,
        max_plies=max_plies,
        prefer_external=prefer_external,
        algorithm=algorithm,
    )


def compare(stored: Dict[str, Any], simulated: GameRun) -> ReplayComparison:
    """
    Compare a stored entry against a simulated run.

    The transcript is rebuilt with the stored header block and stored result
    so that only the move sequence is compared.
    """
    stored_pgn = str(stored.get("pgn") or "")
    rebuilt = f"{split_headers(stored_pgn) if stored_pgn else ''}\n\n" + join_movetext(
        simulated.movetext, str(stored.get("result") or "")
    )
    pgn_match = stored_pgn.strip() == rebuilt.strip()
    fen_match = str(stored.get("final_fen") or "") == simulated.final_position
    return ReplayComparison(
        stored=dict(stored), simulated=simulated, pgn_match=pgn_match, fen_match=fen_match
    )


def verify_entry(
    entry: Dict[str, Any],
    rules: RulesProvider,
    default_max_plies: int = DEFAULT_MAX_PLIES,
    prefer_external: bool = False,
) -> ReplayComparison:
    """
    Reproduce a stored entry and compare.

    The stored move_count bounds the simulation so both runs take the same
    number of plies. The stored rng name selects the algorithm.

    Raises:
        ValueError: If the entry carries no seed
    """
    seed = entry.get("seed")
    if not isinstance(seed, str) or not seed:
        raise ValueError("stored entry has no seed")

    move_count = entry.get("move_count")
    max_plies = move_count if isinstance(move_count, int) and move_count >= 0 else default_max_plies
    algorithm = entry.get("rng") or None

    simulated = simulate(
        seed, max_plies, rules, algorithm=algorithm, prefer_external=prefer_external
    )
    comparison = compare(entry, simulated)
    if not comparison.matched:
        logger.warning(
            "Reproduction mismatch for seed %s (pgn_match=%s, fen_match=%s); check rules "
            "engine version and RNG implementation",
            seed,
            comparison.pgn_match,
            comparison.fen_match,
        )
    return comparison
