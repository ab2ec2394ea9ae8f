"""
Game record model.

A GameRecord is the immutable unit stored in the game log.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

PROCESS_TAG = "microchess"
STATUS_GENERATED = "generated"

RESULT_WHITE_WINS = "1-0"
RESULT_BLACK_WINS = "0-1"
RESULT_DRAW = "1/2-1/2"
RESULT_UNFINISHED = "*"


@dataclass(frozen=True)
class GameRecord:
    """
    Immutable game record.

    Fields:
        process: Process tag (always "microchess" for generated games)
        message: Human readable transcript message
        status: Record status ("generated")
        timestamp: ISO-8601 UTC completion time
        move_count: Number of plies actually played
        result: Result code (1-0, 0-1, 1/2-1/2, *)
        reason: Free text result reason
        final_fen: Final position encoding
        pgn: Full transcript (headers + numbered moves + result)
        rng: Name of the RNG algorithm that produced the game
        rng_version: Optional RNG algorithm version
        seed: Seed string that reproduces the game
    """
    process: str
    message: str
    status: str
    timestamp: str
    move_count: int
    result: str
    reason: str
    final_fen: str
    pgn: str
    rng: str
    rng_version: Optional[str]
    seed: str

    def to_dict(self) -> Dict[str, Any]:
        """Wire form, in persisted field order."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameRecord":
        """
        Build a record from its wire form.

        Missing fields get neutral defaults so that older or hand-edited
        entries can still be read.
        """
        return cls(
            process=str(data.get("process", PROCESS_TAG)),
            message=str(data.get("message", "")),
            status=str(data.get("status", STATUS_GENERATED)),
            timestamp=str(data.get("timestamp", "")),
            move_count=int(data.get("move_count", 0)),
            result=str(data.get("result", RESULT_UNFINISHED)),
            reason=str(data.get("reason", "")),
            final_fen=str(data.get("final_fen", "")),
            pgn=str(data.get("pgn", "")),
            rng=str(data.get("rng", "")),
            rng_version=data.get("rng_version"),
            seed=str(data.get("seed", "")),
        )
