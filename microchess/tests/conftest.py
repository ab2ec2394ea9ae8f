"""
Shared fixtures: a scripted rules provider and store helpers.
"""

import logging
import signal
from typing import Any, Dict, List, Optional, Tuple

import pytest

from microchess.core.canonical import entry_json_bytes
from microchess.rules.provider import BLACK, WHITE, RulesProvider, Termination


class FakeRules(RulesProvider):
    """
    Scripted rules engine.

    Positions are tuples of played moves. Every position offers `width`
    moves named m<ply>_<i>. Optionally the position becomes terminal after
    `terminal_after` plies, or runs out of moves after `dead_end_after`
    plies without any terminal classification.
    """

    name = "fake"
    version = "1"

    def __init__(
        self,
        width: int = 7,
        terminal_after: Optional[int] = None,
        termination: Termination = Termination.CHECKMATE,
        dead_end_after: Optional[int] = None,
    ) -> None:
        self.width = width
        self.terminal_after = terminal_after
        self.termination = termination
        self.dead_end_after = dead_end_after

    def new_position(self) -> Tuple[str, ...]:
        return ()

    def legal_moves(self, position: Tuple[str, ...]) -> List[str]:
        ply = len(position)
        if self.dead_end_after is not None and ply >= self.dead_end_after:
            return []
        return [f"m{ply}_{i}" for i in range(self.width)]

    def apply(self, position: Tuple[str, ...], move: str) -> Tuple[str, ...]:
        return position + (move,)

    def is_terminal(self, position: Tuple[str, ...]) -> Termination:
        if self.terminal_after is not None and len(position) >= self.terminal_after:
            return self.termination
        return Termination.NONE

    def side_to_move(self, position: Tuple[str, ...]) -> str:
        return WHITE if len(position) % 2 == 0 else BLACK

    def encode(self, position: Tuple[str, ...]) -> str:
        return "/".join(position) or "start"


def entry_of_size(i: int, target: int = 500) -> Dict[str, Any]:
    """Wire entry whose in-store serialization is exactly target bytes."""
    entry = {"seed": f"seed-{i}", "final_fen": f"fen-{i}", "pgn": ""}
    base = len(entry_json_bytes(entry))
    entry["pgn"] = "x" * (target - base)
    return entry


@pytest.fixture
def fake_rules() -> FakeRules:
    return FakeRules()


@pytest.fixture
def restore_process_state():
    """Undo root logging handlers and signal handlers installed by services."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    sigint = signal.getsignal(signal.SIGINT)
    sigterm = signal.getsignal(signal.SIGTERM)
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    signal.signal(signal.SIGINT, sigint)
    signal.signal(signal.SIGTERM, sigterm)
