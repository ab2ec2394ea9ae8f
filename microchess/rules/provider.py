"""
Rules provider interface.

The generator never inspects positions itself. It asks a provider for
ordered legal moves and for a terminal classification.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List


class Termination(Enum):
    """Terminal classification of a position."""

    NONE = "none"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    REPETITION = "repetition"
    INSUFFICIENT_MATERIAL = "insufficient_material"
    DRAW = "draw"

    @property
    def is_terminal(self) -> bool:
        return self is not Termination.NONE


WHITE = "w"
BLACK = "b"


class RulesProvider(ABC):
    """
    Abstract rules engine.

    All implementations must guarantee:
    - legal_moves() order is stable for a given position and engine version
    - apply() only receives moves returned by legal_moves()
    """

    name: str = ""
    version: str = ""

    @abstractmethod
    def new_position(self) -> Any:
        """Return the starting position."""
        ...

    @abstractmethod
    def legal_moves(self, position: Any) -> List[str]:
        """Ordered move notations playable from position."""
        ...

    @abstractmethod
    def apply(self, position: Any, move: str) -> Any:
        """Play move and return the resulting position."""
        ...

    @abstractmethod
    def is_terminal(self, position: Any) -> Termination:
        ...

    @abstractmethod
    def side_to_move(self, position: Any) -> str:
        """WHITE or BLACK."""
        ...

    @abstractmethod
    def encode(self, position: Any) -> str:
        """Compact textual snapshot of position."""
        ...
