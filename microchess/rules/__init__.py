"""
Rules engine boundary.

RulesProvider is the contract the generator drives; ChessRules implements
it with python-chess.
"""

from .provider import BLACK, WHITE, RulesProvider, Termination
from .chess_rules import ChessRules

__all__ = [
    "BLACK",
    "WHITE",
    "RulesProvider",
    "Termination",
    "ChessRules",
]
