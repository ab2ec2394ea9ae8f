"""
python-chess backed rules provider.

Determinism depends on python-chess move generation order; keep the
library version pinned for replayable records.
"""

from typing import List

import chess

from .provider import BLACK, WHITE, RulesProvider, Termination

FIFTY_MOVE_HALFMOVES = 100


class ChessRules(RulesProvider):
    """
    Standard chess via python-chess.

    Positions are chess.Board instances; moves are SAN strings.
    A draw ends the game only once it has happened on the board: a position
    repeated three times, or 100 halfmoves without a capture or pawn move.
    Draws that could merely be claimed with the next move do not count.
    """

    name = "python-chess"
    version = chess.__version__

    def __init__(self, starting_fen: str = chess.STARTING_FEN) -> None:
        self.starting_fen = starting_fen

    def new_position(self) -> chess.Board:
        return chess.Board(self.starting_fen)

    def legal_moves(self, position: chess.Board) -> List[str]:
        return [position.san(move) for move in position.legal_moves]

    def apply(self, position: chess.Board, move: str) -> chess.Board:
        position.push_san(move)
        return position

    def is_terminal(self, position: chess.Board) -> Termination:
        # Order matters: stalemate with bare kings is reported as stalemate
        if position.is_checkmate():
            return Termination.CHECKMATE
        if position.is_stalemate():
            return Termination.STALEMATE
        if position.is_repetition(3):
            return Termination.REPETITION
        if position.is_insufficient_material():
            return Termination.INSUFFICIENT_MATERIAL
        if (
            position.halfmove_clock >= FIFTY_MOVE_HALFMOVES
            or position.is_seventyfive_moves()
            or position.is_fivefold_repetition()
        ):
            return Termination.DRAW
        return Termination.NONE

    def side_to_move(self, position: chess.Board) -> str:
        return WHITE if position.turn == chess.WHITE else BLACK

    def encode(self, position: chess.Board) -> str:
        return position.fen()
