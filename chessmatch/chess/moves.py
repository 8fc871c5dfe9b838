"""
The Move value passed between the Position Engine, the Move Validator and the match log.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import chess

from chessmatch.chess.fen import is_valid_square
from chessmatch.core.exceptions import InvalidMoveError
from chessmatch.core.shared_types import PieceType

PIECE_TO_UCI: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}
UCI_TO_PIECE: dict[str, PieceType] = {value: key for key, value in PIECE_TO_UCI.items()}

PIECE_TO_ROLE: dict[PieceType, chess.PieceType] = {
    PieceType.KNIGHT: chess.KNIGHT,
    PieceType.BISHOP: chess.BISHOP,
    PieceType.ROOK: chess.ROOK,
    PieceType.QUEEN: chess.QUEEN,
}
ROLE_TO_PIECE: dict[chess.PieceType, PieceType] = {
    value: key for key, value in PIECE_TO_ROLE.items()
}


def parse_promotion(promotion: str) -> Optional[PieceType]:
    """
    Accept either the UCI letter ('q', 'R', ...) or the full name ('queen').
    Returns None if the text does not name a piece a pawn can promote into.
    """
    text = promotion.strip().lower()
    if text in UCI_TO_PIECE:
        return UCI_TO_PIECE[text]
    if text in {piece.value for piece in PieceType}:
        return PieceType(text)
    return None


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: str
    to_square: str
    promote_to: Optional[PieceType] = None

    @classmethod
    def from_uci(cls, uci: str) -> Move:
        """
        Universal Chess Interface:
        ---
        ---
        One of the standard chess notations for moves

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "e7e8q" : (pawn) moves from e7 to e8 and promotes to a queen (the q)
        * "e1g1": the king castles king-side
        """
        if len(uci) not in (4, 5):
            raise InvalidMoveError(f"Cannot interpret {uci!r} as a UCI move.")

        from_sq, to_sq = uci[:2], uci[2:4]
        if not (is_valid_square(from_sq) and is_valid_square(to_sq)):
            raise InvalidMoveError(f"Cannot interpret {uci!r} as a UCI move.")

        promote_to = None
        if len(uci) == 5:
            if uci[4] not in UCI_TO_PIECE:
                raise InvalidMoveError(f"Unknown promotion piece in {uci!r}.")
            promote_to = UCI_TO_PIECE[uci[4]]
        return cls(from_sq, to_sq, promote_to)

    @classmethod
    def from_library(cls, move: chess.Move) -> Move:
        promote_to = ROLE_TO_PIECE[move.promotion] if move.promotion else None
        return cls(
            chess.square_name(move.from_square),
            chess.square_name(move.to_square),
            promote_to,
        )

    def to_uci(self) -> str:
        """Convert into UCI notation"""
        piece_char = PIECE_TO_UCI[self.promote_to] if self.promote_to else ""
        return f"{self.from_square}{self.to_square}{piece_char}"

    def to_library(self) -> chess.Move:
        promotion = PIECE_TO_ROLE[self.promote_to] if self.promote_to else None
        return chess.Move(
            chess.parse_square(self.from_square),
            chess.parse_square(self.to_square),
            promotion=promotion,
        )
