"""
Move Validator
----

Decides whether a (from, to, promotion) request is a legal move in a given position, and if so what the
resulting position is. Never raises on bad input and never touches persistent state, so the same function
backs both the state-changing move path and the read-only "is this legal?" query.
"""

from dataclasses import dataclass
from typing import Optional

import chess

import chessmatch.chess.position as engine
from chessmatch.chess.fen import is_valid_square
from chessmatch.chess.moves import Move, parse_promotion
from chessmatch.core.exceptions import (
    BadPromotionError,
    BadSquareError,
    ErrorKind,
    GameError,
    IllegalMoveError,
    InvalidFENError,
    NoPieceAtSourceError,
)

ERROR_TYPES: dict[ErrorKind, type[GameError]] = {
    ErrorKind.PARSE_ERROR: InvalidFENError,
    ErrorKind.BAD_SQUARE: BadSquareError,
    ErrorKind.BAD_PROMOTION: BadPromotionError,
    ErrorKind.NO_PIECE_AT_SOURCE: NoPieceAtSourceError,
    ErrorKind.ILLEGAL_MOVE: IllegalMoveError,
}


@dataclass(frozen=True)
class MoveValidation:
    is_valid: bool
    resulting_fen: Optional[str] = None
    move: Optional[Move] = None
    error: Optional[ErrorKind] = None
    message: Optional[str] = None

    @classmethod
    def rejected(cls, error: ErrorKind, message: str) -> "MoveValidation":
        return cls(is_valid=False, error=error, message=message)

    def raise_for_error(self) -> None:
        """Turn a rejection into the matching exception (for callers that want to abort)."""
        if self.is_valid:
            return
        assert self.error is not None
        raise ERROR_TYPES[self.error](self.message or self.error.value)


def validate(
    fen: str,
    from_square: str,
    to_square: str,
    promotion: Optional[str] = None,
) -> MoveValidation:
    """
    Checks, in order
    ----

    1. the position can be parsed
    2. both squares exist on the board
    3. the promotion piece (if any) is one a pawn can become
    4. there is a piece to move
    5. the move is legal according to the rules of chess
    """
    try:
        position = engine.parse(fen)
    except InvalidFENError as exc:
        return MoveValidation.rejected(ErrorKind.PARSE_ERROR, str(exc))

    for square in (from_square, to_square):
        if not is_valid_square(square):
            return MoveValidation.rejected(
                ErrorKind.BAD_SQUARE,
                f"Cannot interpret {square!r} as a valid square name.",
            )

    promote_to = None
    if promotion is not None:
        promote_to = parse_promotion(promotion)
        if promote_to is None:
            return MoveValidation.rejected(
                ErrorKind.BAD_PROMOTION, f"Invalid promotion piece: {promotion!r}"
            )

    board = position.board()
    if board.piece_at(chess.parse_square(from_square)) is None:
        return MoveValidation.rejected(
            ErrorKind.NO_PIECE_AT_SOURCE, f"No piece at from square {from_square}"
        )

    # capture, castling and en passant all follow from what stands on the squares; the engine works those out.
    candidate = Move(from_square, to_square, promote_to)
    if not engine.is_legal(position, candidate):
        return MoveValidation.rejected(
            ErrorKind.ILLEGAL_MOVE, f"Illegal move: {candidate.to_uci()}"
        )

    resulting = engine.apply(position, candidate)
    return MoveValidation(
        is_valid=True, resulting_fen=engine.encode(resulting), move=candidate
    )
