"""
Position Engine
----

Pure functions over an immutable Position value. The rules themselves (move generation, pins, castling,
en passant, promotion, check detection) are delegated to the python-chess library: a Position only ever
hands out fresh `chess.Board` copies, so nothing in here can be mutated from the outside.
"""

from dataclasses import dataclass

import chess

from chessmatch.chess.fen import STARTING_FEN, is_valid_fen
from chessmatch.chess.moves import Move
from chessmatch.core.exceptions import InvalidFENError
from chessmatch.core.shared_types import PositionStatus


@dataclass(frozen=True)
class Position:
    """
    Data that can be constructed from a FEN string.
    ----

    FEN, or Forsyth-Edwards Notation, is a standard notation for describing a particular board position of a chess game.

    <board position string><active color><castling rights><en passant square><# half move clock><number turns played>

    ex) The standard starting position has a FEN
    rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1

    The stored FEN is always the canonical encoding produced by `encode`, so two equal positions compare equal.
    """

    fen: str

    def board(self) -> chess.Board:
        """A new (mutable) board for this position. Callers may do whatever they want with it."""
        return chess.Board(self.fen)

    def __str__(self) -> str:
        return self.fen


def _encode_board(board: chess.Board) -> str:
    """
    NOTE en_passant="fen" writes the en passant target after every double pawn push,
    whether or not a capture is actually possible. This is the convention of the FEN standard itself.
    """
    return board.fen(en_passant="fen")


def parse(encoding: str) -> Position:
    """Parse a FEN into a Position. Raise InvalidFENError if malformed or if no legal game could contain it."""
    if not is_valid_fen(encoding):
        raise InvalidFENError(f"Cannot interpret supplied string as FEN: {encoding!r}")

    try:
        board = chess.Board(encoding)
    except ValueError as exc:
        raise InvalidFENError(
            f"Cannot interpret supplied string as FEN: {encoding!r}"
        ) from exc

    # wrong number of kings, pawns on the back rank, castling rights without the pieces, side not to move in check, ...
    status = board.status()
    if status != chess.STATUS_VALID:
        raise InvalidFENError(
            f"FEN does not describe a legal chess position: {encoding!r} ({status!r})"
        )
    return Position(_encode_board(board))


def encode(pos: Position) -> str:
    return pos.fen


def starting_position() -> Position:
    return parse(STARTING_FEN)


def legal_moves(pos: Position) -> list[Move]:
    """Every legal move for the side to move. Promotions show up once per piece type."""
    return [Move.from_library(move) for move in pos.board().legal_moves]


def is_legal(pos: Position, move: Move) -> bool:
    """Exact match against the generated moves: a king taking its own rook is not a way to castle."""
    return move.to_library() in set(pos.board().generate_legal_moves())


def is_in_check(pos: Position) -> bool:
    return pos.board().is_check()


def is_insufficient_material(pos: Position) -> bool:
    """Neither side has enough material left to deliver mate, even with the help of the opponent."""
    return pos.board().is_insufficient_material()


def classify(pos: Position) -> PositionStatus:
    """
    Terminal status of a position
    ----

    Having no legal moves takes precedence: a mated or stalemated position is never reported as a material draw.
    """
    board = pos.board()
    if not any(board.legal_moves):
        return PositionStatus.CHECKMATE if board.is_check() else PositionStatus.STALEMATE
    if board.is_insufficient_material():
        return PositionStatus.DRAW
    return PositionStatus.ACTIVE


def apply(pos: Position, move: Move) -> Position:
    """
    Play the move and return the new Position.

    NOTE: only call this with a legal move (see validator.validate). The input Position is left untouched.
    """
    board = pos.board()
    board.push(move.to_library())
    return Position(_encode_board(board))
