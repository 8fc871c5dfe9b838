"""Unit tests for chessmatch/chess/position.py"""

import pytest

import chessmatch.chess.position as engine
from chessmatch.chess.fen import STARTING_FEN
from chessmatch.chess.moves import Move
from chessmatch.chess.position import Position
from chessmatch.core.exceptions import ErrorKind, InvalidFENError
from chessmatch.core.shared_types import PieceType, PositionStatus

SCHOLARS_MATE_FEN = "r1bqkb1r/pppp1Qpp/2n2n2/4p3/2B1P3/8/PPPP1PPP/RNB1K1NR b KQkq - 0 4"
LADDER_MATE_FEN = "k6R/6R1/8/8/8/8/K7/8 b - - 1 1"
STALEMATE_FEN = "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"
# stalemate, and only a bishop left: no legal moves wins over insufficient material
BISHOP_STALEMATE_FEN = "k7/2K5/8/8/8/4B3/8/8 b - - 0 1"


# -- PARSING ---
def test_parse_starting_position() -> None:
    position = engine.parse(STARTING_FEN)
    assert isinstance(position, Position)
    assert engine.encode(position) == STARTING_FEN


@pytest.mark.parametrize(
    "fen",
    [
        STARTING_FEN,
        SCHOLARS_MATE_FEN,
        LADDER_MATE_FEN,
        "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
        "r3k2r/pppq1ppp/2npbn2/4p3/2B1P3/2NP1N2/PPP2PPP/R1BQ1RK1 b kq - 3 9",
        "8/8/8/8/8/8/8/K6k w - - 57 120",
    ],
)
def test_encode_parse_roundtrip(fen: str) -> None:
    """parse(encode(p)) == p for legal positions"""
    position = engine.parse(fen)
    assert engine.parse(engine.encode(position)) == position
    assert engine.encode(position) == fen


@pytest.mark.parametrize(
    "fen",
    [
        "mock mock mock mock mock mock",  # not a FEN at all
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq -",  # incomplete
        "8/8/8/8/8/8/8/8 w - - 0 1",  # no kings
        "k7/8/8/8/8/8/8/K6K w - - 0 1",  # two white kings
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNP w KQkq - 0 1",  # no white king / pawn on back rank
        "4k3/8/8/8/8/8/8/4K3 w KQkq - 0 1",  # castling rights without rooks
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e3 0 1",  # en passant square without a pawn push
        "k6R/8/8/8/8/8/8/K7 w - - 0 1",  # side not to move is in check
    ],
)
def test_parse_rejects_illegal_encodings(fen: str) -> None:
    with pytest.raises(InvalidFENError) as exc_info:
        _ = engine.parse(fen)
    assert exc_info.value.kind == ErrorKind.PARSE_ERROR


def test_position_is_immutable() -> None:
    position = engine.parse(STARTING_FEN)
    board = position.board()
    board.clear()
    assert engine.encode(position) == STARTING_FEN


# -- LEGAL MOVES / CHECK ---
def test_starting_position_has_twenty_moves() -> None:
    position = engine.parse(STARTING_FEN)
    moves = engine.legal_moves(position)
    assert len(moves) == 20
    assert Move("e2", "e4") in moves
    assert Move("g1", "f3") in moves
    assert not engine.is_in_check(position)
    assert engine.classify(position) == PositionStatus.ACTIVE


def test_promotions_are_expanded() -> None:
    position = engine.parse("8/P7/8/8/8/8/8/k1K5 w - - 0 1")
    promotions = {
        move.promote_to for move in engine.legal_moves(position) if move.from_square == "a7"
    }
    assert promotions == set(PieceType)


def test_pinned_piece_cannot_move() -> None:
    """The knight on e2 shields its king from the rook on e8."""
    position = engine.parse("4r2k/8/8/8/8/8/4N3/4K3 w - - 0 1")
    assert not any(move.from_square == "e2" for move in engine.legal_moves(position))


def test_castling_is_a_king_move_of_two_squares() -> None:
    position = engine.parse("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    moves = engine.legal_moves(position)
    assert Move("e1", "g1") in moves
    assert Move("e1", "c1") in moves
    assert engine.is_legal(position, Move("e1", "g1"))
    assert not engine.is_legal(position, Move("e1", "h1"))
    assert not engine.is_legal(position, Move("e1", "a1"))


# -- CLASSIFICATION ---
def test_scholars_mate_is_checkmate() -> None:
    position = engine.parse(SCHOLARS_MATE_FEN)
    assert engine.classify(position) == PositionStatus.CHECKMATE
    assert engine.is_in_check(position)
    assert engine.legal_moves(position) == []


def test_ladder_mate_is_checkmate() -> None:
    position = engine.parse(LADDER_MATE_FEN)
    assert engine.classify(position) == PositionStatus.CHECKMATE


def test_stalemate() -> None:
    position = engine.parse(STALEMATE_FEN)
    assert engine.classify(position) == PositionStatus.STALEMATE
    assert not engine.is_in_check(position)
    assert engine.legal_moves(position) == []


def test_no_legal_moves_takes_precedence_over_insufficient_material() -> None:
    position = engine.parse(BISHOP_STALEMATE_FEN)
    assert engine.is_insufficient_material(position)
    assert engine.classify(position) == PositionStatus.STALEMATE


@pytest.mark.parametrize(
    "fen, expected",
    [
        ("8/8/8/8/8/8/8/K6k w - - 0 1", True),  # king vs king
        ("8/8/8/8/8/8/8/KB5k w - - 0 1", True),  # king + bishop vs king
        ("8/8/8/8/8/8/8/KN5k w - - 0 1", True),  # king + knight vs king
        ("8/8/8/8/8/8/R7/K6k w - - 0 1", False),  # a rook is enough
        ("8/8/8/8/8/8/P7/K6k w - - 0 1", False),  # a pawn can promote
        (STARTING_FEN, False),
    ],
)
def test_insufficient_material(fen: str, expected: bool) -> None:
    position = engine.parse(fen)
    assert engine.is_insufficient_material(position) == expected
    expected_status = PositionStatus.DRAW if expected else PositionStatus.ACTIVE
    assert engine.classify(position) == expected_status


@pytest.mark.parametrize(
    "fen",
    [STARTING_FEN, SCHOLARS_MATE_FEN, STALEMATE_FEN, "8/8/8/8/8/8/8/K6k w - - 0 1"],
)
def test_classification_is_exhaustive(fen: str) -> None:
    """Exactly one status holds, and checkmate/stalemate only differ by the check."""
    position = engine.parse(fen)
    status = engine.classify(position)
    no_moves = engine.legal_moves(position) == []
    if status in (PositionStatus.CHECKMATE, PositionStatus.STALEMATE):
        assert no_moves
        assert engine.is_in_check(position) == (status == PositionStatus.CHECKMATE)
    else:
        assert not no_moves


# -- APPLYING MOVES ---
def test_apply_pawn_push_sets_en_passant_square() -> None:
    position = engine.parse(STARTING_FEN)
    after = engine.apply(position, Move("e2", "e4"))
    assert (
        engine.encode(after)
        == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
    )
    # input untouched
    assert engine.encode(position) == STARTING_FEN


def test_apply_castling_moves_the_rook() -> None:
    position = engine.parse("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    after = engine.apply(position, Move("e1", "g1"))
    assert engine.encode(after) == "r3k2r/8/8/8/8/8/8/R4RK1 b kq - 1 1"


def test_apply_en_passant_removes_the_captured_pawn() -> None:
    position = engine.parse("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 2")
    after = engine.apply(position, Move("e5", "d6"))
    assert engine.encode(after) == "4k3/8/3P4/8/8/8/8/4K3 b - - 0 2"
