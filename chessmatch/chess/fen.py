"""
Structural checks on FEN strings.

python-chess fills in the missing fields of an incomplete FEN with defaults. A match record must never be
built from a guess, so every field is checked here before a board gets constructed.
"""

from itertools import combinations
from string import ascii_lowercase
from typing import Callable, Optional

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# (files, ranks)
BOARD_DIMENSIONS = (8, 8)
FILE_NAMES = ascii_lowercase[: BOARD_DIMENSIONS[0]]
RANK_NAMES = "".join(str(rank) for rank in range(1, BOARD_DIMENSIONS[1] + 1))

FEN_PIECE_CHARACTERS = frozenset("pnbrqkPNBRQK")

# rights are always written in this order, and as "-" once every one of them is gone
CASTLING_ORDER = "KQkq"
VALID_CASTLING_ENCODINGS = ["-"] + [
    "".join(rights)
    for count in range(1, len(CASTLING_ORDER) + 1)
    for rights in combinations(CASTLING_ORDER, count)
]


def is_valid_fen(fen: str) -> bool:
    """
    Check if given string follows proper FEN notation: six space-separated fields, each readable on its own.

    NOTE: only the syntax gets checked here. Whether the position could occur on a board is up to the Position Engine.
    """
    fields = fen.split(" ")
    if len(fields) != len(FIELD_CHECKS):
        return False
    return all(check(field) for check, field in zip(FIELD_CHECKS, fields))


def is_valid_position(position: str) -> bool:
    """Piece placement: one entry per rank separated by '/', every rank covering the full width of the board."""
    num_files, num_ranks = BOARD_DIMENSIONS
    ranks = position.split("/")
    if len(ranks) != num_ranks:
        return False
    return all(_rank_width(rank) == num_files for rank in ranks)


def _rank_width(rank: str) -> Optional[int]:
    """Files covered by a single rank of the placement field. None if it contains anything unexpected."""
    width = 0
    for character in rank:
        if character in RANK_NAMES:
            width += int(character)
        elif character in FEN_PIECE_CHARACTERS:
            width += 1
        else:
            return None
    return width


def is_valid_color_code(color: str) -> bool:
    return color in {"w", "b"}


def is_valid_castling_rights(castling: str) -> bool:
    return castling in VALID_CASTLING_ENCODINGS


def is_valid_en_passant(en_passant: str) -> bool:
    """Either a square on the board or a '-'"""
    return en_passant == "-" or is_valid_square(en_passant)


def is_valid_square(square: str) -> bool:
    """File letter followed by rank number, e.g. 'e4'"""
    return len(square) == 2 and square[0] in FILE_NAMES and square[1] in RANK_NAMES


def is_valid_move_counter(counter: str) -> bool:
    return counter.isascii() and counter.isdigit()


# one check per FEN field, in the order the fields are written
FIELD_CHECKS: tuple[Callable[[str], bool], ...] = (
    is_valid_position,
    is_valid_color_code,
    is_valid_castling_rights,
    is_valid_en_passant,
    is_valid_move_counter,
    is_valid_move_counter,
)
