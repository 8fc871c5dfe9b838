"""
Type definitions used across layers
"""

from enum import StrEnum

# Type aliases to make the records easier to read
PlayerId = str
MatchId = str
Tick = int


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class MatchStatus(StrEnum):
    """Lifecycle of a match. Everything except ACTIVE is terminal."""

    ACTIVE = "active"
    WHITE_WON = "white_won"
    BLACK_WON = "black_won"
    DRAW = "draw"

    @property
    def is_terminal(self) -> bool:
        return self != MatchStatus.ACTIVE


class PositionStatus(StrEnum):
    """Classification of a single position, independent of any match."""

    ACTIVE = "active"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW = "draw"


class MatchOutcome(StrEnum):
    """Result handed to the profile ledger when a match ends."""

    WHITE_WON = "white_won"
    BLACK_WON = "black_won"
    DRAW = "draw"

    @classmethod
    def win_for(cls, color: Color) -> "MatchOutcome":
        return cls.WHITE_WON if color == Color.WHITE else cls.BLACK_WON

    def to_status(self) -> MatchStatus:
        return MatchStatus(self.value)


class PieceType(StrEnum):
    """Pieces a pawn may promote into."""

    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
