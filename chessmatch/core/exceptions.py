"""
Exceptions raised by the domain and service layers.

Every exception carries a `kind` so callers (an API router, a message handler, ...) can
tell them apart without parsing messages.
"""

from enum import StrEnum


class ErrorKind(StrEnum):
    PARSE_ERROR = "parse_error"
    BAD_SQUARE = "bad_square"
    BAD_PROMOTION = "bad_promotion"
    NO_PIECE_AT_SOURCE = "no_piece_at_source"
    ILLEGAL_MOVE = "illegal_move"
    NOT_PARTICIPANT = "not_participant"
    NOT_YOUR_TURN = "not_your_turn"
    GAME_NOT_ACTIVE = "game_not_active"
    GAME_ALREADY_EXISTS = "game_already_exists"
    DRAW_ALREADY_PROPOSED = "draw_already_proposed"
    NO_DRAW_PROPOSAL = "no_draw_proposal"
    CANNOT_RESPOND_TO_OWN_PROPOSAL = "cannot_respond_to_own_proposal"
    TIME_EXPIRED = "time_expired"
    CLAIM_MISMATCH = "claim_mismatch"
    NOT_FOUND = "not_found"
    INVALID_REQUEST = "invalid_request"


class GameError(Exception):
    """Top-level exception. Everything the library raises on purpose derives from this."""

    kind: ErrorKind = ErrorKind.INVALID_REQUEST


# --- Parsing / validation of chess input ---
class InvalidFENError(GameError):
    kind = ErrorKind.PARSE_ERROR


class InvalidMoveError(GameError):
    """Move encoding (UCI) could not be read."""

    kind = ErrorKind.PARSE_ERROR


class BadSquareError(GameError):
    kind = ErrorKind.BAD_SQUARE


class BadPromotionError(GameError):
    kind = ErrorKind.BAD_PROMOTION


class NoPieceAtSourceError(GameError):
    kind = ErrorKind.NO_PIECE_AT_SOURCE


class IllegalMoveError(GameError):
    kind = ErrorKind.ILLEGAL_MOVE


# --- Match state machine ---
class GameStateError(GameError):
    """The requested action does not fit the current state of the match."""


class NotParticipantError(GameStateError):
    kind = ErrorKind.NOT_PARTICIPANT


class NotYourTurnError(GameStateError):
    kind = ErrorKind.NOT_YOUR_TURN


class GameNotActiveError(GameStateError):
    kind = ErrorKind.GAME_NOT_ACTIVE


class GameAlreadyExistsError(GameStateError):
    kind = ErrorKind.GAME_ALREADY_EXISTS


class DrawAlreadyProposedError(GameStateError):
    kind = ErrorKind.DRAW_ALREADY_PROPOSED


class NoDrawProposalError(GameStateError):
    kind = ErrorKind.NO_DRAW_PROPOSAL


class CannotRespondToOwnProposalError(GameStateError):
    kind = ErrorKind.CANNOT_RESPOND_TO_OWN_PROPOSAL


class TimeExpiredError(GameStateError):
    """
    Raised AFTER the timeout loss has been committed.
    The attempted move is discarded, the match is over.
    """

    kind = ErrorKind.TIME_EXPIRED


class ClaimMismatchError(GameError):
    kind = ErrorKind.CLAIM_MISMATCH


# --- Boundary layers ---
class RepositoryError(GameError):
    kind = ErrorKind.NOT_FOUND


class MatchNotFoundError(RepositoryError):
    pass


class InvalidRequestError(GameError):
    """
    Raised from pydantic validators as well.
    NOTE not a ValueError on purpose: pydantic lets it propagate instead of wrapping it into a ValidationError.
    """

    kind = ErrorKind.INVALID_REQUEST
