"""Requests and Response models"""

from typing import Any, Optional

from pydantic import BaseModel, field_validator

from chessmatch.core.exceptions import ErrorKind, InvalidRequestError
from chessmatch.core.shared_types import (
    Color,
    MatchId,
    MatchStatus,
    PlayerId,
    PositionStatus,
)


# --- REQUEST MODELS ---
# NOTE FEN strings, square names and promotion pieces are passed through as-is. The move validator classifies them.
class InitializeProfileRequest(BaseModel):
    player: PlayerId
    username: str = ""


class VerifyPositionRequest(BaseModel):
    fen: str
    claimed_status: Optional[PositionStatus] = None


class ValidateMoveRequest(BaseModel):
    fen: str
    from_square: str
    to_square: str
    promotion: Optional[str] = None


class CreateMatchRequest(BaseModel):
    match_id: MatchId
    player: PlayerId
    opponent: PlayerId
    time_control: str = ""

    @field_validator("match_id")
    @classmethod
    def validate_match_id(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("Match id cannot be empty.")
        return value


class MoveRequest(BaseModel):
    match_id: MatchId
    player: PlayerId
    from_square: str
    to_square: str
    promote_to: Optional[str] = None


class OverrideStatusRequest(BaseModel):
    match_id: MatchId
    player: PlayerId
    status: MatchStatus

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, value: Any) -> Any:
        if value not in {status.value for status in MatchStatus}:
            raise InvalidRequestError(
                f"Unknown status: {value!r}. Pick one from {','.join(MatchStatus)}"
            )
        return value


class ResignRequest(BaseModel):
    match_id: MatchId
    player: PlayerId


class DrawProposalRequest(BaseModel):
    match_id: MatchId
    player: PlayerId


class DrawResponseRequest(BaseModel):
    match_id: MatchId
    player: PlayerId
    accept: bool


# --- RESPONSE MODELS ---
class ProfileResponse(BaseModel):
    player_id: PlayerId
    username: str
    rating: int
    games_played: int
    wins: int
    draws: int
    losses: int
    current_games: list[MatchId]
    created_tick: int


class VerificationResponse(BaseModel):
    status: PositionStatus
    is_check: bool
    legal_moves: list[str]


class MoveValidationResponse(BaseModel):
    is_valid: bool
    resulting_fen: Optional[str] = None
    error: Optional[ErrorKind] = None
    message: Optional[str] = None


class MatchResponse(BaseModel):
    match_id: MatchId
    white: PlayerId
    black: PlayerId
    current_fen: str
    moves: list[str]
    status: MatchStatus
    side_to_move: Color
    white_time_remaining: int
    black_time_remaining: int
    move_count: int
    created_tick: int
    last_move_tick: int
    time_control: str
    draw_proposed_by: Optional[PlayerId] = None


class ClockStatusResponse(BaseModel):
    match_id: MatchId
    white_remaining: int
    black_remaining: int
    side_to_move: Color
    expired: bool
    move_count: int
    elapsed_since_last_move: int
