"""
Boundary layer data model(s).

These objects are what the Service reads from and writes to the store.
Hence, both the persistence layer (lower) and the domain layer use the models defined here to send/receive state
(Decouples the data model specific to the DB layer from the domain objects that enforce the rules)
"""

from dataclasses import dataclass, field
from typing import Optional

from chessmatch.core.shared_types import MatchId, PlayerId, Tick


@dataclass
class MatchModel:
    """Transport-safe representation of a match used between Service, DB, and domain layers."""

    match_id: MatchId
    white: PlayerId
    black: PlayerId
    current_fen: str
    status: str
    side_to_move: str
    white_time_remaining: int
    black_time_remaining: int
    move_count: int
    created_tick: Tick
    last_move_tick: Tick
    time_control: str = ""
    moves: list[str] = field(default_factory=list)
    draw_proposed_by: Optional[PlayerId] = None


@dataclass
class ProfileModel:
    """Transport-safe representation of a player's aggregate record."""

    player_id: PlayerId
    username: str
    rating: int
    games_played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    current_games: list[MatchId] = field(default_factory=list)
    created_tick: Tick = 0
