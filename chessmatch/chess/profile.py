"""
Profile Ledger
----

A player's aggregate record. Only the match state machine changes it, and only at the moment a match ends.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Self

from chessmatch.chess.rating import update_ratings
from chessmatch.core.models import ProfileModel
from chessmatch.core.shared_types import MatchId, MatchOutcome, PlayerId, Tick

DEFAULT_RATING = 1200


class Result(Enum):
    WIN = auto()
    DRAW = auto()
    LOSS = auto()


@dataclass
class Profile:
    player_id: PlayerId
    username: str
    rating: int
    games_played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    current_games: list[MatchId] = field(default_factory=list)
    created_tick: Tick = 0

    @classmethod
    def new(
        cls,
        player_id: PlayerId,
        tick: Tick,
        username: Optional[str] = None,
        rating: int = DEFAULT_RATING,
    ) -> Self:
        """Fresh profile. Without a username, the player id doubles as display name."""
        return cls(
            player_id=player_id,
            username=username or player_id,
            rating=rating,
            created_tick=tick,
        )

    @classmethod
    def from_model(cls, model: ProfileModel) -> Self:
        return cls(
            player_id=model.player_id,
            username=model.username,
            rating=model.rating,
            games_played=model.games_played,
            wins=model.wins,
            draws=model.draws,
            losses=model.losses,
            current_games=list(model.current_games),
            created_tick=model.created_tick,
        )

    def to_model(self) -> ProfileModel:
        return ProfileModel(
            player_id=self.player_id,
            username=self.username,
            rating=self.rating,
            games_played=self.games_played,
            wins=self.wins,
            draws=self.draws,
            losses=self.losses,
            current_games=list(self.current_games),
            created_tick=self.created_tick,
        )

    def rename(self, username: str) -> None:
        """An empty username keeps the current one."""
        if username:
            self.username = username

    def join_match(self, match_id: MatchId) -> None:
        if match_id not in self.current_games:
            self.current_games.append(match_id)

    def leave_match(self, match_id: MatchId) -> None:
        self.current_games = [game for game in self.current_games if game != match_id]

    def record_result(self, match_id: MatchId, result: Result, new_rating: int) -> None:
        self.rating = new_rating
        self.games_played += 1
        if result == Result.WIN:
            self.wins += 1
        elif result == Result.DRAW:
            self.draws += 1
        else:
            self.losses += 1
        self.leave_match(match_id)


def settle_match(
    white: Profile, black: Profile, match_id: MatchId, outcome: MatchOutcome
) -> None:
    """
    Fold the outcome of a finished match into both profiles
    ----

    1. compute new ratings (winner/loser oriented by result, not by color)
    2. bump games played and the matching result counter
    3. drop the match from both sets of active games
    """
    if outcome == MatchOutcome.DRAW:
        white_rating, black_rating = update_ratings(
            white.rating, black.rating, is_draw=True
        )
        white.record_result(match_id, Result.DRAW, white_rating)
        black.record_result(match_id, Result.DRAW, black_rating)
    elif outcome == MatchOutcome.WHITE_WON:
        white_rating, black_rating = update_ratings(white.rating, black.rating)
        white.record_result(match_id, Result.WIN, white_rating)
        black.record_result(match_id, Result.LOSS, black_rating)
    else:
        black_rating, white_rating = update_ratings(black.rating, white.rating)
        white.record_result(match_id, Result.LOSS, white_rating)
        black.record_result(match_id, Result.WIN, black_rating)
