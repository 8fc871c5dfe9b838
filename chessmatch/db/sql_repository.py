"""Implementation of the Store using SQLAlchemy"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import select
from sqlalchemy.orm import Session

from chessmatch.core.models import MatchModel, ProfileModel
from chessmatch.core.shared_types import MatchId, PlayerId
from chessmatch.db.schema import DBMatch, DBProfile

logger = logging.getLogger(__name__)


class SQLMatchRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get(self, match_id: MatchId) -> MatchModel | None:
        """Get match by ID, if record exists."""
        match_db = self._fetch_match(match_id)
        if match_db:
            return self._to_model(match_db)
        return None

    def put(self, match: MatchModel) -> None:
        """Add a new record, or write the new info to the existing one. Committing is up to the transaction."""
        match_db = self._fetch_match(match.match_id)
        if match_db is None:
            match_db = DBMatch(id=match.match_id)
            self.db.add(match_db)
        match_db.white = match.white
        match_db.black = match.black
        match_db.current_fen = match.current_fen
        match_db.moves = list(match.moves)
        match_db.status = match.status
        match_db.side_to_move = match.side_to_move
        match_db.white_time_remaining = match.white_time_remaining
        match_db.black_time_remaining = match.black_time_remaining
        match_db.move_count = match.move_count
        match_db.created_tick = match.created_tick
        match_db.last_move_tick = match.last_move_tick
        match_db.time_control = match.time_control
        match_db.draw_proposed_by = match.draw_proposed_by
        self.db.flush()

    def has(self, match_id: MatchId) -> bool:
        return self._fetch_match(match_id) is not None

    def keys(self) -> list[MatchId]:
        query = select(DBMatch.id).order_by(DBMatch.id)
        return list(self.db.scalars(query))

    def _fetch_match(self, match_id: MatchId) -> DBMatch | None:
        query = select(DBMatch).where(DBMatch.id == match_id)
        return self.db.scalar(query)

    def _to_model(self, match_db: DBMatch) -> MatchModel:
        """Convert SQLAlchemy model to data transfer model."""
        return MatchModel(
            match_id=match_db.id,
            white=match_db.white,
            black=match_db.black,
            current_fen=match_db.current_fen,
            moves=list(match_db.moves),
            status=match_db.status,
            side_to_move=match_db.side_to_move,
            white_time_remaining=match_db.white_time_remaining,
            black_time_remaining=match_db.black_time_remaining,
            move_count=match_db.move_count,
            created_tick=match_db.created_tick,
            last_move_tick=match_db.last_move_tick,
            time_control=match_db.time_control,
            draw_proposed_by=match_db.draw_proposed_by,
        )


class SQLProfileRepository:
    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get(self, player_id: PlayerId) -> ProfileModel | None:
        profile_db = self._fetch_profile(player_id)
        if profile_db:
            return self._to_model(profile_db)
        return None

    def put(self, profile: ProfileModel) -> None:
        profile_db = self._fetch_profile(profile.player_id)
        if profile_db is None:
            profile_db = DBProfile(id=profile.player_id)
            self.db.add(profile_db)
        profile_db.username = profile.username
        profile_db.rating = profile.rating
        profile_db.games_played = profile.games_played
        profile_db.wins = profile.wins
        profile_db.draws = profile.draws
        profile_db.losses = profile.losses
        profile_db.current_games = list(profile.current_games)
        profile_db.created_tick = profile.created_tick
        self.db.flush()

    def has(self, player_id: PlayerId) -> bool:
        return self._fetch_profile(player_id) is not None

    def keys(self) -> list[PlayerId]:
        query = select(DBProfile.id).order_by(DBProfile.id)
        return list(self.db.scalars(query))

    def _fetch_profile(self, player_id: PlayerId) -> DBProfile | None:
        query = select(DBProfile).where(DBProfile.id == player_id)
        return self.db.scalar(query)

    def _to_model(self, profile_db: DBProfile) -> ProfileModel:
        return ProfileModel(
            player_id=profile_db.id,
            username=profile_db.username,
            rating=profile_db.rating,
            games_played=profile_db.games_played,
            wins=profile_db.wins,
            draws=profile_db.draws,
            losses=profile_db.losses,
            current_games=list(profile_db.current_games),
            created_tick=profile_db.created_tick,
        )


class SQLStore:
    """Both repositories share one session, so one commit covers the match and the profiles."""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session
        self.matches = SQLMatchRepository(db_session)
        self.profiles = SQLProfileRepository(db_session)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        try:
            yield
        except BaseException:
            logger.debug("Rolling back SQL transaction")
            self.db.rollback()
            raise
        self.db.commit()
