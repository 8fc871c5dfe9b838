"""Orchestration of communication from the dispatch layer to business logic and persistence layers (and the reverse direction)."""

import logging
from typing import Callable, Optional

import chessmatch.chess.position as engine
from chessmatch.api.models import (
    ClockStatusResponse,
    CreateMatchRequest,
    DrawProposalRequest,
    DrawResponseRequest,
    InitializeProfileRequest,
    MatchResponse,
    MoveRequest,
    MoveValidationResponse,
    OverrideStatusRequest,
    ProfileResponse,
    ResignRequest,
    ValidateMoveRequest,
    VerificationResponse,
    VerifyPositionRequest,
)
from chessmatch.chess.match import Match
from chessmatch.chess.profile import Profile, settle_match
from chessmatch.chess.validator import validate
from chessmatch.core.config import Settings
from chessmatch.core.exceptions import (
    ClaimMismatchError,
    GameAlreadyExistsError,
    MatchNotFoundError,
    RepositoryError,
    TimeExpiredError,
)
from chessmatch.core.models import MatchModel, ProfileModel
from chessmatch.core.shared_types import MatchId, PlayerId, Tick
from chessmatch.db.repository import Store

logger = logging.getLogger(__name__)


class ChessService:
    """
    Orchestration of layers for chess matches.

    Every state-changing call runs as one transaction on the store: the match and both profiles are read,
    changed, and written together, or not at all.
    """

    def __init__(
        self,
        store: Store,
        clock: Callable[[], Tick],
        settings: Optional[Settings] = None,
    ) -> None:
        self.store = store
        self.clock = clock
        self.settings = settings or Settings()

    # -- Profiles ---
    def initialize_profile(self, request: InitializeProfileRequest) -> ProfileResponse:
        """Create the caller's profile, or rename it if it already exists."""
        with self.store.transaction():
            profile = self._load_or_create_profile(request.player, self.clock())
            profile.rename(request.username)
            self.store.profiles.put(profile.to_model())

        logger.info("Profile %r initialized as %r", profile.player_id, profile.username)
        return self._create_profile_response(profile.to_model())

    # -- Stateless chess queries ---
    def verify_position(self, request: VerifyPositionRequest) -> VerificationResponse:
        """
        Classify a position.
        ----
        If the caller claims a status (e.g. "this is checkmate"), the claim must match what the engine finds.
        """
        position = engine.parse(request.fen)
        status = engine.classify(position)
        if request.claimed_status is not None and request.claimed_status != status:
            raise ClaimMismatchError(
                f"Invalid position claim: claimed {request.claimed_status}, actual {status}"
            )

        return VerificationResponse(
            status=status,
            is_check=engine.is_in_check(position),
            legal_moves=[move.to_uci() for move in engine.legal_moves(position)],
        )

    def validate_move(self, request: ValidateMoveRequest) -> MoveValidationResponse:
        """Read-only: is this move legal in this position, and where does it lead?"""
        validation = validate(
            request.fen, request.from_square, request.to_square, request.promotion
        )
        return MoveValidationResponse(
            is_valid=validation.is_valid,
            resulting_fen=validation.resulting_fen,
            error=validation.error,
            message=validation.message,
        )

    # -- Match transitions ---
    def create_match(self, request: CreateMatchRequest) -> MatchResponse:
        """The caller opens a match against the opponent, playing white."""
        with self.store.transaction():
            if self.store.matches.has(request.match_id):
                raise GameAlreadyExistsError(
                    f"Game already exists with ID: {request.match_id}"
                )

            now = self.clock()
            match = Match.new_match(
                match_id=request.match_id,
                white=request.player,
                black=request.opponent,
                tick=now,
                time_control=request.time_control,
                settings=self.settings,
            )

            # make sure both players have a profile, and register the match with them
            for player in (match.white, match.black):
                profile = self._load_or_create_profile(player, now)
                profile.join_match(match.match_id)
                self.store.profiles.put(profile.to_model())

            self.store.matches.put(match.to_model())

        logger.info(
            "Match %r created: %r (white) vs %r (black)",
            match.match_id,
            match.white,
            match.black,
        )
        return self._create_match_response(match.to_model())

    def submit_move(self, request: MoveRequest) -> MatchResponse:
        """
        Make a move attempt.

        NOTE running out of time is both a result and an error: the loss is committed first, then TimeExpiredError is raised.
        """
        timeout: Optional[TimeExpiredError] = None
        with self.store.transaction():
            match = self._fetch_match(request.match_id)
            try:
                match.submit_move(
                    request.player,
                    request.from_square,
                    request.to_square,
                    request.promote_to,
                    now=self.clock(),
                )
            except TimeExpiredError as exc:
                timeout = exc
            self._save(match)

        if timeout is not None:
            logger.info("Match %r lost on time by %r", match.match_id, request.player)
            raise timeout

        logger.debug(
            "Match %r: %r played %s",
            match.match_id,
            request.player,
            match.moves[-1].to_uci(),
        )
        return self._create_match_response(match.to_model())

    def override_status(self, request: OverrideStatusRequest) -> MatchResponse:
        """Force a result decided outside of the move path."""
        with self.store.transaction():
            match = self._fetch_match(request.match_id)
            match.override_status(request.player, request.status)
            self._save(match)
        return self._create_match_response(match.to_model())

    def resign(self, request: ResignRequest) -> MatchResponse:
        with self.store.transaction():
            match = self._fetch_match(request.match_id)
            match.resign(request.player)
            self._save(match)
        logger.info("Match %r: %r resigned", match.match_id, request.player)
        return self._create_match_response(match.to_model())

    def propose_draw(self, request: DrawProposalRequest) -> MatchResponse:
        with self.store.transaction():
            match = self._fetch_match(request.match_id)
            match.propose_draw(request.player)
            self._save(match)
        return self._create_match_response(match.to_model())

    def respond_draw(self, request: DrawResponseRequest) -> MatchResponse:
        with self.store.transaction():
            match = self._fetch_match(request.match_id)
            match.respond_draw(request.player, request.accept)
            self._save(match)
        return self._create_match_response(match.to_model())

    # -- Read-only queries ---
    def get_match(self, match_id: MatchId) -> Optional[MatchResponse]:
        model = self.store.matches.get(match_id)
        if model is None:
            return None
        return self._create_match_response(model)

    def get_matches_for_player(self, player: PlayerId) -> list[MatchResponse]:
        """Every match the player took part in (active or not), ordered by match id."""
        responses: list[MatchResponse] = []
        for match_id in self.store.matches.keys():
            model = self.store.matches.get(match_id)
            if model is not None and player in (model.white, model.black):
                responses.append(self._create_match_response(model))
        return responses

    def list_match_ids(self) -> list[MatchId]:
        return self.store.matches.keys()

    def get_clock_status(
        self, match_id: MatchId, now: Optional[Tick] = None
    ) -> ClockStatusResponse:
        """Clocks as they would stand if the side to move played at `now` (defaults to the current tick)."""
        match = self._fetch_match(match_id)
        status = match.clock_status(self.clock() if now is None else now)
        return ClockStatusResponse(
            match_id=match_id,
            white_remaining=status.white_remaining,
            black_remaining=status.black_remaining,
            side_to_move=status.side_to_move,
            expired=status.expired,
            move_count=status.move_count,
            elapsed_since_last_move=status.elapsed_since_last_move,
        )

    def get_profile(self, player: PlayerId) -> Optional[ProfileResponse]:
        model = self.store.profiles.get(player)
        if model is None:
            return None
        return self._create_profile_response(model)

    def list_players(self) -> list[PlayerId]:
        return self.store.profiles.keys()

    # -- Internal helpers --
    def _save(self, match: Match) -> None:
        """
        Write the match, settling the profiles first if it is over.

        NOTE every transition refuses to run on a finished match, so a terminal match reaching this point
        has just ended: the profiles get settled exactly once.
        """
        if match.outcome is not None:
            white = self._fetch_profile(match.white)
            black = self._fetch_profile(match.black)
            settle_match(white, black, match.match_id, match.outcome)
            self.store.profiles.put(white.to_model())
            self.store.profiles.put(black.to_model())
            logger.info(
                "Match %r finished: %s. Ratings now %r=%d, %r=%d",
                match.match_id,
                match.outcome,
                white.player_id,
                white.rating,
                black.player_id,
                black.rating,
            )
        self.store.matches.put(match.to_model())

    def _fetch_match(self, match_id: MatchId) -> Match:
        """Attempt to find the match in the repository and raise error if it fails."""
        model = self.store.matches.get(match_id)
        if model is None:
            raise MatchNotFoundError(f"Match with {match_id=} not found.")
        return Match.from_model(model, self.settings)

    def _fetch_profile(self, player: PlayerId) -> Profile:
        model = self.store.profiles.get(player)
        if model is None:
            raise RepositoryError(f"Profile for {player=} not found.")
        return Profile.from_model(model)

    def _load_or_create_profile(self, player: PlayerId, now: Tick) -> Profile:
        model = self.store.profiles.get(player)
        if model is not None:
            return Profile.from_model(model)
        logger.debug("Creating profile for %r", player)
        return Profile.new(player, now, rating=self.settings.default_rating)

    def _create_match_response(self, model: MatchModel) -> MatchResponse:
        return MatchResponse(
            match_id=model.match_id,
            white=model.white,
            black=model.black,
            current_fen=model.current_fen,
            moves=list(model.moves),
            status=model.status,
            side_to_move=model.side_to_move,
            white_time_remaining=model.white_time_remaining,
            black_time_remaining=model.black_time_remaining,
            move_count=model.move_count,
            created_tick=model.created_tick,
            last_move_tick=model.last_move_tick,
            time_control=model.time_control,
            draw_proposed_by=model.draw_proposed_by,
        )

    def _create_profile_response(self, model: ProfileModel) -> ProfileResponse:
        return ProfileResponse(
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
