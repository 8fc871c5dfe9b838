"""
The Match class is the entrypoint into the domain layer for the service layer.
It enforces the rules of a single match (turn order, clocks, draw negotiation, resignation) and decides
when the match is over. It knows nothing about storage or about the players' profiles: the service
loads a Match from a MatchModel, calls one transition, and settles the profiles if the match just ended.
"""

from dataclasses import dataclass, field
from typing import Optional, Self

import chessmatch.chess.position as engine
from chessmatch.chess.moves import Move
from chessmatch.chess.position import Position
from chessmatch.chess.validator import validate
from chessmatch.core.config import Settings
from chessmatch.core.exceptions import (
    CannotRespondToOwnProposalError,
    DrawAlreadyProposedError,
    GameNotActiveError,
    GameStateError,
    InvalidRequestError,
    NoDrawProposalError,
    NotParticipantError,
    NotYourTurnError,
    TimeExpiredError,
)
from chessmatch.core.models import MatchModel
from chessmatch.core.shared_types import (
    Color,
    MatchId,
    MatchOutcome,
    MatchStatus,
    PlayerId,
    PositionStatus,
    Tick,
)


@dataclass(frozen=True)
class ClockStatus:
    """Snapshot of both clocks at a given tick, with the running clock already charged."""

    white_remaining: int
    black_remaining: int
    side_to_move: Color
    expired: bool
    move_count: int
    elapsed_since_last_move: int


@dataclass
class Match:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    match_id: MatchId
    players: dict[Color, PlayerId]
    position: Position
    status: MatchStatus
    side_to_move: Color
    clocks: dict[Color, int]
    move_count: int
    created_tick: Tick
    last_move_tick: Tick
    time_control: str = ""
    moves: list[Move] = field(default_factory=list)
    draw_proposed_by: Optional[PlayerId] = None
    settings: Settings = field(default_factory=Settings, repr=False, compare=False)

    @classmethod
    def new_match(
        cls,
        match_id: MatchId,
        white: PlayerId,
        black: PlayerId,
        tick: Tick,
        time_control: str = "",
        settings: Optional[Settings] = None,
    ) -> Self:
        """Creator plays white. Both clocks start with the full budget, white to move."""
        if white == black:
            raise InvalidRequestError(f"Player {white!r} cannot play against themself.")

        settings = settings or Settings()
        return cls(
            match_id=match_id,
            players={Color.WHITE: white, Color.BLACK: black},
            position=engine.starting_position(),
            status=MatchStatus.ACTIVE,
            side_to_move=Color.WHITE,
            clocks={
                Color.WHITE: settings.initial_clock_ticks,
                Color.BLACK: settings.initial_clock_ticks,
            },
            move_count=0,
            created_tick=tick,
            last_move_tick=tick,
            time_control=time_control,
            settings=settings,
        )

    @classmethod
    def from_model(cls, model: MatchModel, settings: Optional[Settings] = None) -> Self:
        """Define how to construct a Match from the information the Service layer actually has"""

        # Validation
        if model.status not in {status.value for status in MatchStatus}:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(MatchStatus)}"
            )
        if model.side_to_move not in {color.value for color in Color}:
            raise GameStateError(f"Invalid color to move: {model.side_to_move!r}")

        return cls(
            match_id=model.match_id,
            players={Color.WHITE: model.white, Color.BLACK: model.black},
            position=engine.parse(model.current_fen),
            status=MatchStatus(model.status),
            side_to_move=Color(model.side_to_move),
            clocks={
                Color.WHITE: model.white_time_remaining,
                Color.BLACK: model.black_time_remaining,
            },
            move_count=model.move_count,
            created_tick=model.created_tick,
            last_move_tick=model.last_move_tick,
            time_control=model.time_control,
            moves=[Move.from_uci(uci) for uci in model.moves],
            draw_proposed_by=model.draw_proposed_by,
            settings=settings or Settings(),
        )

    def to_model(self) -> MatchModel:
        """Encode back into a format the Service layer uses"""
        return MatchModel(
            match_id=self.match_id,
            white=self.players[Color.WHITE],
            black=self.players[Color.BLACK],
            current_fen=engine.encode(self.position),
            status=self.status.value,
            side_to_move=self.side_to_move.value,
            white_time_remaining=self.clocks[Color.WHITE],
            black_time_remaining=self.clocks[Color.BLACK],
            move_count=self.move_count,
            created_tick=self.created_tick,
            last_move_tick=self.last_move_tick,
            time_control=self.time_control,
            moves=[move.to_uci() for move in self.moves],
            draw_proposed_by=self.draw_proposed_by,
        )

    @property
    def white(self) -> PlayerId:
        return self.players[Color.WHITE]

    @property
    def black(self) -> PlayerId:
        return self.players[Color.BLACK]

    @property
    def is_active(self) -> bool:
        return self.status == MatchStatus.ACTIVE

    @property
    def outcome(self) -> Optional[MatchOutcome]:
        """None while the match is still being played."""
        if not self.status.is_terminal:
            return None
        return MatchOutcome(self.status.value)

    def color_of(self, player: PlayerId) -> Color:
        """Color of the player's pieces. Raises if the player is not in this match."""
        for color, name in self.players.items():
            if name == player:
                return color
        raise NotParticipantError(
            f"Player {player!r} is not taking part in match {self.match_id!r}."
        )

    def submit_move(
        self,
        player: PlayerId,
        from_square: str,
        to_square: str,
        promotion: Optional[str],
        now: Tick,
    ) -> None:
        """
        Attempt a move
        -----

        1. make sure the player is in the match, the match is on, and it is their turn
        2. charge the time spent thinking to the player's clock (outside the grace window).
            Out of time? --> the match is lost on time and TimeExpiredError is raised. The move is not looked at.
        3. validate the move; rejections raise the matching error
        4. update the position / move log and check for an end condition
        5. grant the increment (only if the match goes on), update counters and pass the turn

        NOTE: the instance is left in its terminal state when TimeExpiredError is raised. The caller
        decides to persist it. Every other exception leaves the instance in a state that must be discarded.
        """
        color = self.color_of(player)
        self._assert_active()
        self._assert_your_turn(color)

        # clock accounting
        if self._is_clock_tracked():
            elapsed = self.elapsed_since_last_move(now)
            if elapsed >= self.clocks[color]:
                self.clocks[color] = 0
                self._finish(MatchOutcome.win_for(color.opponent))
                raise TimeExpiredError(
                    f"Time expired - {player!r} has lost match {self.match_id!r}."
                )
            self.clocks[color] -= elapsed

        # legality
        validation = validate(engine.encode(self.position), from_square, to_square, promotion)
        validation.raise_for_error()
        assert validation.resulting_fen is not None and validation.move is not None

        # update position / move log
        self.moves.append(validation.move)
        self.position = engine.parse(validation.resulting_fen)

        # end condition
        self._update_status_after_move(color)

        # time increment for the player who just moved
        if self.is_active and self._is_clock_tracked():
            self.clocks[color] += self.settings.increment_for(self.move_count)

        self.move_count += 1
        self.last_move_tick = now
        if self.is_active:
            self.side_to_move = color.opponent

    def override_status(self, player: PlayerId, new_status: MatchStatus) -> None:
        """
        Force a result decided outside the move path (adjudication, an agreed result, a time-forfeit claim).

        NOTE ACTIVE -> ACTIVE is accepted and changes nothing. A finished match cannot be reopened or re-decided.
        """
        self.color_of(player)
        self._assert_active()
        if new_status == MatchStatus.ACTIVE:
            return
        self._finish(MatchOutcome(new_status.value))

    def resign(self, player: PlayerId) -> None:
        """The opponent gets the win."""
        color = self.color_of(player)
        self._assert_active()
        self._finish(MatchOutcome.win_for(color.opponent))

    def propose_draw(self, player: PlayerId) -> None:
        """
        Offer a draw.

        NOTE there is a single slot: a proposal by the opponent replaces the pending one. It is NOT an acceptance.
        """
        self.color_of(player)
        self._assert_active()
        if self.draw_proposed_by == player:
            raise DrawAlreadyProposedError(
                f"Player {player!r} already proposed a draw in match {self.match_id!r}."
            )
        self.draw_proposed_by = player

    def respond_draw(self, player: PlayerId, accept: bool) -> None:
        """Accept (match ends in a draw) or decline (match goes on). The proposal is cleared either way."""
        self.color_of(player)
        self._assert_active()
        if self.draw_proposed_by is None:
            raise NoDrawProposalError(f"No draw proposal pending in match {self.match_id!r}.")
        if self.draw_proposed_by == player:
            raise CannotRespondToOwnProposalError(
                "Cannot respond to your own draw proposal."
            )

        self.draw_proposed_by = None
        if accept:
            self._finish(MatchOutcome.DRAW)

    # -- QUERIES ---
    def elapsed_since_last_move(self, now: Tick) -> int:
        """Ticks since the last move. A clock running backwards counts as no time spent."""
        return max(now - self.last_move_tick, 0)

    def clock_status(self, now: Tick) -> ClockStatus:
        """Same deduction as the move path, without changing anything."""
        elapsed = self.elapsed_since_last_move(now)
        remaining = dict(self.clocks)
        expired = False
        if self._is_clock_tracked() and self.is_active:
            remaining[self.side_to_move] = max(remaining[self.side_to_move] - elapsed, 0)
            expired = remaining[self.side_to_move] == 0

        return ClockStatus(
            white_remaining=remaining[Color.WHITE],
            black_remaining=remaining[Color.BLACK],
            side_to_move=self.side_to_move,
            expired=expired,
            move_count=self.move_count,
            elapsed_since_last_move=elapsed,
        )

    # -- PRIVATE HELPERS ---
    def _assert_active(self) -> None:
        if not self.is_active:
            raise GameNotActiveError(
                f"Match {self.match_id!r} is not active. status: {self.status}"
            )

    def _assert_your_turn(self, color: Color) -> None:
        """You must wait for your turn before making a move."""
        if color != self.side_to_move:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {self.players[self.side_to_move]!r} to make a move first."
            )

    def _is_clock_tracked(self) -> bool:
        """Grace window: no clock accounting until both players made their first move."""
        return self.move_count >= self.settings.grace_moves

    def _update_status_after_move(self, mover: Color) -> None:
        """
        Performs checks to see if the match has ended and changes status accordingly.

        NOTE the position has already been updated. The side to move in it is the opponent of the mover.
        """
        position_status = engine.classify(self.position)
        if position_status == PositionStatus.CHECKMATE:
            self._finish(MatchOutcome.win_for(mover))
        elif position_status in (PositionStatus.STALEMATE, PositionStatus.DRAW):
            self._finish(MatchOutcome.DRAW)

    def _finish(self, outcome: MatchOutcome) -> None:
        self.status = outcome.to_status()
        self.draw_proposed_by = None
