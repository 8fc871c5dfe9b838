"""Protocol repositories: the store is owned by the host (SQLAlchemy / in-memory / a contract's key-value storage etc.)"""

from contextlib import AbstractContextManager
from typing import Protocol

from chessmatch.core.models import MatchModel, ProfileModel
from chessmatch.core.shared_types import MatchId, PlayerId


class MatchRepository(Protocol):
    """Match records, keyed by match id."""

    def get(self, match_id: MatchId) -> MatchModel | None:
        """Get match by ID, if record exists."""
        ...

    def put(self, match: MatchModel) -> None:
        """Create or overwrite the record for match.match_id."""
        ...

    def has(self, match_id: MatchId) -> bool: ...

    def keys(self) -> list[MatchId]:
        """All match ids, ascending."""
        ...


class ProfileRepository(Protocol):
    """Profile records, keyed by player id."""

    def get(self, player_id: PlayerId) -> ProfileModel | None: ...

    def put(self, profile: ProfileModel) -> None: ...

    def has(self, player_id: PlayerId) -> bool: ...

    def keys(self) -> list[PlayerId]:
        """All player ids, ascending."""
        ...


class Store(Protocol):
    """
    Persistence layer orchestration
    ----

    Every write made inside `transaction()` is committed together when the block exits normally,
    and none of them is when it exits with an exception.
    """

    @property
    def matches(self) -> MatchRepository: ...

    @property
    def profiles(self) -> ProfileRepository: ...

    def transaction(self) -> AbstractContextManager[None]: ...
