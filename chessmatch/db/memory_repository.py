"""Implementation of the Store keeping every record in plain dictionaries (embedding / tests / prototyping)"""

import logging
from contextlib import contextmanager
from copy import deepcopy
from typing import Callable, Generic, Iterator, TypeVar

from chessmatch.core.models import MatchModel, ProfileModel

logger = logging.getLogger(__name__)

Record = TypeVar("Record", MatchModel, ProfileModel)


class InMemoryRepository(Generic[Record]):
    """
    Records are copied on the way in and on the way out.
    Mutating a record you got from `get` therefore never changes what is stored.
    """

    def __init__(self, key_of: Callable[[Record], str]) -> None:
        self._key_of = key_of
        self._records: dict[str, Record] = {}

    def get(self, key: str) -> Record | None:
        record = self._records.get(key)
        return deepcopy(record) if record is not None else None

    def put(self, record: Record) -> None:
        self._records[self._key_of(record)] = deepcopy(record)

    def has(self, key: str) -> bool:
        return key in self._records

    def keys(self) -> list[str]:
        return sorted(self._records)


class InMemoryStore:
    """Matches and profiles in memory. A transaction restores the previous records if it fails."""

    def __init__(self) -> None:
        self.matches: InMemoryRepository[MatchModel] = InMemoryRepository(
            lambda match: match.match_id
        )
        self.profiles: InMemoryRepository[ProfileModel] = InMemoryRepository(
            lambda profile: profile.player_id
        )

    @contextmanager
    def transaction(self) -> Iterator[None]:
        # stored records are never mutated in place (see InMemoryRepository), so shallow copies are snapshots
        matches_before = dict(self.matches._records)
        profiles_before = dict(self.profiles._records)
        try:
            yield
        except BaseException:
            logger.debug("Rolling back in-memory transaction")
            self.matches._records = matches_before
            self.profiles._records = profiles_before
            raise
