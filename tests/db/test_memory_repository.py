"""Unit tests for chessmatch/db/memory_repository.py"""

import pytest

from chessmatch.core.models import ProfileModel
from chessmatch.db.memory_repository import InMemoryRepository, InMemoryStore


@pytest.fixture
def repo() -> InMemoryRepository[ProfileModel]:
    return InMemoryRepository(lambda profile: profile.player_id)


def test_put_and_get(repo: InMemoryRepository[ProfileModel]) -> None:
    model = ProfileModel(player_id="alice", username="Alice", rating=1200)
    repo.put(model)
    assert repo.get("alice") == model
    assert repo.has("alice")
    assert repo.get("bob") is None
    assert not repo.has("bob")


def test_records_are_copied(repo: InMemoryRepository[ProfileModel]) -> None:
    """Neither the caller's object nor a fetched one is the stored record"""
    model = ProfileModel(player_id="alice", username="Alice", rating=1200)
    repo.put(model)
    model.current_games.append("m1")

    found = repo.get("alice")
    assert found is not None
    assert found.current_games == []
    found.rating = 0
    assert repo.get("alice") == ProfileModel(player_id="alice", username="Alice", rating=1200)


def test_keys_are_sorted(repo: InMemoryRepository[ProfileModel]) -> None:
    for player in ("carol", "alice", "bob"):
        repo.put(ProfileModel(player_id=player, username=player, rating=1200))
    assert repo.keys() == ["alice", "bob", "carol"]


def test_transaction_keeps_writes(memory_store: InMemoryStore) -> None:
    with memory_store.transaction():
        memory_store.profiles.put(ProfileModel(player_id="alice", username="Alice", rating=1200))
    assert memory_store.profiles.has("alice")


def test_transaction_rolls_back(memory_store: InMemoryStore) -> None:
    memory_store.profiles.put(ProfileModel(player_id="alice", username="Alice", rating=1200))

    with pytest.raises(RuntimeError):
        with memory_store.transaction():
            memory_store.profiles.put(ProfileModel(player_id="alice", username="Alice", rating=1500))
            memory_store.profiles.put(ProfileModel(player_id="bob", username="Bob", rating=1200))
            raise RuntimeError("mock failure")

    profile = memory_store.profiles.get("alice")
    assert profile is not None
    assert profile.rating == 1200
    assert memory_store.profiles.keys() == ["alice"]
