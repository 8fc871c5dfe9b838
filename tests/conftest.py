"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from chessmatch.core.config import Settings
from chessmatch.db.memory_repository import InMemoryStore
from chessmatch.db.schema import Base
from chessmatch.services.chess_service import ChessService

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


class TickClock:
    """Mock the host's logical time source (block height or similar). Tests move it forward by hand."""

    def __init__(self, start: int = 0) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ticks: int) -> int:
        self.now += ticks
        return self.now


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def tick_clock() -> TickClock:
    return TickClock(start=100)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def service(
    memory_store: InMemoryStore, tick_clock: TickClock, settings: Settings
) -> ChessService:
    return ChessService(memory_store, tick_clock, settings)
