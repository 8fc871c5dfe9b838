"""Unit tests for chessmatch/core/config.py"""

import pytest
from pydantic import ValidationError

from chessmatch.core.config import Settings


def test_defaults() -> None:
    settings = Settings()
    assert settings.initial_clock_ticks == 172_800
    assert settings.grace_moves == 2
    assert settings.default_rating == 1200


@pytest.mark.parametrize(
    "move_count, expected", [(0, 600), (20, 600), (21, 60), (500, 60)]
)
def test_increment_for(move_count: int, expected: int) -> None:
    assert Settings().increment_for(move_count) == expected


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHESSMATCH_INITIAL_CLOCK_TICKS", "3600")
    monkeypatch.setenv("CHESSMATCH_DATABASE_URL", "sqlite:///:memory:")
    settings = Settings.from_env()
    assert settings.initial_clock_ticks == 3600
    assert settings.database_url == "sqlite:///:memory:"
    assert settings.late_increment == 60


def test_from_env_rejects_nonsense(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHESSMATCH_GRACE_MOVES", "-1")
    with pytest.raises(ValidationError):
        _ = Settings.from_env()
