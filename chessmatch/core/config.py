"""
Runtime settings.

Defaults mirror a correspondence-style time control: roughly two days per side at one tick per second,
with a generous increment during the opening and a small one afterwards.
Every field can be overridden through a CHESSMATCH_<FIELD NAME> environment variable.
"""

import os
from typing import Self

from pydantic import BaseModel, Field

ENV_PREFIX = "CHESSMATCH_"


class Settings(BaseModel):
    initial_clock_ticks: int = Field(default=172_800, gt=0)
    early_increment: int = Field(default=600, ge=0)
    late_increment: int = Field(default=60, ge=0)
    # increments of `early_increment` are granted while move_count <= increment_threshold
    increment_threshold: int = Field(default=20, ge=0)
    # clocks are not tracked until this many half-moves have been played
    grace_moves: int = Field(default=2, ge=0)
    default_rating: int = Field(default=1200, ge=100)
    database_url: str = "sqlite:///chessmatch.db"

    @classmethod
    def from_env(cls) -> Self:
        """Build settings, letting environment variables override the defaults."""
        overrides = {
            name: os.environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in os.environ
        }
        return cls(**overrides)

    def increment_for(self, move_count: int) -> int:
        """Ticks added to the mover's clock after a successful move."""
        if move_count <= self.increment_threshold:
            return self.early_increment
        return self.late_increment
