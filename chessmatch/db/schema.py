"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBMatch(Base):
    __tablename__ = "matches"
    id: Mapped[str] = mapped_column(primary_key=True)
    white: Mapped[str] = mapped_column(index=True)
    black: Mapped[str] = mapped_column(index=True)
    current_fen: Mapped[str]
    moves: Mapped[list[str]] = mapped_column(JSON, default=list)
    status: Mapped[str]
    side_to_move: Mapped[str]
    white_time_remaining: Mapped[int]
    black_time_remaining: Mapped[int]
    move_count: Mapped[int]
    created_tick: Mapped[int]
    last_move_tick: Mapped[int]
    time_control: Mapped[str] = mapped_column(default="")
    draw_proposed_by: Mapped[Optional[str]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)


class DBProfile(Base):
    __tablename__ = "profiles"
    id: Mapped[str] = mapped_column(primary_key=True)
    username: Mapped[str]
    rating: Mapped[int]
    games_played: Mapped[int] = mapped_column(default=0)
    wins: Mapped[int] = mapped_column(default=0)
    draws: Mapped[int] = mapped_column(default=0)
    losses: Mapped[int] = mapped_column(default=0)
    current_games: Mapped[list[str]] = mapped_column(JSON, default=list)
    created_tick: Mapped[int] = mapped_column(default=0)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
