"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    board: Mapped[list[list[dict[str, Any]]]] = mapped_column(JSON)
    registered_players: Mapped[list[str]] = mapped_column(JSON, default=list)
    current_player: Mapped[int] = mapped_column(default=0)
    status: Mapped[str]
    board_initialized: Mapped[bool] = mapped_column(default=False)
    # index of the player left without a move once the game is finished
    winner: Mapped[Optional[int]]
    moves: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
