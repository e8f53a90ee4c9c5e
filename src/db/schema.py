"""Database tables / schema"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    """One play-the-computer session: the `{board, turn, history}` record plus what is needed to replay it."""

    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    starting_fen: Mapped[str]
    board: Mapped[str]
    turn: Mapped[str]
    history: Mapped[list[str]] = mapped_column(JSON, default=list)
    skill_level: Mapped[int]
    computer_color: Mapped[str]
    status: Mapped[str]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
