"""SQLAlchemy ORM models — single source of truth for the database schema.

Learn: Declarative ORM mapping with SQLAlchemy 2.0 style (Mapped[] + mapped_column).
Each class = one table. Relationships, constraints, and indexes defined here.
Alembic auto-generates migrations by comparing these models to the actual DB.

Key concepts:
- Generic Uuid / Enum types so the same models run on PostgreSQL and SQLite
- Uniqueness lives in the schema (uq_users_username), never in a pre-check
- Timestamps default on the Python side so they are loaded after flush
  without a refresh round-trip
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_uuid() -> uuid.UUID:
    return uuid.uuid4()


class BoardStatus(str, enum.Enum):
    """Visibility flag on a board post. Only these two values exist."""

    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"


class User(Base):
    """A registered user.

    Learn: username is the login handle and the token subject. It is
    case-sensitive and never changes after sign-up. password_hash is a
    bcrypt string ("$2b$..."), salt included.
    """

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=new_uuid
    )
    username: Mapped[str] = mapped_column(String(20), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )

    def __repr__(self) -> str:
        # Keep password_hash out of logs and tracebacks.
        return f"<User id={self.id} username={self.username!r}>"


class Board(Base):
    """A board post, owned by exactly one user.

    Learn: Integer ids give us insertion order for free, which is the
    order list_by_owner returns. owner_id is set once at creation and
    is the filter on every owner-scoped query. There is deliberately no
    relationship() to User: only the owner's id travels with a board.
    """

    __tablename__ = "boards"
    __table_args__ = (
        Index("idx_boards_owner", "owner_id", "id"),
        # Never hand out a deleted board's id again (SQLite reuses rowids otherwise).
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[BoardStatus] = mapped_column(
        Enum(BoardStatus, native_enum=False, length=20, name="board_status"),
        nullable=False,
        default=BoardStatus.PUBLIC,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )
