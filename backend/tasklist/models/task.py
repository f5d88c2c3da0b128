"""Task ORM: one item on a user's list.

Invariants:
    - Always belongs to exactly one User (owner_id FK, non-nullable)
    - owner_id is never changed after insert
    - seq increases with every insert: listing by seq is insertion order
    - updated_at refreshed by the repository on every mutation
    - title is unbounded Text: update does not re-check title length, so the
      column must accept whatever update stores

Design Decisions:
    - Integer seq as primary key, public UUID id as a unique column: ordering
      cannot depend on timestamp resolution
    - owner_id indexed: the list query filters on it
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tasklist.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Task(Base):
    """Task entity."""
    __tablename__ = "tasks"

    seq: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, unique=True, default=uuid.uuid4,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )

    owner: Mapped["User"] = relationship("User", back_populates="tasks")
