"""User ORM: an account that owns tasks.

Invariants:
    - username is unique (unique index): concurrent signups cannot both insert
    - password_hash holds a bcrypt hash, never the plaintext password

Design Decisions:
    - Uniqueness enforced by the database, not only by a pre-insert lookup
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tasklist.db.base import Base


class User(Base):
    """Registered user."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    username: Mapped[str] = mapped_column(
        String(30), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    tasks: Mapped[list["Task"]] = relationship(
        "Task", back_populates="owner",
        cascade="all, delete-orphan", lazy="noload",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
