"""User Repository: SQL-backed user persistence.

Invariants:
    - Username uniqueness is enforced by the unique index; a lost
      check-then-insert race surfaces as UsernameTakenError, not a 500
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tasklist.core.domain_types import UserId, UserRecord
from tasklist.core.errors import UsernameTakenError
from tasklist.models.user import User
from tasklist.services.task_repository import as_utc

logger = logging.getLogger(__name__)


def to_user_record(user: User) -> UserRecord:
    return UserRecord(
        id=UserId(user.id),
        username=user.username,
        password_hash=user.password_hash,
        created_at=as_utc(user.created_at),
    )


class SqlUserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_username(self, username: str) -> UserRecord | None:
        result = await self.db.execute(
            select(User).where(User.username == username),
        )
        user = result.scalar_one_or_none()
        return to_user_record(user) if user else None

    async def create(self, username: str, password_hash: str) -> UserRecord:
        if await self.get_by_username(username) is not None:
            raise UsernameTakenError()
        user = User(username=username, password_hash=password_hash)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info("Concurrent signup lost the username race")
            raise UsernameTakenError() from None
        await self.db.refresh(user)
        logger.info("User created", extra={"user_id": user.id})
        return to_user_record(user)
