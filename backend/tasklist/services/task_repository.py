"""Task Repository: SQL-backed task persistence.

Invariants:
    - create() validates the trimmed title (3-200 chars) before touching the DB
    - Each mutation commits exactly one row in its own transaction
    - list_by_owner() returns insertion order (seq) and only that owner's rows
    - get_by_id/update/delete are unscoped; ownership is decided by the caller
    - update() does not re-validate title and never touches owner_id;
      an empty patch is not a mutation and leaves updated_at alone
    - Missing rows raise TaskNotFoundError, including on a second delete

Design Decisions:
    - Returns frozen TaskRecord snapshots, not ORM objects: results can be
      cached and outlive the session that loaded them
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tasklist.core.domain_types import (
    TaskId, TaskPatch, TaskRecord, UserId,
)
from tasklist.core.errors import TaskNotFoundError
from tasklist.core.validation import normalize_title
from tasklist.models.task import Task

logger = logging.getLogger(__name__)


def as_utc(value: datetime) -> datetime:
    """SQLite drops tzinfo on the way back; stored values are always UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_task_record(task: Task) -> TaskRecord:
    return TaskRecord(
        id=TaskId(task.id),
        owner_id=UserId(task.owner_id),
        title=task.title,
        completed=task.completed,
        created_at=as_utc(task.created_at),
        updated_at=as_utc(task.updated_at),
    )


class SqlTaskRepository:
    """TaskRepository implementation over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _load(self, task_id: TaskId) -> Task:
        result = await self.db.execute(select(Task).where(Task.id == task_id))
        task = result.scalar_one_or_none()
        if task is None:
            raise TaskNotFoundError(str(task_id))
        return task

    async def create(
        self, owner_id: UserId, title: str, completed: bool = False,
    ) -> TaskRecord:
        clean_title = normalize_title(title)
        now = datetime.now(timezone.utc)
        task = Task(
            owner_id=owner_id,
            title=clean_title,
            completed=completed,
            created_at=now,
            updated_at=now,
        )
        self.db.add(task)
        await self.db.commit()
        await self.db.refresh(task)
        logger.info(
            "Task created", extra={"task_id": task.id, "user_id": owner_id},
        )
        return to_task_record(task)

    async def get_by_id(self, task_id: TaskId) -> TaskRecord:
        return to_task_record(await self._load(task_id))

    async def list_by_owner(self, owner_id: UserId) -> list[TaskRecord]:
        result = await self.db.execute(
            select(Task).where(Task.owner_id == owner_id).order_by(Task.seq),
        )
        return [to_task_record(t) for t in result.scalars().all()]

    async def update(self, task_id: TaskId, patch: TaskPatch) -> TaskRecord:
        task = await self._load(task_id)
        if patch.is_empty():
            return to_task_record(task)
        if patch.title is not None:
            task.title = patch.title
        if patch.completed is not None:
            task.completed = patch.completed
        task.updated_at = datetime.now(timezone.utc)
        await self.db.commit()
        logger.info("Task updated", extra={"task_id": task_id})
        return to_task_record(task)

    async def delete(self, task_id: TaskId) -> TaskRecord:
        task = await self._load(task_id)
        record = to_task_record(task)
        await self.db.delete(task)
        await self.db.commit()
        logger.info("Task deleted", extra={"task_id": task_id})
        return record
