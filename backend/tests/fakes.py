"""Test doubles shared across test packages."""

from dataclasses import replace
from datetime import datetime, timezone
from uuid import uuid4

from tasklist.core.domain_types import (
    TaskId, TaskPatch, TaskRecord, UserId,
)
from tasklist.core.errors import TaskNotFoundError
from tasklist.core.validation import normalize_title


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class InMemoryTaskRepository:
    """TaskRepository over a dict, counting every call."""

    def __init__(self):
        self.rows: dict[TaskId, TaskRecord] = {}
        self.calls: list[str] = []

    async def create(
        self, owner_id: UserId, title: str, completed: bool = False,
    ) -> TaskRecord:
        self.calls.append("create")
        now = datetime.now(timezone.utc)
        record = TaskRecord(
            id=TaskId(uuid4()), owner_id=owner_id,
            title=normalize_title(title), completed=completed,
            created_at=now, updated_at=now,
        )
        self.rows[record.id] = record
        return record

    async def get_by_id(self, task_id: TaskId) -> TaskRecord:
        self.calls.append("get_by_id")
        if task_id not in self.rows:
            raise TaskNotFoundError(str(task_id))
        return self.rows[task_id]

    async def list_by_owner(self, owner_id: UserId) -> list[TaskRecord]:
        self.calls.append("list_by_owner")
        return [t for t in self.rows.values() if t.owner_id == owner_id]

    async def update(self, task_id: TaskId, patch: TaskPatch) -> TaskRecord:
        self.calls.append("update")
        if task_id not in self.rows:
            raise TaskNotFoundError(str(task_id))
        current = self.rows[task_id]
        if patch.is_empty():
            return current
        updated = replace(
            current,
            title=patch.title if patch.title is not None else current.title,
            completed=(
                patch.completed if patch.completed is not None else current.completed
            ),
            updated_at=datetime.now(timezone.utc),
        )
        self.rows[task_id] = updated
        return updated

    async def delete(self, task_id: TaskId) -> TaskRecord:
        self.calls.append("delete")
        if task_id not in self.rows:
            raise TaskNotFoundError(str(task_id))
        return self.rows.pop(task_id)
