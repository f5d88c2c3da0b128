"""Task Service: cache-aside reads and invalidating writes over the task repository.

Invariants:
    - list_tasks() checks the cache first; on miss it reads the repository and
      stores the snapshot before returning it
    - create/update/delete invalidate the affected owner's cached listings
      before returning, so that owner's next listing sees the change
    - The affected owner is the task's owner_id, not the caller
    - A listing fill is tagged with the owner's cache generation taken before
      the repository read; a mutation invalidating in between discards it
    - With owner_id given, get/update/delete treat other owners' tasks as
      missing (TaskNotFoundError)

Design Decisions:
    - Snapshots cached as tuples of frozen records: a cache hit hands back the
      exact object stored by the miss that filled it
    - Invalidation after the commit: a failed write leaves the cache untouched
"""

import logging

from tasklist.core.domain_types import (
    TaskId, TaskPatch, TaskQuery, TaskRecord, UserId,
)
from tasklist.core.errors import TaskNotFoundError
from tasklist.core.repository_protocols import TaskListCache, TaskRepository
from tasklist.infrastructure.task_cache import TaskCacheKey

logger = logging.getLogger(__name__)


class TaskService:
    """Orchestrates the task repository and the listing cache."""

    def __init__(self, repository: TaskRepository, cache: TaskListCache):
        self.repository = repository
        self.cache = cache

    async def list_tasks(self, owner_id: UserId) -> tuple[TaskRecord, ...]:
        key = TaskCacheKey(owner_id, TaskQuery.ALL)
        cached = await self.cache.get(key)
        if cached is not None:
            return cached
        generation = self.cache.generation(owner_id)
        tasks = tuple(await self.repository.list_by_owner(owner_id))
        await self.cache.put(key, tasks, generation=generation)
        return tasks

    async def create_task(
        self, owner_id: UserId, title: str, completed: bool = False,
    ) -> TaskRecord:
        task = await self.repository.create(owner_id, title, completed)
        await self.cache.invalidate_owner(task.owner_id)
        return task

    async def get_task(
        self, task_id: TaskId, owner_id: UserId | None = None,
    ) -> TaskRecord:
        task = await self.repository.get_by_id(task_id)
        self._check_owner(task, owner_id)
        return task

    async def update_task(
        self, task_id: TaskId, patch: TaskPatch, owner_id: UserId | None = None,
    ) -> TaskRecord:
        if owner_id is not None:
            self._check_owner(await self.repository.get_by_id(task_id), owner_id)
        task = await self.repository.update(task_id, patch)
        await self.cache.invalidate_owner(task.owner_id)
        return task

    async def delete_task(
        self, task_id: TaskId, owner_id: UserId | None = None,
    ) -> TaskRecord:
        if owner_id is not None:
            self._check_owner(await self.repository.get_by_id(task_id), owner_id)
        task = await self.repository.delete(task_id)
        await self.cache.invalidate_owner(task.owner_id)
        return task

    @staticmethod
    def _check_owner(task: TaskRecord, owner_id: UserId | None) -> None:
        if owner_id is not None and task.owner_id != owner_id:
            logger.info(
                "Task hidden from non-owner",
                extra={"task_id": task.id, "user_id": owner_id},
            )
            raise TaskNotFoundError(str(task.id))
