"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO (database, cache lock)
"""

from typing import Any, Hashable, Protocol

from tasklist.core.domain_types import (
    TaskId, TaskPatch, TaskRecord, UserId, UserRecord,
)


class TaskRepository(Protocol):
    """Contract for task persistence. Every mutation commits one record."""
    async def create(
        self, owner_id: UserId, title: str, completed: bool = False,
    ) -> TaskRecord: ...
    async def get_by_id(self, task_id: TaskId) -> TaskRecord: ...
    async def list_by_owner(self, owner_id: UserId) -> list[TaskRecord]: ...
    async def update(self, task_id: TaskId, patch: TaskPatch) -> TaskRecord: ...
    async def delete(self, task_id: TaskId) -> TaskRecord: ...


class UserRepository(Protocol):
    """Contract for user persistence."""
    async def create(self, username: str, password_hash: str) -> UserRecord: ...
    async def get_by_username(self, username: str) -> UserRecord | None: ...


class TaskListCache(Protocol):
    """Contract for the owner-keyed read cache."""
    async def get(self, key: Hashable) -> Any | None: ...
    def generation(self, owner_id: UserId) -> int: ...
    async def put(
        self, key: Hashable, value: Any, generation: int | None = None,
    ) -> bool: ...
    async def invalidate(self, key: Hashable) -> bool: ...
    async def invalidate_owner(self, owner_id: UserId) -> int: ...
    async def invalidate_all(self) -> int: ...
