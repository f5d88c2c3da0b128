"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, TaskId wrap UUIDs: never use bare UUID in domain logic
    - TaskRecord and UserRecord are frozen: cached snapshots cannot be mutated
    - All valid states encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Records are plain dataclasses, detached from the ORM session that loaded them
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
TaskId = NewType("TaskId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class AuthFailure(str, Enum):
    """Why an identity could not be established."""
    MISSING = "missing"
    INVALID = "invalid"
    EXPIRED = "expired"
    CREDENTIALS = "credentials"


class TaskQuery(str, Enum):
    """Query shapes that can be cached per owner."""
    ALL = "all"


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class TaskRecord:
    """Snapshot of one task as stored."""
    id: TaskId
    owner_id: UserId
    title: str
    completed: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class UserRecord:
    """Snapshot of one user. password_hash never leaves the service layer."""
    id: UserId
    username: str
    password_hash: str
    created_at: datetime


@dataclass(frozen=True)
class TaskPatch:
    """Partial task update. None means "leave unchanged"."""
    title: str | None = None
    completed: bool | None = None

    def is_empty(self) -> bool:
        return self.title is None and self.completed is None
