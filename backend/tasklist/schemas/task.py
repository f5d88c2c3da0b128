"""Task Schemas: Pydantic models for the task endpoints.

Invariants:
    - TaskCreate.title: trimmed, 3-200 chars (same rule as the repository)
    - TaskUpdate accepts only title/completed; other keys (owner_id included) are dropped
    - TaskUpdate.title is not length-checked (update does not re-validate)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from tasklist.core.domain_types import TaskPatch
from tasklist.core.errors import InputValidationError
from tasklist.core.validation import normalize_title


class TaskCreate(BaseModel):
    title: str
    completed: bool = False

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        try:
            return normalize_title(v)
        except InputValidationError as e:
            raise ValueError(e.message) from None


class TaskUpdate(BaseModel):
    """Partial update. Fields left out stay as they are."""
    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    completed: bool | None = None

    def to_patch(self) -> TaskPatch:
        return TaskPatch(title=self.title, completed=self.completed)


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    title: str
    completed: bool
    created_at: datetime
    updated_at: datetime


class TaskEnvelope(BaseModel):
    """GET /tasks/{id} wraps the task with a confirmation message."""
    message: str = "Task retrieved successfully!"
    task: TaskResponse
