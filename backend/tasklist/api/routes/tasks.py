"""Task Routes: list/create/get/update/delete for the caller's task list.

Invariants:
    - Every handler declares its operation's access dependency; the scope table
      lives in core/access_policy.py, not here
    - GET /tasks is always owner-scoped and served through the cache
    - DELETE answers 204 with an empty body; a second delete is 404
    - Path ids are opaque strings: malformed ids are 404, not 400

Design Decisions:
    - Thin routes delegate to TaskService
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from tasklist.api.dependencies import (
    TaskAccess, get_task_service, require_task_access,
)
from tasklist.core.access_policy import TaskOperation
from tasklist.core.validation import parse_task_id
from tasklist.schemas.task import (
    TaskCreate, TaskEnvelope, TaskResponse, TaskUpdate,
)
from tasklist.services.task_service import TaskService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    access: TaskAccess = Depends(require_task_access(TaskOperation.LIST)),
    service: TaskService = Depends(get_task_service),
):
    """List all tasks owned by the caller."""
    tasks = await service.list_tasks(access.user_id)
    return [TaskResponse.model_validate(t) for t in tasks]


@router.post(
    "", response_model=TaskResponse, status_code=status.HTTP_201_CREATED,
)
async def create_task(
    body: TaskCreate,
    access: TaskAccess = Depends(require_task_access(TaskOperation.CREATE)),
    service: TaskService = Depends(get_task_service),
):
    """Create a task owned by the caller."""
    task = await service.create_task(access.user_id, body.title, body.completed)
    return TaskResponse.model_validate(task)


@router.get("/{task_id}", response_model=TaskEnvelope)
async def get_task(
    task_id: str,
    access: TaskAccess = Depends(require_task_access(TaskOperation.GET)),
    service: TaskService = Depends(get_task_service),
):
    task = await service.get_task(parse_task_id(task_id), access.owner_filter)
    return TaskEnvelope(task=TaskResponse.model_validate(task))


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    body: TaskUpdate,
    access: TaskAccess = Depends(require_task_access(TaskOperation.UPDATE)),
    service: TaskService = Depends(get_task_service),
):
    """Apply a partial update (title and/or completed)."""
    task = await service.update_task(
        parse_task_id(task_id), body.to_patch(), access.owner_filter,
    )
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: str,
    access: TaskAccess = Depends(require_task_access(TaskOperation.DELETE)),
    service: TaskService = Depends(get_task_service),
):
    await service.delete_task(parse_task_id(task_id), access.owner_filter)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
