"""Task service tests: cache-aside reads, invalidating writes, owner filtering.

Tests cover:
    - Second listing within the TTL is a cache hit (one repository read)
    - Every mutation makes the owner's next listing fresh
    - Invalidation follows the task's owner, not the caller
    - A listing read overtaken by a mutation is not cached
    - Owner filter hides other owners' tasks as not found
"""

import asyncio
from uuid import uuid4

import pytest

from tasklist.core.domain_types import TaskId, TaskPatch, UserId
from tasklist.core.errors import InputValidationError, TaskNotFoundError
from tasklist.infrastructure.task_cache import TaskCache
from tasklist.services.task_service import TaskService
from tests.fakes import FakeClock, InMemoryTaskRepository

ALICE = UserId(uuid4())
BOB = UserId(uuid4())


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repo():
    return InMemoryTaskRepository()


@pytest.fixture
def service(repo, clock):
    return TaskService(repo, TaskCache(ttl_seconds=600, clock=clock))


# --- Read path ----------------------------------------------------------------

async def test_second_listing_is_served_from_cache(service, repo):
    await service.create_task(ALICE, "Buy milk")
    repo.calls.clear()

    first = await service.list_tasks(ALICE)
    second = await service.list_tasks(ALICE)

    assert second is first
    assert repo.calls == ["list_by_owner"]


async def test_empty_listing_is_cached_too(service, repo):
    assert await service.list_tasks(ALICE) == ()
    assert await service.list_tasks(ALICE) == ()
    assert repo.calls.count("list_by_owner") == 1


async def test_listing_refetched_after_ttl(service, repo, clock):
    task = await service.create_task(ALICE, "Buy milk")
    await service.list_tasks(ALICE)
    clock.advance(601)
    tasks = await service.list_tasks(ALICE)
    assert [t.id for t in tasks] == [task.id]
    assert repo.calls.count("list_by_owner") == 2


async def test_listing_is_scoped_to_owner(service):
    task = await service.create_task(ALICE, "Buy milk")
    assert task in await service.list_tasks(ALICE)
    assert task not in await service.list_tasks(BOB)


# --- Write path ---------------------------------------------------------------

async def test_create_invalidates_owner_listing(service):
    assert await service.list_tasks(ALICE) == ()
    task = await service.create_task(ALICE, "Buy milk")
    assert await service.list_tasks(ALICE) == (task,)


async def test_update_invalidates_owner_listing(service):
    task = await service.create_task(ALICE, "Buy milk")
    await service.list_tasks(ALICE)
    await service.update_task(task.id, TaskPatch(completed=True))
    (listed,) = await service.list_tasks(ALICE)
    assert listed.completed is True


async def test_delete_invalidates_owner_listing(service):
    task = await service.create_task(ALICE, "Buy milk")
    await service.list_tasks(ALICE)
    await service.delete_task(task.id)
    assert await service.list_tasks(ALICE) == ()


async def test_invalidation_targets_task_owner_not_caller(service):
    task = await service.create_task(ALICE, "Buy milk")
    await service.list_tasks(ALICE)
    await service.list_tasks(BOB)
    # unscoped update: no owner filter, caller identity irrelevant
    await service.update_task(task.id, TaskPatch(title="Buy oat milk"))
    (listed,) = await service.list_tasks(ALICE)
    assert listed.title == "Buy oat milk"


class GatedListRepository(InMemoryTaskRepository):
    """list_by_owner takes its snapshot, then waits until released."""

    def __init__(self):
        super().__init__()
        self.snapshot_taken = asyncio.Event()
        self.release = asyncio.Event()

    async def list_by_owner(self, owner_id):
        snapshot = await super().list_by_owner(owner_id)
        self.snapshot_taken.set()
        await self.release.wait()
        return snapshot


@pytest.mark.parametrize("mutation", ["update", "delete", "create"])
async def test_listing_overtaken_by_mutation_is_not_cached(clock, mutation):
    repo = GatedListRepository()
    service = TaskService(repo, TaskCache(ttl_seconds=600, clock=clock))
    task = await service.create_task(ALICE, "Buy milk")

    listing = asyncio.create_task(service.list_tasks(ALICE))
    await repo.snapshot_taken.wait()
    if mutation == "update":
        await service.update_task(task.id, TaskPatch(completed=True))
    elif mutation == "delete":
        await service.delete_task(task.id)
    else:
        await service.create_task(ALICE, "Buy bread")
    repo.release.set()
    assert await listing == (task,)

    fresh = await service.list_tasks(ALICE)
    assert fresh != (task,)
    assert repo.calls.count("list_by_owner") == 2


async def test_failed_create_leaves_cache_untouched(service, repo):
    await service.list_tasks(ALICE)
    with pytest.raises(InputValidationError):
        await service.create_task(ALICE, "ab")
    await service.list_tasks(ALICE)
    assert repo.calls.count("list_by_owner") == 1


async def test_second_delete_is_not_found(service):
    task = await service.create_task(ALICE, "Buy milk")
    await service.delete_task(task.id)
    with pytest.raises(TaskNotFoundError):
        await service.delete_task(task.id)


async def test_update_missing_task_is_not_found(service):
    with pytest.raises(TaskNotFoundError):
        await service.update_task(TaskId(uuid4()), TaskPatch(completed=True))


# --- Owner filter -------------------------------------------------------------

async def test_get_without_owner_filter_is_unscoped(service):
    task = await service.create_task(ALICE, "Buy milk")
    assert await service.get_task(task.id) == task


async def test_owner_filter_hides_foreign_tasks(service, repo):
    task = await service.create_task(ALICE, "Buy milk")
    with pytest.raises(TaskNotFoundError):
        await service.get_task(task.id, owner_id=BOB)
    with pytest.raises(TaskNotFoundError):
        await service.update_task(task.id, TaskPatch(completed=True), owner_id=BOB)
    with pytest.raises(TaskNotFoundError):
        await service.delete_task(task.id, owner_id=BOB)
    assert "update" not in repo.calls
    assert "delete" not in repo.calls


async def test_owner_filter_allows_own_tasks(service):
    task = await service.create_task(ALICE, "Buy milk")
    updated = await service.update_task(
        task.id, TaskPatch(completed=True), owner_id=ALICE,
    )
    assert updated.completed is True
    await service.delete_task(task.id, owner_id=ALICE)
