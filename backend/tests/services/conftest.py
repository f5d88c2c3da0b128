"""Service test fixtures: seeded users on the in-memory SQLite database."""

import pytest

from tasklist.core.domain_types import UserId
from tasklist.models.user import User


async def _seed(test_db, username: str) -> UserId:
    user = User(username=username, password_hash="not-a-real-hash")
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return UserId(user.id)


@pytest.fixture
async def alice_id(test_db) -> UserId:
    return await _seed(test_db, "alice")


@pytest.fixture
async def bob_id(test_db) -> UserId:
    return await _seed(test_db, "bob")
