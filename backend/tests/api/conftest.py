"""API test fixtures: async DB, shared singletons, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB
    - db_manager, token_service and task_cache patched with test instances
      (the lifespan does not run under ASGITransport)
"""

import pytest
from httpx import ASGITransport, AsyncClient

import tasklist.infrastructure.database as db_module
import tasklist.infrastructure.task_cache as cache_module
import tasklist.infrastructure.token_service as token_module
from tasklist.infrastructure.database import DatabaseSessionManager, get_db
from tasklist.infrastructure.task_cache import TaskCache
from tasklist.infrastructure.token_service import TokenService
from tasklist.main import app
from tests.fakes import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock, monkeypatch):
    cache = TaskCache(ttl_seconds=600, clock=clock)
    monkeypatch.setattr(cache_module, "task_cache", cache)
    return cache


@pytest.fixture
def tokens(monkeypatch):
    service = TokenService(
        "api-test-secret-0123456789abcdefghijklmn", ttl_seconds=3600,
    )
    monkeypatch.setattr(token_module, "token_service", service)
    return service


@pytest.fixture
async def client(test_engine, test_session_factory, cache, tokens, monkeypatch):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    monkeypatch.setattr(db_module, "db_manager", fake_manager)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


async def _signup(client, username: str, password: str = "secret1") -> dict:
    res = await client.post(
        "/api/v1/auth/signup", json={"username": username, "password": password},
    )
    assert res.status_code == 201, res.text
    return res.json()


@pytest.fixture
async def alice(client) -> dict:
    """Signed-up user: {"token", "user", "headers"}."""
    body = await _signup(client, "alice")
    return {**body, "headers": {"Authorization": f"Bearer {body['token']}"}}


@pytest.fixture
async def bob(client) -> dict:
    body = await _signup(client, "bob")
    return {**body, "headers": {"Authorization": f"Bearer {body['token']}"}}
