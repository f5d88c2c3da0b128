"""API Dependencies: wiring of shared handles and identity into route handlers.

Invariants:
    - Token extraction reads only `Authorization: Bearer <token>`
    - PUBLIC operations never read or verify a token
    - Non-public operations verify the token before the handler body runs,
      so auth failures never touch the repository or the cache
    - Services are built per request from the request's DB session and the
      process-wide cache/token service

Design Decisions:
    - Access mode resolved through its own dependency so tests can override it
"""

from dataclasses import dataclass
from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from tasklist.config import get_settings
from tasklist.core.access_policy import (
    AccessScope, TaskAccessMode, TaskOperation, scope_for,
)
from tasklist.core.domain_types import UserId
from tasklist.infrastructure.database import get_db
from tasklist.infrastructure.password_hasher import PasswordHasher
from tasklist.infrastructure.task_cache import TaskCache, get_task_cache
from tasklist.infrastructure.token_service import TokenService, get_token_service
from tasklist.services.auth_service import AuthService
from tasklist.services.task_repository import SqlTaskRepository
from tasklist.services.task_service import TaskService
from tasklist.services.user_repository import SqlUserRepository

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class TaskAccess:
    """Identity granted to one task operation."""
    scope: AccessScope
    user_id: UserId | None = None

    @property
    def owner_filter(self) -> UserId | None:
        """Owner to restrict to, or None when the operation is not owner-scoped."""
        return self.user_id if self.scope is AccessScope.OWNER else None


def get_access_mode() -> TaskAccessMode:
    return get_settings().task_access_mode


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=get_settings().password_hash_rounds)


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    return credentials.credentials if credentials else None


def require_task_access(operation: TaskOperation):
    """Build the dependency that enforces the scope of one task operation."""

    def dependency(
        mode: TaskAccessMode = Depends(get_access_mode),
        token: str | None = Depends(get_bearer_token),
        tokens: TokenService = Depends(get_token_service),
    ) -> TaskAccess:
        scope = scope_for(operation, mode)
        if scope is AccessScope.PUBLIC:
            return TaskAccess(scope)
        return TaskAccess(scope, tokens.verify(token))

    return dependency


def get_task_service(
    db: AsyncSession = Depends(get_db),
    cache: TaskCache = Depends(get_task_cache),
) -> TaskService:
    return TaskService(SqlTaskRepository(db), cache)


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AuthService:
    return AuthService(SqlUserRepository(db), tokens, hasher)
