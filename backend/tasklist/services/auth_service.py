"""Auth Service: signup and login on top of the user repository.

Invariants:
    - signup validates username (trimmed, 3-30) and password (6-72) before any IO
    - Only the bcrypt hash is stored
    - login never says which half of the credentials was wrong
    - Both operations return a freshly issued token for the user's id
"""

import logging

from tasklist.core.domain_types import AuthFailure, UserRecord
from tasklist.core.errors import AuthError
from tasklist.core.repository_protocols import UserRepository
from tasklist.core.validation import check_password, normalize_username
from tasklist.infrastructure.password_hasher import PasswordHasher
from tasklist.infrastructure.token_service import TokenService

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(
        self,
        users: UserRepository,
        tokens: TokenService,
        hasher: PasswordHasher,
    ):
        self.users = users
        self.tokens = tokens
        self.hasher = hasher

    async def signup(self, username: str, password: str) -> tuple[str, UserRecord]:
        """Create a user and issue their first token."""
        username = normalize_username(username)
        check_password(password)
        password_hash = await self.hasher.hash_async(password)
        user = await self.users.create(username, password_hash)
        return self.tokens.issue(user.id), user

    async def login(self, username: str, password: str) -> str:
        user = await self.users.get_by_username(username.strip())
        if user is None or not await self.hasher.verify_async(
            password, user.password_hash,
        ):
            logger.info("Login rejected")
            raise AuthError(AuthFailure.CREDENTIALS)
        logger.info("Login succeeded", extra={"user_id": user.id})
        return self.tokens.issue(user.id)
