"""Token Service: issues and verifies signed, time-limited identity tokens (JWT).

Invariants:
    - A token carries only sub (user id), iat and exp
    - verify() returns the embedded user id and nothing else
    - Missing → AuthError(MISSING), bad signature/malformed/bad sub →
      AuthError(INVALID), past exp → AuthError(EXPIRED)
    - Tokens are never stored server-side; there is no revocation

Design Decisions:
    - Secret, algorithm and TTL injected at construction from Settings,
      never read from module constants
    - Pure computation: no IO, nothing awaits
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from tasklist.core.domain_types import AuthFailure, UserId
from tasklist.core.errors import AuthError

logger = logging.getLogger(__name__)


class TokenService:
    """Stateless JWT issuer/verifier bound to one signing key."""

    def __init__(
        self, secret: str, algorithm: str = "HS256", ttl_seconds: int = 3600,
    ):
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self.ttl = timedelta(seconds=ttl_seconds)

    def issue(self, user_id: UserId, now: datetime | None = None) -> str:
        """Sign a token for user_id that expires ttl after `now`."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str | None) -> UserId:
        """Return the user id embedded in a valid, unexpired token."""
        if not token:
            raise AuthError(AuthFailure.MISSING)
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthError(AuthFailure.EXPIRED) from None
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected token: {e}")
            raise AuthError(AuthFailure.INVALID) from None
        try:
            return UserId(UUID(payload["sub"]))
        except (TypeError, ValueError):
            raise AuthError(AuthFailure.INVALID) from None


# Singleton (initialized on startup)
token_service: TokenService | None = None


def init_token_service(
    secret: str, algorithm: str = "HS256", ttl_seconds: int = 3600,
) -> TokenService:
    global token_service
    token_service = TokenService(secret, algorithm, ttl_seconds)
    return token_service


def get_token_service() -> TokenService:
    """FastAPI dependency for the process-wide token service."""
    if not token_service:
        raise RuntimeError("Token service not initialized")
    return token_service
