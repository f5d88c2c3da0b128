"""Password Hasher: salted one-way hashing of credentials with bcrypt.

Invariants:
    - Only hashes are stored; plaintext is never compared
    - verify() returns False for malformed hashes or over-long input, never raises
    - Async wrappers run bcrypt in a worker thread (bcrypt is CPU-bound)
"""

import asyncio
import logging

import bcrypt

from tasklist.core.validation import PASSWORD_MAX_BYTES

logger = logging.getLogger(__name__)


class PasswordHasher:
    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")

    def verify(self, password: str, password_hash: str) -> bool:
        encoded = password.encode("utf-8")
        if len(encoded) > PASSWORD_MAX_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, password_hash.encode("ascii"))
        except (ValueError, UnicodeEncodeError):
            logger.warning("Stored password hash is malformed")
            return False

    async def hash_async(self, password: str) -> str:
        return await asyncio.to_thread(self.hash, password)

    async def verify_async(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self.verify, password, password_hash)
