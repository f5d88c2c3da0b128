"""Token service tests: issue/verify and each failure reason."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from tasklist.core.domain_types import AuthFailure, UserId
from tasklist.core.errors import AuthError
from tasklist.infrastructure import token_service as token_module
from tasklist.infrastructure.token_service import TokenService

SECRET = "unit-test-secret-0123456789abcdefghijkl"


@pytest.fixture
def tokens():
    return TokenService(SECRET, ttl_seconds=3600)


def _reason(call) -> AuthFailure:
    with pytest.raises(AuthError) as exc_info:
        call()
    return exc_info.value.reason


def test_issued_token_verifies_to_same_user(tokens):
    user_id = UserId(uuid4())
    assert tokens.verify(tokens.issue(user_id)) == user_id


def test_token_embeds_only_subject_and_times(tokens):
    user_id = UserId(uuid4())
    payload = jwt.decode(tokens.issue(user_id), SECRET, algorithms=["HS256"])
    assert set(payload) == {"sub", "iat", "exp"}
    assert payload["sub"] == str(user_id)
    assert payload["exp"] - payload["iat"] == 3600


@pytest.mark.parametrize("token", [None, ""])
def test_missing_token(tokens, token):
    assert _reason(lambda: tokens.verify(token)) is AuthFailure.MISSING


def test_garbage_token_is_invalid(tokens):
    assert _reason(lambda: tokens.verify("not.a.jwt")) is AuthFailure.INVALID


def test_token_signed_with_other_key_is_invalid(tokens):
    other = TokenService("another-secret-0123456789abcdefghijklmn")
    token = other.issue(UserId(uuid4()))
    assert _reason(lambda: tokens.verify(token)) is AuthFailure.INVALID


def test_expired_token(tokens):
    issued = datetime.now(timezone.utc) - timedelta(hours=2)
    token = tokens.issue(UserId(uuid4()), now=issued)
    assert _reason(lambda: tokens.verify(token)) is AuthFailure.EXPIRED


def test_token_without_expiry_is_invalid(tokens):
    token = jwt.encode({"sub": str(uuid4())}, SECRET, algorithm="HS256")
    assert _reason(lambda: tokens.verify(token)) is AuthFailure.INVALID


def test_non_uuid_subject_is_invalid(tokens):
    token = jwt.encode(
        {"sub": "alice", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        SECRET, algorithm="HS256",
    )
    assert _reason(lambda: tokens.verify(token)) is AuthFailure.INVALID


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        TokenService("")


def test_get_token_service_requires_initialization(monkeypatch):
    monkeypatch.setattr(token_module, "token_service", None)
    with pytest.raises(RuntimeError):
        token_module.get_token_service()
    service = token_module.init_token_service(SECRET, ttl_seconds=60)
    assert token_module.get_token_service() is service
