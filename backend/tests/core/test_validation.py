"""Input rule tests: titles, usernames, passwords, task ids."""

from uuid import uuid4

import pytest

from tasklist.core.errors import InputValidationError, TaskNotFoundError
from tasklist.core.validation import (
    check_password, normalize_title, normalize_username, parse_task_id,
)


# --- Titles -------------------------------------------------------------------

def test_two_character_title_is_rejected():
    with pytest.raises(InputValidationError) as exc_info:
        normalize_title("ab")
    assert exc_info.value.field == "title"
    assert exc_info.value.code == "VALIDATION_ERROR"


def test_three_character_title_is_accepted():
    assert normalize_title("abc") == "abc"


def test_title_is_trimmed_before_length_check():
    with pytest.raises(InputValidationError):
        normalize_title("  ab  ")
    assert normalize_title("  Buy milk ") == "Buy milk"


def test_blank_title_is_rejected():
    with pytest.raises(InputValidationError, match="empty"):
        normalize_title("   ")


def test_overlong_title_is_rejected():
    with pytest.raises(InputValidationError):
        normalize_title("x" * 201)


# --- Usernames & passwords ----------------------------------------------------

def test_username_trimmed_and_bounded():
    assert normalize_username("  alice ") == "alice"
    with pytest.raises(InputValidationError):
        normalize_username("al")
    with pytest.raises(InputValidationError):
        normalize_username("a" * 31)


def test_password_minimum_length():
    assert check_password("secret1") == "secret1"
    with pytest.raises(InputValidationError) as exc_info:
        check_password("short")
    assert exc_info.value.field == "password"


def test_password_byte_limit_counts_utf8_bytes():
    # 36 characters but 72 bytes
    assert check_password("é" * 36)
    with pytest.raises(InputValidationError):
        check_password("é" * 37)


# --- Task ids -----------------------------------------------------------------

def test_parse_task_id_accepts_uuid_string():
    uid = uuid4()
    assert parse_task_id(str(uid)) == uid
    assert parse_task_id(uid) == uid


def test_malformed_task_id_is_not_found():
    with pytest.raises(TaskNotFoundError) as exc_info:
        parse_task_id("not-a-uuid")
    assert exc_info.value.http_status == 404
