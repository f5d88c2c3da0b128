"""Input Rules: pure checks for task titles, usernames, passwords and ids.

Invariants:
    - Titles are trimmed, then must be 3-200 characters
    - Usernames are trimmed, then must be 3-30 characters
    - Passwords are 6-72 characters and at most 72 UTF-8 bytes (bcrypt input limit)
    - A malformed task id is reported as "not found", never as a crash

Design Decisions:
    - Raise InputValidationError directly: the same rule backs the pydantic
      schemas and the repository, so both fail with one error shape
"""

from uuid import UUID

from tasklist.core.domain_types import TaskId
from tasklist.core.errors import InputValidationError, TaskNotFoundError

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 200
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_BYTES = 72


def normalize_title(title: str) -> str:
    """Trim and check a task title. Returns the stored form."""
    if not isinstance(title, str):
        raise InputValidationError("title must be a string", "title")
    value = title.strip()
    if not value:
        raise InputValidationError("title cannot be empty", "title")
    if len(value) < TITLE_MIN_LENGTH:
        raise InputValidationError(
            f"title must be at least {TITLE_MIN_LENGTH} characters", "title",
        )
    if len(value) > TITLE_MAX_LENGTH:
        raise InputValidationError(
            f"title must be at most {TITLE_MAX_LENGTH} characters", "title",
        )
    return value


def normalize_username(username: str) -> str:
    value = username.strip()
    if not USERNAME_MIN_LENGTH <= len(value) <= USERNAME_MAX_LENGTH:
        raise InputValidationError(
            f"username must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters",
            "username",
        )
    return value


def check_password(password: str) -> str:
    if len(password) < PASSWORD_MIN_LENGTH:
        raise InputValidationError(
            f"password must be at least {PASSWORD_MIN_LENGTH} characters", "password",
        )
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise InputValidationError(
            f"password must be at most {PASSWORD_MAX_BYTES} bytes", "password",
        )
    return password


def parse_task_id(raw: str | UUID) -> TaskId:
    """Parse an opaque task id. Anything unparseable cannot exist."""
    if isinstance(raw, UUID):
        return TaskId(raw)
    try:
        return TaskId(UUID(str(raw)))
    except ValueError:
        raise TaskNotFoundError(str(raw)) from None
