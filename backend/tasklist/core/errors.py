"""Error Hierarchy: typed, categorized exceptions for all task-list failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by every failure
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TaskListError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from tasklist.core.domain_types import AuthFailure


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    task_id: str | None = None
    details: list[dict[str, Any]] | None = None
    debug_info: dict[str, Any] | None = None


class TaskListError(Exception):
    """Base exception for all task-list errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    @property
    def headers(self) -> dict[str, str] | None:
        return None

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }
        if self.context.details:
            body["details"] = self.context.details
        return {"error": body}


# ─── Domain Errors (400-level) ──────────────────────────────────

class InputValidationError(TaskListError):
    """A request field failed validation."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.details = [{"field": field, "message": message}]
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field


_AUTH_CODES = {
    AuthFailure.MISSING: ("TOKEN_MISSING", "Access denied"),
    AuthFailure.INVALID: ("TOKEN_INVALID", "Invalid token"),
    AuthFailure.EXPIRED: ("TOKEN_EXPIRED", "Token expired"),
    AuthFailure.CREDENTIALS: ("INVALID_CREDENTIALS", "Invalid credentials"),
}


class AuthError(TaskListError):
    """Identity could not be established (token or credentials)."""
    def __init__(self, reason: AuthFailure, context: ErrorContext | None = None):
        code, message = _AUTH_CODES[reason]
        super().__init__(
            message, code, ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )
        self.reason = reason

    @property
    def headers(self) -> dict[str, str] | None:
        return {"WWW-Authenticate": "Bearer"}


class ResourceNotFoundError(TaskListError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
        code: str = "RESOURCE_NOT_FOUND",
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            code, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class TaskNotFoundError(ResourceNotFoundError):
    """No task exists with the given id (or it is not visible to the caller)."""
    def __init__(self, task_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.task_id = task_id
        super().__init__("Task", task_id, ctx, code="TASK_NOT_FOUND")


class ConflictError(TaskListError):
    """A unique field already holds the submitted value."""
    def __init__(
        self, message: str, field: str, context: ErrorContext | None = None,
        code: str = "CONFLICT",
    ):
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.field = field


class UsernameTakenError(ConflictError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Username already exists", "username", context, code="USERNAME_TAKEN",
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class InternalError(TaskListError):
    """Unexpected failure below the service layer."""
    def __init__(
        self,
        message: str = "An unexpected error occurred",
        code: str = "INTERNAL_ERROR",
        category: ErrorCategory = ErrorCategory.INTERNAL,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(
            message, code, category, ErrorSeverity.CRITICAL, context, http_status,
        )


class DatabaseError(InternalError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE, context, 503,
        )
        self.operation = operation
