"""Access Policy: which task operations need a token and which are owner-scoped.

Invariants:
    - list is always owner-scoped (a listing is "my tasks")
    - create is never public: a task needs exactly one owner, the verified caller
    - In OWNER_SCOPED mode every operation is owner-scoped
    - REFERENCE mode keeps get/delete public and update token-only, with no
      ownership check on any of the three

Design Decisions:
    - REFERENCE mode mirrors the reference service route guards with one
      departure: its create route took no token, here create is AUTHENTICATED
    - Scopes expressed as a lookup table, not scattered `if` checks in routes,
      so the asymmetry is visible in one place and testable
"""

from enum import Enum


class TaskOperation(str, Enum):
    LIST = "list"
    CREATE = "create"
    GET = "get"
    UPDATE = "update"
    DELETE = "delete"


class AccessScope(str, Enum):
    """How much identity an operation demands."""
    PUBLIC = "public"                # no token read at all
    AUTHENTICATED = "authenticated"  # token verified, no ownership check
    OWNER = "owner"                  # token verified, caller's tasks only


class TaskAccessMode(str, Enum):
    REFERENCE = "reference"
    OWNER_SCOPED = "owner_scoped"


_SCOPES: dict[TaskAccessMode, dict[TaskOperation, AccessScope]] = {
    TaskAccessMode.REFERENCE: {
        TaskOperation.LIST: AccessScope.OWNER,
        TaskOperation.CREATE: AccessScope.AUTHENTICATED,
        TaskOperation.GET: AccessScope.PUBLIC,
        TaskOperation.UPDATE: AccessScope.AUTHENTICATED,
        TaskOperation.DELETE: AccessScope.PUBLIC,
    },
    TaskAccessMode.OWNER_SCOPED: {
        op: AccessScope.OWNER for op in TaskOperation
    },
}


def scope_for(operation: TaskOperation, mode: TaskAccessMode) -> AccessScope:
    """Scope required for an operation under the given mode."""
    return _SCOPES[mode][operation]


def requires_token(operation: TaskOperation, mode: TaskAccessMode) -> bool:
    return scope_for(operation, mode) is not AccessScope.PUBLIC


def is_owner_scoped(operation: TaskOperation, mode: TaskAccessMode) -> bool:
    return scope_for(operation, mode) is AccessScope.OWNER
