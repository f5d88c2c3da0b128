"""ORM Models: SQLAlchemy declarative models for users and tasks.

Invariants:
    - All models inherit from Base (db/base.py)
    - Task rows are scoped by owner_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from tasklist.models.user import User  # noqa: F401
from tasklist.models.task import Task  # noqa: F401
