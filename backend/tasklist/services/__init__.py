"""Services Layer: repositories and the auth/task orchestration on top of them.

Invariants:
    - Routes call services, services call repositories and the cache
    - Repositories are the only modules that issue SQL

Design Decisions:
    - Repositories take the request's AsyncSession, services take repositories
      and the shared cache: both are cheap to build per request
"""
