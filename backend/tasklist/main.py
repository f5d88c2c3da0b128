"""Task List API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TaskListError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Startup aborts if the database cannot be reached
    - One database manager, one token service and one cache per process,
      built on startup and released on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py, registered here
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tasklist.api.error_handlers import register_error_handlers
from tasklist.api.routes import auth, health, tasks
from tasklist.config import get_settings
from tasklist.core.errors import DatabaseError
from tasklist.infrastructure.database import close_db, init_db
from tasklist.infrastructure.observability import setup_logging
from tasklist.infrastructure.task_cache import close_cache, init_cache
from tasklist.infrastructure.token_service import init_token_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    try:
        await manager.verify_connection()
    except DatabaseError:
        logger.critical("Database unreachable, aborting startup")
        await close_db()
        raise
    if settings.database_auto_create:
        await manager.create_schema()

    init_token_service(
        settings.jwt_secret.get_secret_value(),
        algorithm=settings.jwt_algorithm,
        ttl_seconds=settings.token_ttl_seconds,
    )
    cache = init_cache(
        settings.cache_ttl_seconds, settings.cache_sweep_interval_seconds,
    )
    cache.start()

    logger.info(
        f"Task List API started (access mode: {settings.task_access_mode.value})",
    )
    for route in app.routes:
        methods = ",".join(sorted(getattr(route, "methods", None) or []))
        if methods:
            logger.info(f"  {methods:<8} {route.path}")
    yield
    logger.info("Task List API shutting down")
    await close_cache()
    await close_db()


app = FastAPI(
    title="Task List API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(tasks.router)

register_error_handlers(app)
