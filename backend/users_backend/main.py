"""Users API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UsersBackendError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Data access service created once on startup and closed on shutdown
    - Startup aborts when the store is unreachable (fatal, not recoverable)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from users_backend.api.error_handlers import register_error_handlers
from users_backend.api.routes import health, users
from users_backend.config import get_settings
from users_backend.core.domain_types import HealthStatus
from users_backend.infrastructure.database import close_db, init_db
from users_backend.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    service = init_db(settings)
    report = await service.health()
    if report.status is HealthStatus.DOWN:
        await close_db()
        raise RuntimeError(f"Database unreachable at startup: {report.error}")
    logger.info("Users API started")
    yield
    logger.info("Users API shutting down")
    await close_db()


app = FastAPI(
    title="Users API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)

register_error_handlers(app)
