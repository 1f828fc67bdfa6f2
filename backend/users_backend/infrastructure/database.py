"""Data Access Service — owns the async engine and runs every users-table statement.

Invariants:
    - One DatabaseService per process, created by init_db() and reused thereafter
    - Every operation is a single statement on its own session (no multi-statement work)
    - Every session auto-rolls-back on exception (no partial commits leak)
    - SQLAlchemy exceptions mapped to UsersBackendError subclasses (core/errors.py),
      chained so the store's own report stays on __cause__
    - health() never blocks longer than health_timeout seconds
    - After close(), health() reports down and other operations raise DatabaseError

Design Decisions:
    - Singleton initialized on startup: FastAPI lifespan manages lifecycle
      (ADR: no global import side effects)
    - expire_on_commit=False: prevents lazy-load issues in async context
    - No retries: transient connectivity failures surface immediately to the caller
    - Health failure policy: log-and-report by default; fatal_on_health_failure=True
      terminates the process (SystemExit)
    - create_user returns the persisted User; the caller's input is never mutated
"""

import asyncio
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from users_backend.config import Settings
from users_backend.core.domain_types import ServiceState
from users_backend.core.errors import (
    ConflictError, DatabaseError, ErrorContext, ResourceNotFoundError,
)
from users_backend.core.pool_health import assess_pool
from users_backend.infrastructure.pool_monitor import PoolMonitor
from users_backend.infrastructure.user_queries import (
    build_insert, build_select_by_id, build_update_by_id,
)
from users_backend.schemas.health import HealthReport
from users_backend.schemas.user import User, UserCreate, UserUpdate

logger = logging.getLogger(__name__)

DEFAULT_HEALTH_TIMEOUT = 1.0


class DatabaseService:
    """Creates, reads and patches users; reports store health and pool metrics."""

    def __init__(
        self,
        engine: AsyncEngine,
        monitor: PoolMonitor | None = None,
        health_timeout: float = DEFAULT_HEALTH_TIMEOUT,
        fatal_on_health_failure: bool = False,
        database_name: str | None = None,
    ):
        self.engine = engine
        self.monitor = monitor or PoolMonitor()
        self.monitor.attach(engine)
        self.health_timeout = health_timeout
        self.fatal_on_health_failure = fatal_on_health_failure
        self.database_name = database_name or engine.url.database
        self.state = ServiceState.OPEN
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "DatabaseService":
        engine = create_async_engine(
            settings.sqlalchemy_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_pre_ping=True,
            pool_recycle=settings.database_pool_recycle,
        )
        monitor = PoolMonitor(
            recycle_seconds=settings.database_pool_recycle,
            capacity=settings.database_pool_size + settings.database_max_overflow,
        )
        return cls(
            engine,
            monitor=monitor,
            health_timeout=settings.db_health_timeout_seconds,
            fatal_on_health_failure=settings.db_health_fatal,
        )

    @property
    def closed(self) -> bool:
        return self.state is ServiceState.CLOSED

    @asynccontextmanager
    async def session(self, operation: str) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback and store-error mapping."""
        if self.closed:
            raise DatabaseError("Database connection is closed", operation)
        session = self._session_factory()
        try:
            await self._acquire(session)
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}", extra={"operation": operation})
            raise ConflictError(
                "Integrity constraint violated", ErrorContext(operation=operation),
            ) from e
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}", extra={"operation": operation})
            raise DatabaseError("Connection or operational error", operation) from e
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}", extra={"operation": operation})
            raise DatabaseError("Database driver error", operation) from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}", extra={"operation": operation})
            raise DatabaseError("Database operation failed", operation) from e
        finally:
            await session.close()

    async def _acquire(self, session: AsyncSession) -> None:
        """Check out the session's connection, recording a wait if the pool was full."""
        saturated = self.monitor.begin_acquire()
        started = time.monotonic()
        try:
            await session.connection()
        finally:
            self.monitor.end_acquire()
        if saturated:
            self.monitor.record_wait(time.monotonic() - started)

    # ─── Health ─────────────────────────────────────────────────

    async def _ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def health(self) -> HealthReport:
        """Ping the store under a timeout and report pool statistics."""
        if self.closed:
            return self._health_failed("database connection is closed")
        try:
            await asyncio.wait_for(self._ping(), timeout=self.health_timeout)
        except asyncio.TimeoutError:
            return self._health_failed(
                f"ping timed out after {self.health_timeout}s",
            )
        except (SQLAlchemyError, OSError) as e:
            return self._health_failed(str(e))

        stats = self.monitor.snapshot()
        return HealthReport.up(stats, assess_pool(stats))

    def _health_failed(self, reason: str) -> HealthReport:
        report = HealthReport.down(reason)
        if self.fatal_on_health_failure:
            logger.critical(report.error)
            raise SystemExit(1)
        logger.error(report.error)
        return report

    # ─── Lifecycle ──────────────────────────────────────────────

    async def close(self) -> None:
        """Dispose the engine. A second call only disposes an empty pool again."""
        await self.engine.dispose()
        self.state = ServiceState.CLOSED
        logger.info(f"Disconnected from database: {self.database_name}")

    # ─── Users ──────────────────────────────────────────────────

    async def create_user(self, user: UserCreate) -> User:
        """Insert a new user under a freshly minted identity."""
        user_id = str(uuid.uuid4())
        logger.info(
            f"Creating user {user_id}",
            extra={"user_id": user_id, "operation": "create"},
        )
        async with self.session("create") as db:
            result = await db.execute(build_insert(user_id, user))
            row = result.mappings().one()
            await db.commit()
        return User.model_validate(dict(row))

    async def get_user_by_id(self, user_id: str) -> User:
        async with self.session("read") as db:
            result = await db.execute(build_select_by_id(user_id))
            row = result.mappings().one_or_none()
        if row is None:
            raise ResourceNotFoundError(
                "User", user_id, ErrorContext(user_id=user_id, operation="read"),
            )
        return User.model_validate(dict(row))

    async def update_user_by_id(self, user_id: str, update: UserUpdate) -> User:
        """Apply the present fields of update and return the post-update row."""
        statement = build_update_by_id(user_id, update)
        logger.info(
            f"Updating user {user_id}: {', '.join(update.present_fields())}",
            extra={"user_id": user_id, "operation": "update"},
        )
        async with self.session("update") as db:
            result = await db.execute(statement)
            row = result.mappings().one_or_none()
            await db.commit()
        if row is None:
            raise ResourceNotFoundError(
                "User", user_id, ErrorContext(user_id=user_id, operation="update"),
            )
        return User.model_validate(dict(row))


# Singleton (initialized on startup)
db_service: DatabaseService | None = None


def init_db(settings: Settings) -> DatabaseService:
    """Create the process-wide service, or return the existing one."""
    global db_service
    if db_service is None:
        db_service = DatabaseService.from_settings(settings)
    return db_service


async def close_db() -> None:
    global db_service
    if db_service is not None:
        await db_service.close()
        db_service = None


def get_db_service() -> DatabaseService:
    """FastAPI dependency for the data access service."""
    if not db_service:
        raise RuntimeError("Database not initialized")
    return db_service
