"""Pool Monitor — event-driven connection pool counters for the health probe.

Invariants:
    - open_connections = DBAPI connects - DBAPI closes (never negative)
    - in_use = checkouts - checkins; idle = open - in_use (both clamped at 0)
    - A closure counts as a lifetime closure when the connection outlived
      recycle_seconds, otherwise as an idle/overflow closure
    - Waits are recorded by the caller (DatabaseService) when a checkout began while
      checked-out plus in-flight acquisitions already filled the pool

Design Decisions:
    - Pool events over Pool.status() parsing: works for QueuePool, StaticPool and
      NullPool alike, so SQLite test engines report the same shape as asyncpg
    - threading.Lock: pool events fire from the sync side of the async engine
"""

import logging
import threading
import time

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine

from users_backend.core.pool_health import PoolStats

logger = logging.getLogger(__name__)


class PoolMonitor:
    """Accumulates pool statistics from SQLAlchemy pool events."""

    def __init__(self, recycle_seconds: int = -1, capacity: int | None = None):
        self._recycle_seconds = recycle_seconds
        self._capacity = capacity
        self._lock = threading.Lock()
        self._connected = 0
        self._closed = 0
        self._checked_out = 0
        self._checked_in = 0
        self._in_flight = 0
        self._wait_count = 0
        self._wait_duration = 0.0
        self._idle_closed = 0
        self._lifetime_closed = 0
        self._born: dict[int, float] = {}

    def attach(self, engine: AsyncEngine) -> None:
        """Register listeners on the engine's pool."""
        target = engine.sync_engine
        event.listen(target, "connect", self._on_connect)
        event.listen(target, "checkout", self._on_checkout)
        event.listen(target, "checkin", self._on_checkin)
        event.listen(target, "close", self._on_close)

    # ─── Event handlers ─────────────────────────────────────────

    def _on_connect(self, dbapi_connection, connection_record) -> None:
        with self._lock:
            self._connected += 1
            self._born[id(connection_record)] = time.monotonic()

    def _on_checkout(self, dbapi_connection, connection_record, connection_proxy) -> None:
        with self._lock:
            self._checked_out += 1

    def _on_checkin(self, dbapi_connection, connection_record) -> None:
        with self._lock:
            self._checked_in += 1

    def _on_close(self, dbapi_connection, connection_record) -> None:
        with self._lock:
            self._closed += 1
            born = self._born.pop(id(connection_record), None)
            age = time.monotonic() - born if born is not None else 0.0
            if 0 <= self._recycle_seconds < age:
                self._lifetime_closed += 1
            else:
                self._idle_closed += 1

    # ─── Wait tracking ──────────────────────────────────────────

    @property
    def saturated(self) -> bool:
        """True when checked-out plus still-acquiring connections fill the pool."""
        if self._capacity is None:
            return False
        with self._lock:
            return self._is_saturated()

    def _is_saturated(self) -> bool:
        in_use = self._checked_out - self._checked_in
        return in_use + self._in_flight >= self._capacity

    def begin_acquire(self) -> bool:
        """Register a pending checkout; returns True if it will have to queue."""
        with self._lock:
            saturated = self._capacity is not None and self._is_saturated()
            self._in_flight += 1
        return saturated

    def end_acquire(self) -> None:
        with self._lock:
            self._in_flight -= 1

    def record_wait(self, seconds: float) -> None:
        with self._lock:
            self._wait_count += 1
            self._wait_duration += seconds
        logger.debug(f"Pool checkout waited {seconds:.4f}s")

    # ─── Snapshot ───────────────────────────────────────────────

    def snapshot(self) -> PoolStats:
        with self._lock:
            open_connections = max(self._connected - self._closed, 0)
            in_use = max(self._checked_out - self._checked_in, 0)
            return PoolStats(
                open_connections=open_connections,
                in_use=in_use,
                idle=max(open_connections - in_use, 0),
                wait_count=self._wait_count,
                wait_duration=self._wait_duration,
                max_idle_closed=self._idle_closed,
                max_lifetime_closed=self._lifetime_closed,
            )
