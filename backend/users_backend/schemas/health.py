"""Health Schema — status snapshot returned by the data access service.

Invariants:
    - status == "up" → message and all pool metrics populated, error is None
    - status == "down" → error populated ("db down: ..."), metrics None
"""

from pydantic import BaseModel

from users_backend.core.domain_types import HealthStatus
from users_backend.core.pool_health import PoolStats


class HealthReport(BaseModel):
    status: HealthStatus
    message: str | None = None
    error: str | None = None
    open_connections: int | None = None
    in_use: int | None = None
    idle: int | None = None
    wait_count: int | None = None
    wait_duration: float | None = None
    max_idle_closed: int | None = None
    max_lifetime_closed: int | None = None

    @classmethod
    def up(cls, stats: PoolStats, message: str) -> "HealthReport":
        return cls(
            status=HealthStatus.UP,
            message=message,
            open_connections=stats.open_connections,
            in_use=stats.in_use,
            idle=stats.idle,
            wait_count=stats.wait_count,
            wait_duration=stats.wait_duration,
            max_idle_closed=stats.max_idle_closed,
            max_lifetime_closed=stats.max_lifetime_closed,
        )

    @classmethod
    def down(cls, reason: str) -> "HealthReport":
        return cls(status=HealthStatus.DOWN, error=f"db down: {reason}")
