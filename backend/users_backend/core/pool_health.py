"""Pool Health Assessment — turns connection-pool counters into an advisory message.

Invariants:
    - assess_pool is PURE: same PoolStats in, same message out
    - Rules evaluated in fixed order; a later matching rule overrides an earlier one
    - Closure thresholds are relative to open connections (integer half)

Design Decisions:
    - Thresholds as module constants: single source of truth, asserted by tests
    - PoolStats frozen dataclass: snapshot value, safe to hand across tasks
"""

from dataclasses import dataclass


HEALTHY_MESSAGE = "It's healthy"
HEAVY_LOAD_CONNECTIONS: int = 40
HIGH_WAIT_COUNT: int = 1000


@dataclass(frozen=True)
class PoolStats:
    """Point-in-time connection pool counters."""
    open_connections: int = 0
    in_use: int = 0
    idle: int = 0
    wait_count: int = 0
    wait_duration: float = 0.0  # seconds, cumulative
    max_idle_closed: int = 0
    max_lifetime_closed: int = 0


def assess_pool(stats: PoolStats) -> str:
    """Pick the advisory message for the given pool snapshot."""
    message = HEALTHY_MESSAGE

    if stats.open_connections > HEAVY_LOAD_CONNECTIONS:
        message = "The database is experiencing heavy load."

    if stats.wait_count > HIGH_WAIT_COUNT:
        message = (
            "The database has a high number of wait events, "
            "indicating potential bottlenecks."
        )

    if stats.max_idle_closed > stats.open_connections // 2:
        message = (
            "Many idle connections are being closed, "
            "consider revising the connection pool settings."
        )

    if stats.max_lifetime_closed > stats.open_connections // 2:
        message = (
            "Many connections are being closed due to max lifetime, "
            "consider increasing max lifetime or revising the connection usage pattern."
        )

    return message
