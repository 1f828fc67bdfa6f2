"""Pool Health Assessment — tests for advisory message rules.

Tests cover:
    - Quiet pool is healthy
    - Each threshold triggers its message
    - Later rules override earlier ones
"""

from users_backend.core.pool_health import (
    HEALTHY_MESSAGE,
    HEAVY_LOAD_CONNECTIONS,
    HIGH_WAIT_COUNT,
    PoolStats,
    assess_pool,
)


def test_quiet_pool_is_healthy():
    assert assess_pool(PoolStats()) == HEALTHY_MESSAGE


def test_heavy_load_above_high_water_mark():
    stats = PoolStats(open_connections=HEAVY_LOAD_CONNECTIONS + 1)
    assert assess_pool(stats) == "The database is experiencing heavy load."


def test_at_high_water_mark_is_still_healthy():
    stats = PoolStats(open_connections=HEAVY_LOAD_CONNECTIONS)
    assert assess_pool(stats) == HEALTHY_MESSAGE


def test_high_wait_count():
    stats = PoolStats(open_connections=10, wait_count=HIGH_WAIT_COUNT + 1)
    assert "wait events" in assess_pool(stats)


def test_idle_closures_relative_to_open_connections():
    assert "idle connections" in assess_pool(
        PoolStats(open_connections=4, max_idle_closed=3),
    )
    assert assess_pool(
        PoolStats(open_connections=4, max_idle_closed=2),
    ) == HEALTHY_MESSAGE


def test_idle_closures_use_integer_half():
    # 5 // 2 == 2, so 3 closures trip the rule
    assert "idle connections" in assess_pool(
        PoolStats(open_connections=5, max_idle_closed=3),
    )


def test_lifetime_closures_override_everything():
    stats = PoolStats(
        open_connections=50, wait_count=5000,
        max_idle_closed=30, max_lifetime_closed=30,
    )
    assert "max lifetime" in assess_pool(stats)


def test_wait_count_overrides_heavy_load():
    stats = PoolStats(open_connections=50, wait_count=HIGH_WAIT_COUNT + 1)
    assert "wait events" in assess_pool(stats)
