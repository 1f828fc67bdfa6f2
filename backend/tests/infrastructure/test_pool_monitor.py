"""Pool Monitor — event counters, closure classification and wait tracking."""

import asyncio
from types import SimpleNamespace

from sqlalchemy.ext.asyncio import create_async_engine

from users_backend.db.session import create_schema
from users_backend.infrastructure.database import DatabaseService
from users_backend.infrastructure.pool_monitor import PoolMonitor


def _record():
    return SimpleNamespace()


def test_fresh_monitor_reports_zeroes():
    stats = PoolMonitor().snapshot()
    assert stats.open_connections == 0
    assert stats.in_use == 0
    assert stats.idle == 0
    assert stats.wait_count == 0


def test_connect_checkout_checkin_counts():
    monitor = PoolMonitor()
    a, b = _record(), _record()
    monitor._on_connect(None, a)
    monitor._on_connect(None, b)
    monitor._on_checkout(None, a, None)

    stats = monitor.snapshot()
    assert stats.open_connections == 2
    assert stats.in_use == 1
    assert stats.idle == 1

    monitor._on_checkin(None, a)
    assert monitor.snapshot().in_use == 0


def test_young_connection_close_counts_as_idle_closure():
    monitor = PoolMonitor(recycle_seconds=3600)
    record = _record()
    monitor._on_connect(None, record)
    monitor._on_close(None, record)

    stats = monitor.snapshot()
    assert stats.max_idle_closed == 1
    assert stats.max_lifetime_closed == 0
    assert stats.open_connections == 0


def test_expired_connection_close_counts_as_lifetime_closure():
    monitor = PoolMonitor(recycle_seconds=60)
    record = _record()
    monitor._on_connect(None, record)
    monitor._born[id(record)] -= 120
    monitor._on_close(None, record)

    assert monitor.snapshot().max_lifetime_closed == 1


def test_saturation_and_wait_recording():
    monitor = PoolMonitor(capacity=1)
    record = _record()
    assert not monitor.saturated

    monitor._on_connect(None, record)
    monitor._on_checkout(None, record, None)
    assert monitor.saturated

    monitor.record_wait(0.25)
    monitor.record_wait(0.5)
    stats = monitor.snapshot()
    assert stats.wait_count == 2
    assert stats.wait_duration == 0.75


def test_unbounded_pool_never_saturated():
    monitor = PoolMonitor(capacity=None)
    monitor._on_checkout(None, _record(), None)
    assert not monitor.saturated


def test_in_flight_acquire_counts_toward_saturation():
    monitor = PoolMonitor(capacity=1)

    assert monitor.begin_acquire() is False
    assert monitor.saturated
    assert monitor.begin_acquire() is True

    monitor.end_acquire()
    monitor.end_acquire()
    assert not monitor.saturated


def test_unbounded_pool_never_queues():
    monitor = PoolMonitor(capacity=None)
    assert monitor.begin_acquire() is False
    assert monitor.begin_acquire() is False


async def test_attached_monitor_sees_real_checkouts(new_user):
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    service = DatabaseService(engine)
    try:
        await create_schema(engine)
        await service.create_user(new_user())
        stats = service.monitor.snapshot()
    finally:
        await service.close()

    assert stats.open_connections >= 1
    assert stats.in_use == 0


async def test_concurrent_creates_on_full_pool_record_waits(tmp_path, new_user):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'users.db'}",
        pool_size=1, max_overflow=0,
    )
    service = DatabaseService(engine, monitor=PoolMonitor(capacity=1))
    try:
        await create_schema(engine)
        await asyncio.gather(*(
            service.create_user(new_user(email=f"user{i}@example.com"))
            for i in range(20)
        ))
        stats = service.monitor.snapshot()
    finally:
        await service.close()

    assert stats.wait_count > 0
    assert stats.wait_duration >= 0.0
    assert stats.open_connections == 1
    assert stats.in_use == 0
