"""Database Infrastructure — declarative Base and schema bootstrap.

Invariants:
    - Single async engine per process (owned by infrastructure/database.py)
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL (ADR: native async, no thread pool overhead)
"""
