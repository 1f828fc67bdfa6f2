"""Infrastructure Layer — store access and cross-cutting concerns.

Invariants:
    - Infrastructure owns every SQLAlchemy engine, session and statement
    - Store exceptions are mapped to core/errors.py types at this boundary

Design Decisions:
    - Single data access service over per-entity repositories: one table, one owner
"""
