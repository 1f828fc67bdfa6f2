"""Pydantic Schemas — entity and request/response models for the users table.

Invariants:
    - Schemas validate shape at the system boundary (types, non-negative age)
    - Business checks (empty names, email syntax) live in core/validate_user.py

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
