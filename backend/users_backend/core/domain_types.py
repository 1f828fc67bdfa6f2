"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps the string identity minted at creation — never reused, never updated
    - UPDATABLE_FIELDS is the single source of truth for SET-clause order
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)


# ─── Field Order ─────────────────────────────────────────────────

UPDATABLE_FIELDS: tuple[str, ...] = ("first_name", "last_name", "age", "email")


# ─── Enums ───────────────────────────────────────────────────────

class HealthStatus(str, Enum):
    """Store reachability as reported by the health probe."""
    UP = "up"
    DOWN = "down"


class ServiceState(str, Enum):
    """Data access service lifecycle — open until close() is called."""
    OPEN = "open"
    CLOSED = "closed"
