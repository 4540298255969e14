"""
Ticket, vote and role-request state constants.

Centralized definitions for the enumerated values stored in the database
to eliminate string literals scattered across the codebase.
"""

from typing import FrozenSet, Tuple

# Ticket status
STATUS_OPEN = "OPEN"
STATUS_IN_PROGRESS = "IN_PROGRESS"
STATUS_RESOLVED = "RESOLVED"
STATUS_CLOSED = "CLOSED"

TICKET_STATUSES: Tuple[str, ...] = (STATUS_OPEN, STATUS_IN_PROGRESS, STATUS_RESOLVED, STATUS_CLOSED)

# Ticket priority, lowest first
PRIORITY_LOW = "LOW"
PRIORITY_MEDIUM = "MEDIUM"
PRIORITY_HIGH = "HIGH"
PRIORITY_URGENT = "URGENT"

TICKET_PRIORITIES: Tuple[str, ...] = (PRIORITY_LOW, PRIORITY_MEDIUM, PRIORITY_HIGH, PRIORITY_URGENT)

# Votes
VOTE_UP = "UP"
VOTE_DOWN = "DOWN"

VOTE_TYPES: FrozenSet[str] = frozenset({VOTE_UP, VOTE_DOWN})

# Role upgrade requests
REQUEST_PENDING = "PENDING"
REQUEST_APPROVED = "APPROVED"
REQUEST_REJECTED = "REJECTED"

REQUEST_STATUSES: FrozenSet[str] = frozenset({REQUEST_PENDING, REQUEST_APPROVED, REQUEST_REJECTED})
REQUEST_DECISIONS: FrozenSet[str] = frozenset({REQUEST_APPROVED, REQUEST_REJECTED})


def is_valid_status(status: str) -> bool:
    """Return True if the provided ticket status is one of the supported values."""
    return status in TICKET_STATUSES


def is_valid_priority(priority: str) -> bool:
    return priority in TICKET_PRIORITIES


