"""
Domain-split SQLAlchemy models.

This package exposes `Base`, `now_utc`, and all ORM classes.
"""

from .base import Base, now_utc  # re-export

# Domain models
from .users import User, RoleUpgradeRequest
from .tickets import Category, Ticket, Comment, Vote
from .notifications import Notification
from .audit import AuditLog

__all__ = [
    # base
    "Base",
    "now_utc",
    # users
    "User",
    "RoleUpgradeRequest",
    # tickets
    "Category",
    "Ticket",
    "Comment",
    "Vote",
    # notifications
    "Notification",
    # audit
    "AuditLog",
]
