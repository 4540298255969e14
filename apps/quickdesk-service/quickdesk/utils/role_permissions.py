"""
Role-based permission utilities for help-desk users.

Every user carries exactly one role. This module maps roles to the
capabilities the API checks, so route code asks "may this role triage?"
instead of comparing role strings inline.
"""

from typing import FrozenSet


# Central role constants to ensure consistency across the codebase
ROLE_END_USER = "END_USER"
ROLE_SUPPORT_AGENT = "SUPPORT_AGENT"
ROLE_ADMIN = "ADMIN"
ROLE_PERMISSIONS = {
    ROLE_END_USER: {
        "can_view_all_tickets": False,
        "can_triage": False,
    },
    ROLE_SUPPORT_AGENT: {
        "can_view_all_tickets": True,
        "can_triage": True,
    },
    ROLE_ADMIN: {
        "can_view_all_tickets": True,
        "can_triage": True,
    },
}

ALLOWED_ROLES = set(ROLE_PERMISSIONS.keys())

# Derived role groups
STAFF_ROLES: FrozenSet[str] = frozenset(r for r, caps in ROLE_PERMISSIONS.items() if caps["can_triage"])
ADMIN_ROLES: FrozenSet[str] = frozenset({ROLE_ADMIN})
# Roles a user may ask to be upgraded to
UPGRADE_TARGET_ROLES: FrozenSet[str] = frozenset({ROLE_SUPPORT_AGENT, ROLE_ADMIN})


def role_sees_all_tickets(role: str) -> bool:
    """Return True if the role may read tickets created by other users."""
    return role in ROLE_PERMISSIONS and ROLE_PERMISSIONS[role]["can_view_all_tickets"]


def role_allows_triage(role: str) -> bool:
    """Return True if the role may change status or assignment of any ticket."""
    return role in STAFF_ROLES
