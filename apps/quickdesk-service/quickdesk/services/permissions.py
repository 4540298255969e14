"""
Permission checks for ticket access control.

Key helpers:
- can_view_ticket(ticket, current_user)
- can_change_ticket_status(ticket, new_status, current_user, comment_count)
- can_triage(current_user)
"""
from typing import Optional

from quickdesk.db import models
from quickdesk.utils.role_permissions import (
    role_allows_triage as _role_allows_triage,
    role_sees_all_tickets as _role_sees_all_tickets,
)
from quickdesk.utils.statuses import STATUS_CLOSED


def is_ticket_creator(ticket: Optional[models.Ticket], current_user: Optional[models.User]) -> bool:
    if ticket is None or current_user is None:
        return False
    return ticket.created_by == current_user.id


def can_view_ticket(ticket: Optional[models.Ticket], current_user: Optional[models.User]) -> bool:
    """End users see their own tickets; staff see every ticket."""
    if ticket is None or current_user is None:
        return False
    if _role_sees_all_tickets(current_user.role):
        return True
    return is_ticket_creator(ticket, current_user)


def can_triage(current_user: Optional[models.User]) -> bool:
    return current_user is not None and _role_allows_triage(current_user.role)


def can_change_ticket_status(
    ticket: Optional[models.Ticket],
    new_status: str,
    current_user: Optional[models.User],
    comment_count: int,
) -> bool:
    """Staff may set any status.

    A creator may only close their own ticket, and only once it has at least
    one comment.
    """
    if ticket is None or current_user is None:
        return False
    if can_triage(current_user):
        return True
    return (
        is_ticket_creator(ticket, current_user)
        and new_status == STATUS_CLOSED
        and comment_count > 0
    )
