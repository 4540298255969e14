"""
Ticket service: creation, status transitions, assignment, comments and votes.

Each public method performs one business operation as a single transaction:
the ticket write, its audit entry and any notifications commit together.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from quickdesk.services.permissions import can_change_ticket_status, can_triage
from quickdesk.audit import AuditAction, log_ticket
from quickdesk.db import models
from quickdesk.db.repositories import categories as category_repo
from quickdesk.db.repositories import tickets as ticket_repo
from quickdesk.db.repositories import users as user_repo
from quickdesk.db.repositories import votes as vote_repo
from quickdesk.services.errors import AccessDenied, InvalidRequest
from quickdesk.services.notification_service import NotificationService
from quickdesk.utils.role_permissions import STAFF_ROLES
from quickdesk.utils.statuses import (
    PRIORITY_MEDIUM,
    STATUS_CLOSED,
    VOTE_TYPES,
    is_valid_priority,
    is_valid_status,
)

logger = logging.getLogger(__name__)


class TicketService:
    """Service class for ticket lifecycle operations."""

    def __init__(self, db: Session, notification_service: Optional[NotificationService] = None):
        self.db = db
        self.notification_service = notification_service or NotificationService(db)

    def create_ticket(
        self,
        creator: models.User,
        *,
        title: Optional[str],
        description: Optional[str],
        category_id: Optional[uuid.UUID],
        priority: Optional[str] = None,
    ) -> models.Ticket:
        title = (title or "").strip()
        description = (description or "").strip()
        if not title or not description:
            raise InvalidRequest("Title and description are required")
        if category_id is None or category_repo.get_category(self.db, category_id) is None:
            raise InvalidRequest("Invalid category")
        priority = priority or PRIORITY_MEDIUM
        if not is_valid_priority(priority):
            raise InvalidRequest("Invalid priority")

        try:
            ticket = ticket_repo.create_ticket(
                self.db,
                title=title,
                description=description,
                category_id=category_id,
                priority=priority,
                created_by=creator.id,
                commit=False,
            )
            staff = user_repo.list_users_by_roles(self.db, STAFF_ROLES)
            self.notification_service.notify_new_ticket(ticket, [u.id for u in staff])
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("ticket_created: id=%s creator=%s", ticket.id, creator.id)
        return ticket_repo.get_ticket(self.db, ticket.id)

    def change_status(self, ticket: models.Ticket, new_status: Optional[str], actor: models.User) -> models.Ticket:
        """Move a ticket to `new_status`, stamping or clearing closed_at."""
        if not new_status or not is_valid_status(new_status):
            raise InvalidRequest("Invalid status")

        comment_count = ticket_repo.count_comments(self.db, ticket.id)
        if not can_change_ticket_status(ticket, new_status, actor, comment_count):
            raise AccessDenied("You can only close your own tickets after receiving responses")

        old_status = ticket.status
        fields = {"status": new_status}
        if new_status == STATUS_CLOSED:
            if old_status != STATUS_CLOSED or ticket.closed_at is None:
                fields["closed_at"] = datetime.now(timezone.utc)
        else:
            fields["closed_at"] = None

        try:
            ticket_repo.update_ticket(self.db, ticket, commit=False, **fields)
            log_ticket(
                self.db,
                actor_user_id=actor.id,
                ticket_id=ticket.id,
                action=AuditAction.TICKET_STATUS_CHANGE,
                metadata={"from": old_status, "to": new_status},
                commit=False,
            )
            if old_status != new_status:
                self.notification_service.notify_status_change(ticket, actor, old_status)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("ticket_status_changed: id=%s %s->%s by=%s", ticket.id, old_status, new_status, actor.id)
        return ticket_repo.get_ticket(self.db, ticket.id)

    def assign(self, ticket: models.Ticket, assignee_id: Optional[uuid.UUID], actor: models.User) -> models.Ticket:
        """Assign the ticket to a staff member, or unassign with None."""
        if not can_triage(actor):
            raise AccessDenied("Insufficient permissions")

        assignee = None
        if assignee_id is not None:
            assignee = user_repo.get_user(self.db, assignee_id)
            if assignee is None or assignee.role not in STAFF_ROLES:
                raise InvalidRequest("Assignee must be a support agent or admin")

        previous = ticket.assigned_to
        try:
            ticket_repo.update_ticket(
                self.db, ticket, commit=False, assigned_to=assignee.id if assignee else None
            )
            log_ticket(
                self.db,
                actor_user_id=actor.id,
                ticket_id=ticket.id,
                action=AuditAction.TICKET_ASSIGN,
                metadata={
                    "from": str(previous) if previous else None,
                    "to": str(assignee.id) if assignee else None,
                },
                commit=False,
            )
            if assignee is not None and assignee.id != previous:
                self.notification_service.notify_assignment(ticket, actor)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        return ticket_repo.get_ticket(self.db, ticket.id)

    def add_comment(self, ticket: models.Ticket, author: models.User, content: Optional[str]) -> models.Comment:
        content = (content or "").strip()
        if not content:
            raise InvalidRequest("Comment content is required")

        try:
            comment = ticket_repo.create_comment(
                self.db, ticket_id=ticket.id, user_id=author.id, content=content, commit=False
            )
            # A new comment counts as ticket activity.
            ticket.updated_at = datetime.now(timezone.utc)
            self.notification_service.notify_comment(ticket, author)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(comment)
        return comment

    def vote(self, ticket: models.Ticket, voter: models.User, vote_type: Optional[str]) -> Tuple[int, Optional[str]]:
        """Toggle the voter's vote and recount the ticket.

        No existing vote creates one, the same type removes it, the other
        type switches it. Returns (ticket votes, caller's vote or None).
        """
        if vote_type not in VOTE_TYPES:
            raise InvalidRequest("Invalid vote type")

        try:
            existing = vote_repo.get_vote(self.db, user_id=voter.id, ticket_id=ticket.id)
            if existing is None:
                vote_repo.add_vote(self.db, user_id=voter.id, ticket_id=ticket.id, vote_type=vote_type)
                user_vote = vote_type
            elif existing.type == vote_type:
                vote_repo.remove_vote(self.db, existing)
                user_vote = None
            else:
                vote_repo.change_vote(self.db, existing, vote_type)
                user_vote = vote_type

            up, down = vote_repo.tally(self.db, ticket.id)
            ticket.votes = up - down
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.debug("ticket_vote: ticket=%s user=%s vote=%s total=%s", ticket.id, voter.id, user_vote, up - down)
        return up - down, user_vote
