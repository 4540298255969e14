"""
Notification service: in-app notifications for ticket and role events.
Centralizes business logic for consistent handling across the app.

Notifications are staged in the caller's session (flushed, not committed)
so they land in the same transaction as the change that triggered them.
"""

import logging
import uuid
from datetime import datetime, UTC
from typing import Optional, List, Dict, Any, Iterable
from sqlalchemy.orm import Session
from sqlalchemy import and_, desc

from quickdesk.db import models
from quickdesk.utils.statuses import REQUEST_APPROVED

logger = logging.getLogger(__name__)

# Event type constants
EVENT_NEW_TICKET = 'new_ticket'
EVENT_COMMENT = 'comment'
EVENT_STATUS_CHANGE = 'status_change'
EVENT_ASSIGNMENT = 'assignment'
EVENT_ROLE_REQUEST = 'role_request'
EVENT_ROLE_REQUEST_PROCESSED = 'role_request_processed'
EVENT_ROLE_CHANGED = 'role_changed'


def _humanize(value: str) -> str:
    return value.replace('_', ' ').title()


class NotificationService:
    """Service class for handling all notification operations."""

    def __init__(self, db: Session):
        self.db = db

    # === In-App Notification Management ===

    def create_notification(
        self,
        user_id: uuid.UUID,
        event_type: str,
        title: str,
        message: str,
        ticket_id: Optional[uuid.UUID] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> models.Notification:
        """
        Stage an in-app notification for a user.

        Args:
            user_id: The recipient user ID
            event_type: Type of event (e.g., 'comment')
            title: Short notification title
            message: Detailed notification message
            ticket_id: Ticket the notification links to, if any
            metadata: Additional event-specific data
        """
        notification = models.Notification(
            user_id=user_id,
            event_type=event_type,
            title=title,
            message=message,
            ticket_id=ticket_id,
            metadata_json=metadata or None,
        )

        self.db.add(notification)
        self.db.flush()
        logger.debug("notification_staged: user=%s event=%s", user_id, event_type)
        return notification

    def notify_users(
        self,
        user_ids: Iterable[uuid.UUID],
        event_type: str,
        title: str,
        message: str,
        *,
        exclude: Optional[uuid.UUID] = None,
        ticket_id: Optional[uuid.UUID] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> List[models.Notification]:
        """Stage the same notification for each distinct recipient except `exclude`."""
        created = []
        seen = set()
        for user_id in user_ids:
            if user_id is None or user_id == exclude or user_id in seen:
                continue
            seen.add(user_id)
            created.append(
                self.create_notification(
                    user_id=user_id,
                    event_type=event_type,
                    title=title,
                    message=message,
                    ticket_id=ticket_id,
                    metadata=metadata,
                )
            )
        return created

    def get_user_notifications(
        self,
        user_id: uuid.UUID,
        unread_only: bool = False,
        limit: int = 50
    ) -> List[models.Notification]:
        """
        Get notifications for a user, ordered by most recent.
        """
        query = self.db.query(models.Notification).filter(
            models.Notification.user_id == user_id
        )

        if unread_only:
            query = query.filter(models.Notification.is_read == False)  # noqa: E712

        return query.order_by(desc(models.Notification.created_at)).limit(limit).all()

    def mark_notification_read(self, notification_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        """
        Mark a notification as read for a specific user.
        Returns True if successful, False if notification not found or not owned by user.
        """
        notification = self.db.query(models.Notification).filter(
            and_(
                models.Notification.id == notification_id,
                models.Notification.user_id == user_id
            )
        ).first()

        if not notification:
            return False

        if not notification.is_read:
            notification.is_read = True
            notification.read_at = datetime.now(UTC)
            self.db.commit()

        return True

    def mark_all_read(self, user_id: uuid.UUID) -> int:
        """Mark every unread notification of the user as read; return how many changed."""
        updated = self.db.query(models.Notification).filter(
            and_(
                models.Notification.user_id == user_id,
                models.Notification.is_read == False  # noqa: E712
            )
        ).update(
            {models.Notification.is_read: True, models.Notification.read_at: datetime.now(UTC)},
            synchronize_session=False,
        )
        self.db.commit()
        return updated

    def get_unread_count(self, user_id: uuid.UUID) -> int:
        """
        Get count of unread notifications for a user.
        """
        return self.db.query(models.Notification).filter(
            and_(
                models.Notification.user_id == user_id,
                models.Notification.is_read == False  # noqa: E712
            )
        ).count()

    # === Event helpers ===

    def notify_new_ticket(self, ticket: models.Ticket, staff_ids: Iterable[uuid.UUID]):
        return self.notify_users(
            staff_ids,
            EVENT_NEW_TICKET,
            "New Ticket Created",
            f'A new ticket has been submitted: "{ticket.title}"',
            exclude=ticket.created_by,
            ticket_id=ticket.id,
            metadata={"priority": ticket.priority},
        )

    def notify_comment(self, ticket: models.Ticket, author: models.User):
        return self.notify_users(
            [ticket.created_by, ticket.assigned_to],
            EVENT_COMMENT,
            "New Comment",
            f'{author.name} replied to ticket "{ticket.title}"',
            exclude=author.id,
            ticket_id=ticket.id,
        )

    def notify_status_change(self, ticket: models.Ticket, actor: models.User, old_status: str):
        return self.notify_users(
            [ticket.created_by],
            EVENT_STATUS_CHANGE,
            "Ticket Status Updated",
            f'Your ticket status changed to "{_humanize(ticket.status)}"',
            exclude=actor.id,
            ticket_id=ticket.id,
            metadata={"from": old_status, "to": ticket.status},
        )

    def notify_assignment(self, ticket: models.Ticket, actor: models.User):
        return self.notify_users(
            [ticket.assigned_to],
            EVENT_ASSIGNMENT,
            "Ticket Assigned",
            f'You have been assigned ticket "{ticket.title}"',
            exclude=actor.id,
            ticket_id=ticket.id,
        )

    def notify_role_request(self, request: models.RoleUpgradeRequest, requester: models.User, admin_ids: Iterable[uuid.UUID]):
        return self.notify_users(
            admin_ids,
            EVENT_ROLE_REQUEST,
            "Role Upgrade Requested",
            f"{requester.name} requested the {_humanize(request.requested_role)} role",
            exclude=requester.id,
            metadata={"request_id": str(request.id)},
        )

    def notify_role_request_processed(self, request: models.RoleUpgradeRequest):
        verdict = "approved" if request.status == REQUEST_APPROVED else "rejected"
        return self.create_notification(
            user_id=request.user_id,
            event_type=EVENT_ROLE_REQUEST_PROCESSED,
            title="Role Request " + verdict.capitalize(),
            message=f"Your request for the {_humanize(request.requested_role)} role was {verdict}",
            metadata={"request_id": str(request.id), "status": request.status},
        )

    def notify_role_changed(self, user: models.User, old_role: str):
        return self.create_notification(
            user_id=user.id,
            event_type=EVENT_ROLE_CHANGED,
            title="Role Changed",
            message=f"Your role changed from {_humanize(old_role)} to {_humanize(user.role)}",
            metadata={"from": old_role, "to": user.role},
        )
