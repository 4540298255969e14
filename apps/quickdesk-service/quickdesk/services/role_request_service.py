"""
Role request service: role-upgrade requests, their review, and direct role changes.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from quickdesk.audit import AuditAction, AuditStatus, log as audit_log, log_user
from quickdesk.db import models
from quickdesk.db.repositories import role_requests as request_repo
from quickdesk.db.repositories import users as user_repo
from quickdesk.services.errors import InvalidRequest, NotFound
from quickdesk.services.notification_service import NotificationService
from quickdesk.utils.role_permissions import ADMIN_ROLES, ALLOWED_ROLES, UPGRADE_TARGET_ROLES
from quickdesk.utils.statuses import REQUEST_APPROVED, REQUEST_DECISIONS, REQUEST_PENDING

logger = logging.getLogger(__name__)

DEFAULT_REASON = "User requested role upgrade"


class RoleRequestService:
    """Service class for role upgrade requests and role administration."""

    def __init__(self, db: Session, notification_service: Optional[NotificationService] = None):
        self.db = db
        self.notification_service = notification_service or NotificationService(db)

    def submit(self, requester: models.User, requested_role: Optional[str], reason: Optional[str] = None) -> models.RoleUpgradeRequest:
        """File a PENDING upgrade request for `requester`."""
        if requested_role not in UPGRADE_TARGET_ROLES:
            raise InvalidRequest("Invalid requested role")
        if requested_role == requester.role:
            raise InvalidRequest("You already have this role")
        if request_repo.get_pending_for_user(self.db, requester.id) is not None:
            raise InvalidRequest("You already have a pending upgrade request")

        try:
            request = request_repo.create_request(
                self.db,
                user_id=requester.id,
                current_role=requester.role,
                requested_role=requested_role,
                reason=(reason or "").strip() or DEFAULT_REASON,
            )
            audit_log(
                self.db,
                action=AuditAction.ROLE_REQUEST_CREATE,
                status=AuditStatus.SUCCESS,
                target_type="role_upgrade_request",
                target_id=request.id,
                actor_user_id=requester.id,
                metadata={"requested_role": requested_role},
                commit=False,
            )
            admins = user_repo.list_users_by_roles(self.db, ADMIN_ROLES)
            self.notification_service.notify_role_request(request, requester, [a.id for a in admins])
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("role_request_created: id=%s user=%s role=%s", request.id, requester.id, requested_role)
        return request_repo.get_request(self.db, request.id)

    def process(self, request_id: uuid.UUID, decision: Optional[str], admin: models.User) -> models.RoleUpgradeRequest:
        """Approve or reject a pending request.

        The request stamp and, on approval, the user's new role commit together.
        """
        if decision not in REQUEST_DECISIONS:
            raise InvalidRequest("Invalid status")

        request = request_repo.get_request(self.db, request_id)
        if request is None:
            raise NotFound("Request not found")
        if request.user_id == admin.id:
            raise InvalidRequest("You cannot process your own request")
        if request.status != REQUEST_PENDING:
            raise InvalidRequest("Request already processed")

        try:
            request.status = decision
            request.processed_at = datetime.now(timezone.utc)
            request.processed_by = admin.id
            if decision == REQUEST_APPROVED:
                user_repo.update_user(self.db, request.user, commit=False, role=request.requested_role)
            action = (
                AuditAction.ROLE_REQUEST_APPROVE
                if decision == REQUEST_APPROVED
                else AuditAction.ROLE_REQUEST_REJECT
            )
            audit_log(
                self.db,
                action=action,
                status=AuditStatus.SUCCESS,
                target_type="role_upgrade_request",
                target_id=request.id,
                actor_user_id=admin.id,
                metadata={"user_id": str(request.user_id), "requested_role": request.requested_role},
                commit=False,
            )
            self.db.flush()
            self.notification_service.notify_role_request_processed(request)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("role_request_processed: id=%s status=%s by=%s", request.id, decision, admin.id)
        return request_repo.get_request(self.db, request.id)

    def change_role(self, user_id: uuid.UUID, role: Optional[str], admin: models.User) -> models.User:
        """Set a user's role directly."""
        if role not in ALLOWED_ROLES:
            raise InvalidRequest("Invalid role")
        user = user_repo.get_user(self.db, user_id)
        if user is None:
            raise NotFound("User not found")
        if user.id == admin.id:
            raise InvalidRequest("You cannot change your own role")

        old_role = user.role
        try:
            user_repo.update_user(self.db, user, commit=False, role=role)
            log_user(
                self.db,
                actor_user_id=admin.id,
                user_id=user.id,
                action=AuditAction.USER_ROLE_CHANGE,
                metadata={"from": old_role, "to": role},
                commit=False,
            )
            if old_role != role:
                self.notification_service.notify_role_changed(user, old_role)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(user)
        logger.info("user_role_changed: user=%s %s->%s by=%s", user.id, old_role, role, admin.id)
        return user
