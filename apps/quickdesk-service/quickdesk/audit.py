"""
Audit logging helpers and enums.

Centralized helpers to persist normalized audit records with consistent
schema; includes convenience wrappers per target type.
"""
from __future__ import annotations
import uuid
from enum import Enum
from typing import Any, Optional, Dict
from sqlalchemy.orm import Session

from quickdesk.db import schemas
from quickdesk.db.repositories import audits as audit_repo


class AuditAction(str, Enum):
    # Category
    CATEGORY_CREATE = "category_create"
    CATEGORY_UPDATE = "category_update"
    CATEGORY_DELETE = "category_delete"
    # Ticket
    TICKET_STATUS_CHANGE = "ticket_status_change"
    TICKET_ASSIGN = "ticket_assign"
    # Users and role upgrades
    USER_ROLE_CHANGE = "user_role_change"
    ROLE_REQUEST_CREATE = "role_request_create"
    ROLE_REQUEST_APPROVE = "role_request_approve"
    ROLE_REQUEST_REJECT = "role_request_reject"


class AuditStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


def log(
    db: Session,
    *,
    action: AuditAction | str,
    status: AuditStatus | str = AuditStatus.SUCCESS,
    target_type: str,
    target_id: Optional[uuid.UUID] = None,
    actor_user_id: uuid.UUID,
    metadata: Optional[Dict[str, Any]] = None,
    commit: bool = True,
):
    """Central audit logging helper.

    Pass ``commit=False`` to stage the entry in the caller's transaction.
    """
    # Ensure we persist pure string values, not Enum reprs (avoid 'AuditAction.XYZ')
    action_value = action.value if isinstance(action, AuditAction) else str(action)
    status_value = status.value if isinstance(status, AuditStatus) else str(status)
    audit_log = schemas.AuditLogCreate(
        action_type=action_value,
        status=status_value,
        target_type=target_type,
        target_id=target_id,
        metadata=metadata or {},
    )
    return audit_repo.create_audit_log(db, audit_log, actor_user_id, commit=commit)

__all__ = ["AuditAction", "AuditStatus", "log"]


def log_category(db: Session, *, actor_user_id: uuid.UUID, category_id: uuid.UUID, action: AuditAction, name: Optional[str] = None, status: AuditStatus | str = AuditStatus.SUCCESS, commit: bool = True):
    return log(
        db,
        action=action,
        status=status,
        target_type="category",
        target_id=category_id,
        actor_user_id=actor_user_id,
        metadata={"name": name} if name else None,
        commit=commit,
    )


def log_ticket(db: Session, *, actor_user_id: uuid.UUID, ticket_id: uuid.UUID, action: AuditAction, metadata: Optional[Dict[str, Any]] = None, commit: bool = True):
    return log(
        db,
        action=action,
        target_type="ticket",
        target_id=ticket_id,
        actor_user_id=actor_user_id,
        metadata=metadata,
        commit=commit,
    )


def log_user(db: Session, *, actor_user_id: uuid.UUID, user_id: uuid.UUID, action: AuditAction, metadata: Optional[Dict[str, Any]] = None, commit: bool = True):
    return log(
        db,
        action=action,
        target_type="user",
        target_id=user_id,
        actor_user_id=actor_user_id,
        metadata=metadata,
        commit=commit,
    )

__all__.extend(["log_category", "log_ticket", "log_user"])
