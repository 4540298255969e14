"""
Role upgrade request repository functions.
"""
from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from quickdesk.db import models
from quickdesk.utils.statuses import REQUEST_PENDING


def _with_users(query):
    return query.options(
        joinedload(models.RoleUpgradeRequest.user),
        joinedload(models.RoleUpgradeRequest.processed_by_user),
    )


def get_request(db: Session, request_id: uuid.UUID) -> Optional[models.RoleUpgradeRequest]:
    return (
        _with_users(db.query(models.RoleUpgradeRequest))
        .filter(models.RoleUpgradeRequest.id == request_id)
        .first()
    )


def get_pending_for_user(db: Session, user_id: uuid.UUID) -> Optional[models.RoleUpgradeRequest]:
    return (
        db.query(models.RoleUpgradeRequest)
        .filter(
            models.RoleUpgradeRequest.user_id == user_id,
            models.RoleUpgradeRequest.status == REQUEST_PENDING,
        )
        .first()
    )


def create_request(
    db: Session,
    *,
    user_id: uuid.UUID,
    current_role: str,
    requested_role: str,
    reason: str,
) -> models.RoleUpgradeRequest:
    db_request = models.RoleUpgradeRequest(
        user_id=user_id,
        current_role=current_role,
        requested_role=requested_role,
        reason=reason,
        status=REQUEST_PENDING,
    )
    db.add(db_request)
    db.flush()
    return db_request


def list_requests(db: Session, *, status: Optional[str] = None) -> List[models.RoleUpgradeRequest]:
    query = _with_users(db.query(models.RoleUpgradeRequest))
    if status:
        query = query.filter(models.RoleUpgradeRequest.status == status)
    return query.order_by(models.RoleUpgradeRequest.created_at.desc()).all()


def list_for_user(db: Session, user_id: uuid.UUID) -> List[models.RoleUpgradeRequest]:
    return (
        _with_users(db.query(models.RoleUpgradeRequest))
        .filter(models.RoleUpgradeRequest.user_id == user_id)
        .order_by(models.RoleUpgradeRequest.created_at.desc())
        .all()
    )


def count_pending(db: Session) -> int:
    return (
        db.query(func.count(models.RoleUpgradeRequest.id))
        .filter(models.RoleUpgradeRequest.status == REQUEST_PENDING)
        .scalar()
        or 0
    )
