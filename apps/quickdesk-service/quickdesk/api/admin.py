"""
Admin API endpoints: analytics, user management and the audit trail.
"""
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from quickdesk.api.deps import require_admin
from quickdesk.db import models, schemas
from quickdesk.db.database import get_db
from quickdesk.db.repositories import audits as audit_repo
from quickdesk.db.repositories import categories as category_repo
from quickdesk.db.repositories import role_requests as request_repo
from quickdesk.db.repositories import tickets as ticket_repo
from quickdesk.db.repositories import users as user_repo
from quickdesk.services.role_request_service import RoleRequestService
from quickdesk.utils.role_permissions import ROLE_SUPPORT_AGENT
from quickdesk.utils.statuses import (
    STATUS_CLOSED,
    STATUS_IN_PROGRESS,
    STATUS_OPEN,
    STATUS_RESOLVED,
    TICKET_PRIORITIES,
    TICKET_STATUSES,
)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/analytics", response_model=schemas.Analytics)
def get_analytics(
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin),
):
    by_status = ticket_repo.count_by(db, models.Ticket.status, TICKET_STATUSES)
    by_priority = ticket_repo.count_by(db, models.Ticket.priority, TICKET_PRIORITIES)
    by_category = [
        schemas.CategoryTicketCount(id=c.id, name=c.name, color=c.color, ticket_count=n)
        for c, n in category_repo.list_categories_with_counts(db)
    ]
    return schemas.Analytics(
        total_tickets=ticket_repo.count_tickets(db),
        open_tickets=by_status[STATUS_OPEN],
        in_progress_tickets=by_status[STATUS_IN_PROGRESS],
        resolved_tickets=by_status[STATUS_RESOLVED],
        closed_tickets=by_status[STATUS_CLOSED],
        total_users=user_repo.count_users(db),
        pending_requests=request_repo.count_pending(db),
        active_agents=user_repo.count_users(db, role=ROLE_SUPPORT_AGENT),
        tickets_by_category=by_category,
        tickets_by_status=by_status,
        tickets_by_priority=by_priority,
    )


@router.get("/users", response_model=List[schemas.AdminUser])
def list_users(
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin),
):
    users = []
    for user, ticket_count in user_repo.list_users_with_ticket_counts(db):
        item = schemas.AdminUser.model_validate(user)
        item.ticket_count = ticket_count
        users.append(item)
    return users


@router.put("/users/{user_id}/role", response_model=schemas.User)
def change_user_role(
    user_id: uuid.UUID,
    payload: schemas.RoleChangeRequest,
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin),
):
    return RoleRequestService(db).change_role(user_id, payload.role, admin)


@router.get("/audit-logs", response_model=List[schemas.AuditLog])
def list_audit_logs(
    action_type: Optional[str] = Query(default=None, alias="actionType"),
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin),
):
    return audit_repo.get_audit_logs(
        db,
        action_type=action_type,
        skip=max(skip, 0),
        limit=min(max(limit, 1), 500),
    )
