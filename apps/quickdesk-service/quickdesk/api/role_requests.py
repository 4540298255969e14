"""
Role upgrade request endpoints.

Users ask for SUPPORT_AGENT or ADMIN; admins approve or reject.
"""
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from quickdesk.api.deps import get_current_user, require_admin
from quickdesk.db import models, schemas
from quickdesk.db.database import get_db
from quickdesk.db.repositories import role_requests as request_repo
from quickdesk.services.role_request_service import RoleRequestService
from quickdesk.utils.statuses import REQUEST_STATUSES

router = APIRouter(tags=["role-requests"])


@router.post("/role-requests", response_model=schemas.RoleUpgradeRequest, status_code=status.HTTP_201_CREATED)
def create_role_request(
    payload: schemas.RoleUpgradeRequestCreate,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    return RoleRequestService(db).submit(user, payload.requested_role, payload.reason)


@router.get("/role-requests", response_model=List[schemas.RoleUpgradeRequest])
def list_role_requests(
    status_filter: Optional[str] = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin),
):
    if status_filter and status_filter not in REQUEST_STATUSES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid status")
    return request_repo.list_requests(db, status=status_filter)


@router.put("/role-requests/{request_id}", response_model=schemas.RoleUpgradeRequest)
def process_role_request(
    request_id: uuid.UUID,
    payload: schemas.RoleUpgradeRequestDecision,
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin),
):
    return RoleRequestService(db).process(request_id, payload.status, admin)


@router.get("/my-role-requests", response_model=List[schemas.RoleUpgradeRequest])
def my_role_requests(
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    return request_repo.list_for_user(db, user.id)
