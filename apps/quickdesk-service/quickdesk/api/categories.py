"""
Category API endpoints.

Any signed-in user can list categories; admins manage them.
"""
import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from quickdesk.api.deps import get_current_user, require_admin
from quickdesk.audit import AuditAction, log_category
from quickdesk.db import models, schemas
from quickdesk.db.database import get_db
from quickdesk.db.repositories import categories as category_repo
from quickdesk.services.errors import Conflict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories", tags=["categories"])


def _with_count(category: models.Category, ticket_count: int) -> schemas.CategoryWithCount:
    item = schemas.CategoryWithCount.model_validate(category)
    item.ticket_count = ticket_count
    return item


def _get_or_404(db: Session, category_id: uuid.UUID) -> models.Category:
    category = category_repo.get_category(db, category_id)
    if category is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category


@router.get("", response_model=List[schemas.CategoryWithCount])
def list_categories(
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    return [_with_count(category, n) for category, n in category_repo.list_categories_with_counts(db)]


@router.post("", response_model=schemas.CategoryWithCount, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: schemas.CategoryCreate,
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin),
):
    name = (payload.name or "").strip()
    if not name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category name is required")
    if category_repo.get_category_by_name(db, name) is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category already exists")

    try:
        category = category_repo.create_category(
            db,
            name=name,
            description=payload.description,
            color=payload.color,
            created_by=admin.id,
            commit=False,
        )
        log_category(
            db,
            actor_user_id=admin.id,
            category_id=category.id,
            action=AuditAction.CATEGORY_CREATE,
            name=category.name,
            commit=False,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("category_created: id=%s name=%s by=%s", category.id, category.name, admin.id)
    return _with_count(category, 0)


@router.put("/{category_id}", response_model=schemas.CategoryWithCount)
def update_category(
    category_id: uuid.UUID,
    payload: schemas.CategoryUpdate,
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin),
):
    category = _get_or_404(db, category_id)
    update_data = payload.model_dump(exclude_unset=True)

    if "name" in update_data:
        name = (update_data["name"] or "").strip()
        if not name:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category name is required")
        existing = category_repo.get_category_by_name(db, name)
        if existing is not None and existing.id != category.id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category already exists")
        update_data["name"] = name
    if "color" in update_data and not update_data["color"]:
        update_data.pop("color")

    try:
        category_repo.update_category(db, category, update_data, commit=False)
        log_category(
            db,
            actor_user_id=admin.id,
            category_id=category.id,
            action=AuditAction.CATEGORY_UPDATE,
            name=category.name,
            commit=False,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    return _with_count(category, category_repo.count_tickets(db, category.id))


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: uuid.UUID,
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin),
):
    category = _get_or_404(db, category_id)
    if category_repo.count_tickets(db, category.id) > 0:
        raise Conflict("Category still has tickets")

    name = category.name
    try:
        category_repo.delete_category(db, category, commit=False)
        log_category(
            db,
            actor_user_id=admin.id,
            category_id=category_id,
            action=AuditAction.CATEGORY_DELETE,
            name=name,
            commit=False,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("category_deleted: id=%s name=%s by=%s", category_id, name, admin.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
