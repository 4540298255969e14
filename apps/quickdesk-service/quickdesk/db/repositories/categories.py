"""
Category repository functions.
"""
from __future__ import annotations

import uuid
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from quickdesk.db import models


def _commit_or_flush(db: Session, obj, commit: bool) -> None:
    if commit:
        db.commit()
        db.refresh(obj)
    else:
        db.flush()


def get_category(db: Session, category_id: uuid.UUID) -> Optional[models.Category]:
    return db.query(models.Category).filter(models.Category.id == category_id).first()


def get_category_by_name(db: Session, name: str) -> Optional[models.Category]:
    return db.query(models.Category).filter(func.lower(models.Category.name) == name.lower()).first()


def list_categories_with_counts(db: Session) -> List[Tuple[models.Category, int]]:
    rows = (
        db.query(models.Category, func.count(models.Ticket.id))
        .outerjoin(models.Ticket, models.Ticket.category_id == models.Category.id)
        .group_by(models.Category.id)
        .order_by(models.Category.name.asc())
        .all()
    )
    return [(category, int(count)) for category, count in rows]


def count_tickets(db: Session, category_id: uuid.UUID) -> int:
    return (
        db.query(func.count(models.Ticket.id))
        .filter(models.Ticket.category_id == category_id)
        .scalar()
        or 0
    )


def create_category(
    db: Session,
    *,
    name: str,
    description: Optional[str],
    color: Optional[str],
    created_by: Optional[uuid.UUID],
    commit: bool = True,
) -> models.Category:
    db_category = models.Category(name=name, description=description, created_by=created_by)
    if color:
        db_category.color = color
    db.add(db_category)
    _commit_or_flush(db, db_category, commit)
    return db_category


def update_category(db: Session, category: models.Category, update_data: dict, *, commit: bool = True) -> models.Category:
    for key, value in update_data.items():
        setattr(category, key, value)
    _commit_or_flush(db, category, commit)
    return category


def delete_category(db: Session, category: models.Category, *, commit: bool = True) -> None:
    db.delete(category)
    if commit:
        db.commit()
    else:
        db.flush()
