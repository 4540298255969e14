"""
User repository functions.

Implements lookups, creation and profile/role updates for users.
"""
from __future__ import annotations

import uuid
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from quickdesk.db import models


def get_user(db: Session, user_id: uuid.UUID) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == email).first()


def email_taken_by_other(db: Session, email: str, user_id: uuid.UUID) -> bool:
    return (
        db.query(models.User.id)
        .filter(models.User.email == email, models.User.id != user_id)
        .first()
        is not None
    )


def create_user(db: Session, *, name: str, email: str, password_hash: str, role: str) -> models.User:
    db_user = models.User(name=name, email=email, password_hash=password_hash, role=role)
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def update_user(db: Session, user: models.User, *, commit: bool = True, **fields) -> models.User:
    for key, value in fields.items():
        setattr(user, key, value)
    if commit:
        db.commit()
        db.refresh(user)
    else:
        db.flush()
    return user


def list_users_with_ticket_counts(db: Session) -> List[Tuple[models.User, int]]:
    ticket_counts = (
        db.query(models.Ticket.created_by.label("user_id"), func.count(models.Ticket.id).label("n"))
        .group_by(models.Ticket.created_by)
        .subquery()
    )
    rows = (
        db.query(models.User, func.coalesce(ticket_counts.c.n, 0))
        .outerjoin(ticket_counts, ticket_counts.c.user_id == models.User.id)
        .order_by(models.User.created_at.desc())
        .all()
    )
    return [(user, int(count)) for user, count in rows]


def list_users_by_roles(db: Session, roles) -> List[models.User]:
    return db.query(models.User).filter(models.User.role.in_(list(roles))).all()


def count_users(db: Session, *, role: Optional[str] = None) -> int:
    query = db.query(func.count(models.User.id))
    if role:
        query = query.filter(models.User.role == role)
    return query.scalar() or 0
