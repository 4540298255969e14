"""
Ticket and comment repository functions.

Implements filtered/paginated listing, lookups and writes for tickets and
their comments. Write helpers take ``commit=False`` when the caller is
composing several writes into one transaction.
"""
from __future__ import annotations

import uuid
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import case, func, or_
from sqlalchemy.orm import Session, joinedload, selectinload

from quickdesk.db import models
from quickdesk.utils.statuses import TICKET_PRIORITIES, TICKET_STATUSES


# API sort keys mapped to ORM expressions. Priority and status sort by rank
# rather than alphabetically.
SORTABLE_COLUMNS = {
    "createdAt": models.Ticket.created_at,
    "updatedAt": models.Ticket.updated_at,
    "votes": models.Ticket.votes,
    "title": models.Ticket.title,
    "priority": case({p: i for i, p in enumerate(TICKET_PRIORITIES)}, value=models.Ticket.priority),
    "status": case({s: i for i, s in enumerate(TICKET_STATUSES)}, value=models.Ticket.status),
}


def _commit_or_flush(db: Session, obj, commit: bool) -> None:
    if commit:
        db.commit()
        db.refresh(obj)
    else:
        db.flush()


def _with_relations(query):
    return query.options(
        joinedload(models.Ticket.creator),
        joinedload(models.Ticket.assignee),
        joinedload(models.Ticket.category),
    )


def get_ticket(db: Session, ticket_id: uuid.UUID, *, with_comments: bool = False) -> Optional[models.Ticket]:
    query = _with_relations(db.query(models.Ticket))
    if with_comments:
        query = query.options(selectinload(models.Ticket.comments).joinedload(models.Comment.user))
    return query.filter(models.Ticket.id == ticket_id).first()


def list_tickets(
    db: Session,
    *,
    created_by: Optional[uuid.UUID] = None,
    status: Optional[str] = None,
    category_id: Optional[uuid.UUID] = None,
    search: Optional[str] = None,
    sort_by: str = "createdAt",
    sort_order: str = "desc",
    skip: int = 0,
    limit: int = 10,
) -> Tuple[List[models.Ticket], int]:
    """Return one page of tickets matching the filters and the total match count."""
    query = db.query(models.Ticket)
    if created_by:
        query = query.filter(models.Ticket.created_by == created_by)
    if status:
        query = query.filter(models.Ticket.status == status)
    if category_id:
        query = query.filter(models.Ticket.category_id == category_id)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(models.Ticket.title.ilike(pattern), models.Ticket.description.ilike(pattern))
        )

    total = query.count()

    column = SORTABLE_COLUMNS[sort_by]
    ordering = column.asc() if sort_order == "asc" else column.desc()
    tickets = (
        _with_relations(query)
        .order_by(ordering, models.Ticket.id)
        .offset(skip)
        .limit(limit)
        .all()
    )
    return tickets, total


def comment_counts(db: Session, ticket_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, int]:
    ids = list(ticket_ids)
    if not ids:
        return {}
    rows = (
        db.query(models.Comment.ticket_id, func.count(models.Comment.id))
        .filter(models.Comment.ticket_id.in_(ids))
        .group_by(models.Comment.ticket_id)
        .all()
    )
    return {ticket_id: int(n) for ticket_id, n in rows}


def count_comments(db: Session, ticket_id: uuid.UUID) -> int:
    return comment_counts(db, [ticket_id]).get(ticket_id, 0)


def create_ticket(
    db: Session,
    *,
    title: str,
    description: str,
    category_id: uuid.UUID,
    priority: str,
    created_by: uuid.UUID,
    commit: bool = True,
) -> models.Ticket:
    db_ticket = models.Ticket(
        title=title,
        description=description,
        category_id=category_id,
        priority=priority,
        created_by=created_by,
    )
    db.add(db_ticket)
    _commit_or_flush(db, db_ticket, commit)
    return db_ticket


def update_ticket(db: Session, ticket: models.Ticket, *, commit: bool = True, **fields) -> models.Ticket:
    for key, value in fields.items():
        setattr(ticket, key, value)
    _commit_or_flush(db, ticket, commit)
    return ticket


def create_comment(
    db: Session,
    *,
    ticket_id: uuid.UUID,
    user_id: uuid.UUID,
    content: str,
    commit: bool = True,
) -> models.Comment:
    db_comment = models.Comment(ticket_id=ticket_id, user_id=user_id, content=content)
    db.add(db_comment)
    _commit_or_flush(db, db_comment, commit)
    return db_comment


def count_tickets(db: Session, *, status: Optional[str] = None) -> int:
    query = db.query(func.count(models.Ticket.id))
    if status:
        query = query.filter(models.Ticket.status == status)
    return query.scalar() or 0


def count_by(db: Session, column, keys: Iterable[str]) -> Dict[str, int]:
    """Return {key: ticket count} grouped on a ticket column, zero-filled for `keys`."""
    counts = {key: 0 for key in keys}
    for value, n in db.query(column, func.count(models.Ticket.id)).group_by(column).all():
        counts[value] = int(n)
    return counts
