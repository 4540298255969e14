"""
Ticket API endpoints.

Listing with filters and pagination, ticket detail, status changes,
assignment, comments and votes. End users only ever see tickets they
created; support agents and admins see every ticket.
"""
import math
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from quickdesk.api.deps import get_current_user, require_staff
from quickdesk.services.permissions import can_view_ticket
from quickdesk.db import models, schemas
from quickdesk.db.database import get_db
from quickdesk.db.repositories import tickets as ticket_repo
from quickdesk.db.repositories import votes as vote_repo
from quickdesk.services.ticket_service import TicketService
from quickdesk.utils.role_permissions import role_sees_all_tickets
from quickdesk.utils.statuses import is_valid_status

router = APIRouter(prefix="/tickets", tags=["tickets"])

MAX_PAGE_SIZE = 100


def _get_visible_ticket(db: Session, ticket_id: uuid.UUID, user: models.User, *, with_comments: bool = False) -> models.Ticket:
    ticket = ticket_repo.get_ticket(db, ticket_id, with_comments=with_comments)
    if ticket is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ticket not found")
    if not can_view_ticket(ticket, user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
    return ticket


def _current_vote(db: Session, user: models.User, ticket_id: uuid.UUID) -> Optional[str]:
    vote = vote_repo.get_vote(db, user_id=user.id, ticket_id=ticket_id)
    return vote.type if vote else None


@router.get("", response_model=schemas.TicketListResponse)
def list_tickets(
    status_filter: Optional[str] = Query(default=None, alias="status"),
    category: Optional[uuid.UUID] = None,
    search: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
    sort_by: str = Query(default="createdAt", alias="sortBy"),
    sort_order: str = Query(default="desc", alias="sortOrder"),
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    """
    List tickets visible to the caller.

    - **status**: one of OPEN, IN_PROGRESS, RESOLVED, CLOSED
    - **category**: category id
    - **search**: case-insensitive match on title or description
    - **sortBy** / **sortOrder**: ordering, newest first by default
    """
    if status_filter and not is_valid_status(status_filter):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid status")
    if sort_by not in ticket_repo.SORTABLE_COLUMNS:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid sort field")
    if sort_order not in ("asc", "desc"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid sort order")

    page = max(page, 1)
    limit = min(max(limit, 1), MAX_PAGE_SIZE)

    tickets, total = ticket_repo.list_tickets(
        db,
        created_by=None if role_sees_all_tickets(user.role) else user.id,
        status=status_filter,
        category_id=category,
        search=(search or "").strip() or None,
        sort_by=sort_by,
        sort_order=sort_order,
        skip=(page - 1) * limit,
        limit=limit,
    )

    ids = [t.id for t in tickets]
    counts = ticket_repo.comment_counts(db, ids)
    my_votes = vote_repo.user_votes(db, user_id=user.id, ticket_ids=ids)
    items = []
    for ticket in tickets:
        item = schemas.TicketListItem.model_validate(ticket)
        item.comment_count = counts.get(ticket.id, 0)
        item.user_vote = my_votes.get(ticket.id)
        items.append(item)

    return schemas.TicketListResponse(
        tickets=items,
        pagination=schemas.Pagination(
            page=page,
            limit=limit,
            total=total,
            pages=math.ceil(total / limit) if total else 0,
        ),
    )


@router.post("", response_model=schemas.Ticket, status_code=status.HTTP_201_CREATED)
def create_ticket(
    payload: schemas.TicketCreate,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    return TicketService(db).create_ticket(
        user,
        title=payload.title,
        description=payload.description,
        category_id=payload.category_id,
        priority=payload.priority,
    )


@router.get("/{ticket_id}", response_model=schemas.TicketDetail)
def get_ticket(
    ticket_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    ticket = _get_visible_ticket(db, ticket_id, user, with_comments=True)
    detail = schemas.TicketDetail.model_validate(ticket)
    detail.user_vote = _current_vote(db, user, ticket.id)
    return detail


@router.put("/{ticket_id}/status", response_model=schemas.Ticket)
def update_status(
    ticket_id: uuid.UUID,
    payload: schemas.TicketStatusUpdate,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    if not payload.status or not is_valid_status(payload.status):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid status")
    ticket = ticket_repo.get_ticket(db, ticket_id)
    if ticket is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ticket not found")
    return TicketService(db).change_status(ticket, payload.status, user)


@router.put("/{ticket_id}/assign", response_model=schemas.Ticket)
def assign_ticket(
    ticket_id: uuid.UUID,
    payload: schemas.TicketAssign,
    db: Session = Depends(get_db),
    user: models.User = Depends(require_staff),
):
    ticket = ticket_repo.get_ticket(db, ticket_id)
    if ticket is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ticket not found")
    return TicketService(db).assign(ticket, payload.assignee_id, user)


@router.post("/{ticket_id}/comments", response_model=schemas.Comment, status_code=status.HTTP_201_CREATED)
def add_comment(
    ticket_id: uuid.UUID,
    payload: schemas.CommentCreate,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    if not (payload.content or "").strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Comment content is required")
    ticket = _get_visible_ticket(db, ticket_id, user)
    return TicketService(db).add_comment(ticket, user, payload.content)


@router.post("/{ticket_id}/vote", response_model=schemas.VoteResponse)
def vote(
    ticket_id: uuid.UUID,
    payload: schemas.VoteRequest,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    ticket = _get_visible_ticket(db, ticket_id, user)
    votes, user_vote = TicketService(db).vote(ticket, user, payload.type)
    return schemas.VoteResponse(success=True, votes=votes, user_vote=user_vote)


@router.get("/{ticket_id}/user-vote", response_model=schemas.UserVoteResponse)
def get_user_vote(
    ticket_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    ticket = _get_visible_ticket(db, ticket_id, user)
    return schemas.UserVoteResponse(user_vote=_current_vote(db, user, ticket.id))
