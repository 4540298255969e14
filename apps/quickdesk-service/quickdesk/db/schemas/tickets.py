import uuid
from datetime import datetime
from typing import Optional, List

from .common import CamelModel, UserSummary
from .categories import Category


class TicketCreate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[uuid.UUID] = None
    priority: Optional[str] = None


class TicketStatusUpdate(CamelModel):
    status: Optional[str] = None


class TicketAssign(CamelModel):
    assignee_id: Optional[uuid.UUID] = None


class CommentCreate(CamelModel):
    content: Optional[str] = None


class VoteRequest(CamelModel):
    type: Optional[str] = None


class Comment(CamelModel):
    id: uuid.UUID
    content: str
    ticket_id: uuid.UUID
    user_id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    user: UserSummary


class Ticket(CamelModel):
    id: uuid.UUID
    title: str
    description: str
    status: str
    priority: str
    votes: int
    category_id: uuid.UUID
    created_by: uuid.UUID
    assigned_to: Optional[uuid.UUID] = None
    created_at: datetime
    updated_at: datetime
    closed_at: Optional[datetime] = None
    creator: UserSummary
    assignee: Optional[UserSummary] = None
    category: Category


class TicketListItem(Ticket):
    comment_count: int = 0
    user_vote: Optional[str] = None


class TicketDetail(Ticket):
    comments: List[Comment] = []
    user_vote: Optional[str] = None


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class TicketListResponse(CamelModel):
    tickets: List[TicketListItem]
    pagination: Pagination


class VoteResponse(CamelModel):
    success: bool = True
    votes: int
    user_vote: Optional[str] = None


class UserVoteResponse(CamelModel):
    user_vote: Optional[str] = None
