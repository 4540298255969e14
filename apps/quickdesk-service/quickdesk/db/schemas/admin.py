import uuid
from typing import Dict, List

from .common import CamelModel


class CategoryTicketCount(CamelModel):
    id: uuid.UUID
    name: str
    color: str
    ticket_count: int


class Analytics(CamelModel):
    total_tickets: int
    open_tickets: int
    in_progress_tickets: int
    resolved_tickets: int
    closed_tickets: int
    total_users: int
    pending_requests: int
    active_agents: int
    tickets_by_category: List[CategoryTicketCount]
    tickets_by_status: Dict[str, int]
    tickets_by_priority: Dict[str, int]
