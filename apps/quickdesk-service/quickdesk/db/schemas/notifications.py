import uuid
from datetime import datetime
from typing import Optional, Dict, Any, List

from pydantic import Field

from .common import CamelModel


class Notification(CamelModel):
    id: uuid.UUID
    event_type: str
    title: str
    message: str
    ticket_id: Optional[uuid.UUID] = None
    # ORM attribute is metadata_json; the declarative `metadata` name is taken
    metadata_json: Optional[Dict[str, Any]] = Field(default=None, serialization_alias="metadata")
    is_read: bool
    read_at: Optional[datetime] = None
    created_at: datetime


class NotificationListResponse(CamelModel):
    notifications: List[Notification]
    unread_count: int
    total_count: int


class MarkAllReadResponse(CamelModel):
    updated: int
