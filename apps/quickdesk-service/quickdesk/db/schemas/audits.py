import uuid
from datetime import datetime
from typing import Optional, Dict, Any

from pydantic import BaseModel, Field

from .common import CamelModel


class AuditLogCreate(BaseModel):
    action_type: str
    status: str
    target_type: Optional[str] = None
    target_id: Optional[uuid.UUID] = None
    reason: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class AuditLog(CamelModel):
    id: uuid.UUID
    actor_user_id: uuid.UUID
    action_type: str
    status: str
    target_type: Optional[str] = None
    target_id: Optional[uuid.UUID] = None
    reason: Optional[str] = None
    metadata_json: Optional[Dict[str, Any]] = Field(default=None, serialization_alias="metadata")
    created_at: datetime
