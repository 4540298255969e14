import uuid
from datetime import datetime
from typing import Optional

from .common import CamelModel, UserSummary


class RoleUpgradeRequestCreate(CamelModel):
    requested_role: Optional[str] = None
    reason: Optional[str] = None


class RoleUpgradeRequestDecision(CamelModel):
    status: Optional[str] = None


class RoleUpgradeRequest(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    current_role: str
    requested_role: str
    reason: str
    status: str
    processed_at: Optional[datetime] = None
    processed_by: Optional[uuid.UUID] = None
    created_at: datetime
    user: Optional[UserSummary] = None
    processed_by_user: Optional[UserSummary] = None
