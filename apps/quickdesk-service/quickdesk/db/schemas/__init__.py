"""
Domain-split Pydantic schemas.

Wire models render camelCase keys; see `common.CamelModel`.
"""

# Import order: define base/simple types first to satisfy forward refs
from .common import CamelModel, UserSummary
from .users import (
    User,
    AdminUser,
    RegisterRequest,
    LoginRequest,
    ProfileUpdateRequest,
    RoleChangeRequest,
    AuthResponse,
    UserResponse,
)
from .categories import CategoryBase, CategoryCreate, CategoryUpdate, Category, CategoryWithCount
from .tickets import (
    TicketCreate,
    TicketStatusUpdate,
    TicketAssign,
    CommentCreate,
    VoteRequest,
    Comment,
    Ticket,
    TicketListItem,
    TicketDetail,
    Pagination,
    TicketListResponse,
    VoteResponse,
    UserVoteResponse,
)
from .role_requests import RoleUpgradeRequestCreate, RoleUpgradeRequestDecision, RoleUpgradeRequest
from .notifications import Notification, NotificationListResponse, MarkAllReadResponse
from .audits import AuditLogCreate, AuditLog
from .admin import CategoryTicketCount, Analytics

__all__ = [
    # Common
    "CamelModel",
    "UserSummary",
    # Users
    "User",
    "AdminUser",
    "RegisterRequest",
    "LoginRequest",
    "ProfileUpdateRequest",
    "RoleChangeRequest",
    "AuthResponse",
    "UserResponse",
    # Categories
    "CategoryBase",
    "CategoryCreate",
    "CategoryUpdate",
    "Category",
    "CategoryWithCount",
    # Tickets
    "TicketCreate",
    "TicketStatusUpdate",
    "TicketAssign",
    "CommentCreate",
    "VoteRequest",
    "Comment",
    "Ticket",
    "TicketListItem",
    "TicketDetail",
    "Pagination",
    "TicketListResponse",
    "VoteResponse",
    "UserVoteResponse",
    # Role requests
    "RoleUpgradeRequestCreate",
    "RoleUpgradeRequestDecision",
    "RoleUpgradeRequest",
    # Notifications
    "Notification",
    "NotificationListResponse",
    "MarkAllReadResponse",
    # Audits
    "AuditLogCreate",
    "AuditLog",
    # Admin
    "CategoryTicketCount",
    "Analytics",
]
