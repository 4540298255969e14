"""Business logic services package with public service helpers."""

from .errors import AccessDenied, Conflict, InvalidRequest, NotFound, ServiceError
from .notification_service import NotificationService
from .role_request_service import RoleRequestService
from .ticket_service import TicketService

__all__ = [
    "AccessDenied",
    "Conflict",
    "InvalidRequest",
    "NotFound",
    "ServiceError",
    "NotificationService",
    "RoleRequestService",
    "TicketService",
]
