"""
Service-layer exceptions.

Services raise these; the app-level handler in ``quickdesk.api.main``
renders them as ``{"error": message}`` with the matching status code.
"""


class ServiceError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequest(ServiceError, ValueError):
    status_code = 400


class AccessDenied(ServiceError, PermissionError):
    status_code = 403


class NotFound(ServiceError, LookupError):
    status_code = 404


class Conflict(ServiceError):
    status_code = 409
