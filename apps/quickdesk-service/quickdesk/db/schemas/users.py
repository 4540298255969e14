from datetime import datetime
from typing import Optional

from .common import CamelModel, UserSummary


class User(UserSummary):
    role: str


class AdminUser(User):
    created_at: datetime
    ticket_count: int = 0


# Request bodies keep every field optional so that missing values surface as
# the API's own 400 messages rather than generic validation errors.
class RegisterRequest(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileUpdateRequest(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    current_password: Optional[str] = None
    new_password: Optional[str] = None


class RoleChangeRequest(CamelModel):
    role: Optional[str] = None


class AuthResponse(CamelModel):
    user: User
    token: str


class UserResponse(CamelModel):
    user: User
