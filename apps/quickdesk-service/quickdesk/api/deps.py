"""
API dependency helpers.

Resolves the calling user from the Bearer token and gates routes by role.
"""
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from quickdesk.db import models
from quickdesk.db.database import get_db
from quickdesk.db.repositories import users as user_repo
from quickdesk.utils.role_permissions import ADMIN_ROLES, STAFF_ROLES
from quickdesk.utils.security import decode_access_token

# Contract:
# Returns the SQLAlchemy User for the request.
# Raises 401 when no token is sent and 403 when it does not resolve to a user.


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def get_current_user(
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(default=None),
) -> models.User:
    token = _bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Access token required")

    claims = decode_access_token(token)
    if claims is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")

    user = user_repo.get_user(db, claims.user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")
    return user


def require_role(*roles: str):
    """Dependency factory: allow only users whose role is in `roles`."""
    allowed = frozenset(roles)

    def _dependency(user: models.User = Depends(get_current_user)) -> models.User:
        if user.role not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return user

    return _dependency


require_staff = require_role(*STAFF_ROLES)
require_admin = require_role(*ADMIN_ROLES)
