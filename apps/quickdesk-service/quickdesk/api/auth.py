"""
Authentication helpers and account creation.

Normalizes emails, registers users with their initial role (bootstrap
admins come from ADMIN_EMAILS), and checks credentials.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from quickdesk.db import models
from quickdesk.db.repositories import users as user_repo
from quickdesk.utils.role_permissions import ROLE_ADMIN, ROLE_END_USER
from quickdesk.utils.security import hash_password, verify_password
from quickdesk.utils.settings import get_settings

logger = logging.getLogger("quickdesk.auth")


def _normalize_email(email: Optional[str]) -> Optional[str]:
    if not email:
        return None
    return email.strip().lower()


def _admin_emails() -> frozenset:
    return get_settings().admin_emails


def initial_role_for(email: str) -> str:
    """New accounts are END_USER unless the email is a configured bootstrap admin."""
    if _normalize_email(email) in _admin_emails():
        return ROLE_ADMIN
    return ROLE_END_USER


def register_user(db: Session, *, name: str, email: str, password: str) -> models.User:
    email = _normalize_email(email)
    role = initial_role_for(email)
    user = user_repo.create_user(
        db,
        name=name.strip(),
        email=email,
        password_hash=hash_password(password),
        role=role,
    )
    if role == ROLE_ADMIN:
        logger.info("Bootstrap admin registered: %s", email)
    return user


def authenticate(db: Session, email: Optional[str], password: Optional[str]) -> Optional[models.User]:
    """Return the user when the credentials match, otherwise None."""
    email = _normalize_email(email)
    if not email or not password:
        return None
    user = user_repo.get_user_by_email(db, email)
    if user is None:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user
