"""
Password hashing and access token utilities.

Responsibilities:
- Hash and verify passwords with Argon2id
- Issue and decode signed JWT access tokens carrying the user id
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from argon2.low_level import Type

from quickdesk.utils.settings import get_settings


@dataclass(frozen=True)
class TokenClaims:
    user_id: uuid.UUID
    expires_at: datetime


@lru_cache(maxsize=None)
def _hasher() -> PasswordHasher:
    settings = get_settings()
    return PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
        hash_len=32,
        type=Type.ID,
    )


def hash_password(password: str) -> str:
    return _hasher().hash(password)


def verify_password(password: str, encoded_hash: str) -> bool:
    """Return True when the password matches; unknown hash formats never match."""
    if not password or not encoded_hash:
        return False
    try:
        return _hasher().verify(encoded_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def create_access_token(user_id: uuid.UUID, *, now: Optional[datetime] = None) -> str:
    """Return a signed token for the user, valid for JWT_EXPIRES_DAYS."""
    settings = get_settings()
    issued = now or datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "userId": str(user_id),
        "iat": issued,
        "exp": issued + timedelta(days=settings.jwt_expires_days),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Optional[TokenClaims]:
    """Decode and verify a token.

    Returns None if the signature, expiry or payload is invalid.
    """
    if not token:
        return None
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.InvalidTokenError:
        return None
    raw_id = payload.get("userId") or payload.get("sub")
    try:
        user_id = uuid.UUID(str(raw_id))
    except (TypeError, ValueError):
        return None
    return TokenClaims(
        user_id=user_id,
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
