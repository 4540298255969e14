"""Runtime configuration helpers sourced from the environment."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from functools import lru_cache
from typing import FrozenSet, Tuple


DEFAULT_CORS_ORIGINS = (
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:5173",
)


@dataclass(frozen=True)
class Settings:
    jwt_secret: str
    jwt_algorithm: str
    jwt_expires_days: int
    argon2_time_cost: int
    argon2_memory_cost: int
    argon2_parallelism: int
    admin_emails: FrozenSet[str]
    cors_origins: Tuple[str, ...]
    version: str


def _normalize_list_env(var_name: str) -> set:
    raw = os.getenv(var_name, "")
    values = set()
    for entry in raw.split(","):
        cleaned = entry.strip().strip('"').strip("'")
        if cleaned:
            values.add(cleaned)
    return values


def _int_env(var_name: str, default: int) -> int:
    raw = os.getenv(var_name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{var_name} must be an integer, got {raw!r}")


def is_pytest_runtime() -> bool:
    """Best-effort detection that we're executing under pytest."""
    if os.getenv("PYTEST_RUNNING") == "1":
        return True
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True
    return "pytest" in sys.modules


def _jwt_secret() -> str:
    secret = os.getenv("JWT_SECRET")
    if secret:
        return secret
    if is_pytest_runtime():
        return "quickdesk-test-secret"
    raise RuntimeError("JWT_SECRET must be set to sign access tokens")


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return the cached settings built from the environment."""
    origins = _normalize_list_env("CORS_ORIGINS")
    return Settings(
        jwt_secret=_jwt_secret(),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        jwt_expires_days=_int_env("JWT_EXPIRES_DAYS", 7),
        argon2_time_cost=_int_env("ARGON2_TIME_COST", 2),
        argon2_memory_cost=_int_env("ARGON2_MEMORY_COST", 65536),
        argon2_parallelism=_int_env("ARGON2_PARALLELISM", 4),
        admin_emails=frozenset(e.lower() for e in _normalize_list_env("ADMIN_EMAILS")),
        cors_origins=tuple(sorted(origins)) if origins else DEFAULT_CORS_ORIGINS,
        version=os.getenv("VERSION", "unknown"),
    )


def refresh_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_settings.cache_clear()
