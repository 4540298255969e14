"""
Database engine and session management.

Builds the SQLAlchemy engine from environment configuration with a test
fallback (SQLite in-memory) and exposes FastAPI dependencies.
"""
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from quickdesk.utils.settings import is_pytest_runtime

_POSTGRES_PARTS = ("POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_HOST", "POSTGRES_PORT", "POSTGRES_DB")


def _get_database_url() -> str:
    """DATABASE_URL wins; otherwise assemble a Postgres URL from POSTGRES_* parts."""
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    parts = {name: os.getenv(name) for name in _POSTGRES_PARTS}
    missing = [name for name, value in parts.items() if not value]
    if missing:
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")
    return (
        "postgresql://{POSTGRES_USER}:{POSTGRES_PASSWORD}"
        "@{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DB}".format(**parts)
    )


# Test override strategy:
# 1. If QUICKDESK_TEST_DB is set, use it.
# 2. Else if running under pytest, force in-memory sqlite.
# 3. Else resolve from DATABASE_URL / POSTGRES_* variables.
explicit_test_db = os.getenv("QUICKDESK_TEST_DB")

if explicit_test_db:
    DATABASE_URL = explicit_test_db
    _engine_kwargs = {"connect_args": {"check_same_thread": False}} if DATABASE_URL.startswith("sqlite") else {}
elif is_pytest_runtime():
    # In-memory SQLite with StaticPool so the schema persists across connections
    DATABASE_URL = "sqlite+pysqlite:///:memory:"
    _engine_kwargs = {
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,
    }
else:
    DATABASE_URL = _get_database_url()
    _engine_kwargs = {"pool_pre_ping": True}
    if DATABASE_URL.startswith("sqlite"):
        _engine_kwargs = {"connect_args": {"check_same_thread": False}}

engine = create_engine(DATABASE_URL, **_engine_kwargs)

# Create a SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_sqlite_schema() -> None:
    """Create all tables when running against SQLite.

    Postgres deployments are managed by Alembic migrations instead.
    """
    if str(engine.url).startswith("sqlite"):
        from quickdesk.db import models  # local import to avoid circular import at module load
        models.Base.metadata.create_all(bind=engine)


def get_db():
    """Dependency to get a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
