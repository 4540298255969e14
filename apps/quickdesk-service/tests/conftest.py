import os
from dataclasses import dataclass
from typing import Dict

import pytest

# Settings are cached on first use; set cheap hashing and a fixed secret
# before any quickdesk module reads them.
os.environ.setdefault("PYTEST_RUNNING", "1")
os.environ.setdefault("JWT_SECRET", "quickdesk-test-secret")
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")
os.environ.setdefault("ARGON2_PARALLELISM", "1")

from fastapi.testclient import TestClient

import quickdesk.db.database as db_module
from quickdesk.api.main import app
from quickdesk.db import models
from quickdesk.db.repositories import categories as category_repo
from quickdesk.db.repositories import users as user_repo
from quickdesk.utils.role_permissions import ROLE_ADMIN, ROLE_END_USER, ROLE_SUPPORT_AGENT
from quickdesk.utils.security import create_access_token, hash_password
from quickdesk.utils.settings import refresh_settings_cache

DEFAULT_PASSWORD = "secret123"


@dataclass
class Account:
    id: object
    email: str
    role: str
    token: str

    @property
    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture(autouse=True)
def _schema():
    """Fresh tables for every test on the shared in-memory engine."""
    models.Base.metadata.create_all(bind=db_module.engine)
    yield
    models.Base.metadata.drop_all(bind=db_module.engine)


@pytest.fixture(autouse=True)
def _fresh_settings():
    refresh_settings_cache()
    yield
    refresh_settings_cache()


@pytest.fixture
def db():
    session = db_module.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_account(db):
    """Create a user directly in the database and return an Account with a token."""
    counter = {"n": 0}

    def _make(role: str = ROLE_END_USER, email: str | None = None, name: str | None = None) -> Account:
        counter["n"] += 1
        email = email or f"{role.lower()}{counter['n']}@example.com"
        user = user_repo.create_user(
            db,
            name=name or f"{role.title()} {counter['n']}",
            email=email,
            password_hash=hash_password(DEFAULT_PASSWORD),
            role=role,
        )
        return Account(id=user.id, email=email, role=role, token=create_access_token(user.id))

    return _make


@pytest.fixture
def end_user(make_account) -> Account:
    return make_account(ROLE_END_USER, email="user@example.com", name="End User")


@pytest.fixture
def other_user(make_account) -> Account:
    return make_account(ROLE_END_USER, email="other@example.com", name="Other User")


@pytest.fixture
def agent(make_account) -> Account:
    return make_account(ROLE_SUPPORT_AGENT, email="agent@example.com", name="Agent Smith")


@pytest.fixture
def admin(make_account) -> Account:
    return make_account(ROLE_ADMIN, email="admin@example.com", name="Admin Person")


@pytest.fixture
def category(db, admin):
    return category_repo.create_category(
        db, name="Technical", description="Tech issues", color=None, created_by=admin.id
    )


@pytest.fixture
def create_ticket(client, category):
    """POST a ticket as `account` and return the JSON body."""

    def _create(account: Account, title: str = "Printer on fire", description: str = "It smokes", **extra):
        body = {"title": title, "description": description, "categoryId": str(category.id)}
        body.update(extra)
        r = client.post("/api/tickets", json=body, headers=account.headers)
        assert r.status_code == 201, r.text
        return r.json()

    return _create
