import pytest

from quickdesk.db import database

PARTS = {
    "POSTGRES_USER": "desk",
    "POSTGRES_PASSWORD": "pw",
    "POSTGRES_HOST": "db",
    "POSTGRES_PORT": "5432",
    "POSTGRES_DB": "quickdesk",
}


def test_explicit_database_url_wins(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://x:y@h:1/d")
    for name, value in PARTS.items():
        monkeypatch.setenv(name, value)
    assert database._get_database_url() == "postgresql://x:y@h:1/d"


def test_url_from_parts(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    for name, value in PARTS.items():
        monkeypatch.setenv(name, value)
    assert database._get_database_url() == "postgresql://desk:pw@db:5432/quickdesk"


def test_missing_parts_are_named(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    for name in PARTS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("POSTGRES_USER", "desk")
    with pytest.raises(ValueError) as exc:
        database._get_database_url()
    assert "POSTGRES_PASSWORD" in str(exc.value)
    assert "POSTGRES_USER" not in str(exc.value)


def test_tests_run_on_in_memory_sqlite():
    assert database.DATABASE_URL.startswith("sqlite")
