import uuid

import pytest
from fastapi.testclient import TestClient

from quickdesk.api.main import app
from quickdesk.db.repositories import audits as audit_repo


def test_list_requires_auth(client):
    assert client.get("/api/categories").status_code == 401


def test_list_with_ticket_counts_ordered_by_name(client, end_user, admin, create_ticket):
    client.post("/api/categories", json={"name": "Billing"}, headers=admin.headers)
    create_ticket(end_user)
    create_ticket(end_user, title="Second")

    r = client.get("/api/categories", headers=end_user.headers)
    assert r.status_code == 200
    items = r.json()
    assert [c["name"] for c in items] == ["Billing", "Technical"]
    assert [c["ticketCount"] for c in items] == [0, 2]


def test_create_category(client, admin):
    r = client.post(
        "/api/categories",
        json={"name": "  Hardware ", "description": "Physical things", "color": "#EF4444"},
        headers=admin.headers,
    )
    assert r.status_code == 201
    body = r.json()
    assert body["name"] == "Hardware"
    assert body["color"] == "#EF4444"
    assert body["createdBy"] == str(admin.id)
    assert body["ticketCount"] == 0


def test_create_category_default_color(client, admin):
    r = client.post("/api/categories", json={"name": "Network"}, headers=admin.headers)
    assert r.status_code == 201
    assert r.json()["color"] == "#3B82F6"


def test_create_category_validation(client, admin, category):
    r = client.post("/api/categories", json={"name": "   "}, headers=admin.headers)
    assert r.status_code == 400

    r = client.post("/api/categories", json={"name": "technical"}, headers=admin.headers)
    assert r.status_code == 400
    assert r.json()["error"] == "Category already exists"


def test_non_admin_cannot_manage(client, agent, end_user, category):
    for account in (agent, end_user):
        r = client.post("/api/categories", json={"name": "Nope"}, headers=account.headers)
        assert r.status_code == 403
        assert r.json() == {"error": "Insufficient permissions"}
        r = client.delete(f"/api/categories/{category.id}", headers=account.headers)
        assert r.status_code == 403


def test_update_category(client, admin, category):
    r = client.put(f"/api/categories/{category.id}", json={"description": "Updated"}, headers=admin.headers)
    assert r.status_code == 200
    assert r.json()["description"] == "Updated"
    assert r.json()["name"] == "Technical"

    other = client.post("/api/categories", json={"name": "Billing"}, headers=admin.headers).json()
    r = client.put(f"/api/categories/{other['id']}", json={"name": "Technical"}, headers=admin.headers)
    assert r.status_code == 400

    r = client.put(f"/api/categories/{uuid.uuid4()}", json={"name": "X"}, headers=admin.headers)
    assert r.status_code == 404


def test_delete_category(client, admin, end_user, category, create_ticket):
    empty = client.post("/api/categories", json={"name": "Empty"}, headers=admin.headers).json()
    r = client.delete(f"/api/categories/{empty['id']}", headers=admin.headers)
    assert r.status_code == 204

    create_ticket(end_user)
    r = client.delete(f"/api/categories/{category.id}", headers=admin.headers)
    assert r.status_code == 409

    r = client.delete(f"/api/categories/{uuid.uuid4()}", headers=admin.headers)
    assert r.status_code == 404


def test_category_changes_are_audited(client, admin):
    client.post("/api/categories", json={"name": "Audited"}, headers=admin.headers)
    r = client.get("/api/admin/audit-logs", params={"actionType": "category_create"}, headers=admin.headers)
    assert r.status_code == 200
    entries = r.json()
    assert len(entries) == 1
    assert entries[0]["metadata"] == {"name": "Audited"}
    assert entries[0]["actorUserId"] == str(admin.id)


def test_delete_in_use_reports_conflict(client, admin, end_user, category, create_ticket):
    create_ticket(end_user)
    r = client.delete(f"/api/categories/{category.id}", headers=admin.headers)
    assert r.status_code == 409
    assert r.json() == {"error": "Category still has tickets"}


class TestCategoryWritesAreAtomic:
    @pytest.fixture
    def failing_audit(self, monkeypatch):
        def _boom(*args, **kwargs):
            raise RuntimeError("audit store unavailable")

        monkeypatch.setattr(audit_repo, "create_audit_log", _boom)

    @pytest.fixture
    def lenient_client(self):
        with TestClient(app, raise_server_exceptions=False) as c:
            yield c

    def _names(self, client, account):
        return [c["name"] for c in client.get("/api/categories", headers=account.headers).json()]

    def test_create_rolls_back(self, client, lenient_client, admin, failing_audit):
        r = lenient_client.post("/api/categories", json={"name": "Hardware"}, headers=admin.headers)
        assert r.status_code == 500
        assert r.json() == {"error": "Something went wrong!"}
        assert self._names(client, admin) == []

    def test_update_rolls_back(self, client, lenient_client, admin, category, failing_audit):
        r = lenient_client.put(f"/api/categories/{category.id}", json={"name": "Renamed"}, headers=admin.headers)
        assert r.status_code == 500
        assert self._names(client, admin) == ["Technical"]

    def test_delete_rolls_back(self, client, lenient_client, admin, category, failing_audit):
        r = lenient_client.delete(f"/api/categories/{category.id}", headers=admin.headers)
        assert r.status_code == 500
        assert self._names(client, admin) == ["Technical"]
