import uuid

import pytest


class TestCreateTicket:
    def test_create(self, client, end_user, category):
        r = client.post(
            "/api/tickets",
            json={"title": "Laptop broken", "description": "Screen is black", "categoryId": str(category.id), "priority": "HIGH"},
            headers=end_user.headers,
        )
        assert r.status_code == 201
        body = r.json()
        assert body["status"] == "OPEN"
        assert body["priority"] == "HIGH"
        assert body["votes"] == 0
        assert body["creator"] == {"id": str(end_user.id), "name": "End User", "email": end_user.email}
        assert body["category"]["name"] == "Technical"
        assert body["closedAt"] is None
        assert body["assignee"] is None

    def test_snake_case_body_is_accepted(self, client, end_user, category):
        r = client.post(
            "/api/tickets",
            json={"title": "t", "description": "d", "category_id": str(category.id)},
            headers=end_user.headers,
        )
        assert r.status_code == 201
        assert r.json()["priority"] == "MEDIUM"

    def test_validation(self, client, end_user, category):
        cases = [
            ({"title": "", "description": "d", "categoryId": str(category.id)}, 400),
            ({"title": "t", "description": "  ", "categoryId": str(category.id)}, 400),
            ({"title": "t", "description": "d", "categoryId": str(uuid.uuid4())}, 400),
            ({"title": "t", "description": "d", "categoryId": str(category.id), "priority": "BLOCKER"}, 400),
            ({"title": "t", "description": "d", "categoryId": "not-a-uuid"}, 400),
        ]
        for body, expected in cases:
            r = client.post("/api/tickets", json=body, headers=end_user.headers)
            assert r.status_code == expected, body
            assert "error" in r.json()

    def test_unknown_category_message(self, client, end_user):
        r = client.post(
            "/api/tickets",
            json={"title": "t", "description": "d", "categoryId": str(uuid.uuid4())},
            headers=end_user.headers,
        )
        assert r.json() == {"error": "Invalid category"}


class TestListTickets:
    def test_end_user_sees_only_own(self, client, end_user, other_user, agent, create_ticket):
        create_ticket(end_user, title="Mine")
        create_ticket(other_user, title="Theirs")

        mine = client.get("/api/tickets", headers=end_user.headers).json()
        assert [t["title"] for t in mine["tickets"]] == ["Mine"]
        assert mine["pagination"] == {"page": 1, "limit": 10, "total": 1, "pages": 1}

        everything = client.get("/api/tickets", headers=agent.headers).json()
        assert {t["title"] for t in everything["tickets"]} == {"Mine", "Theirs"}

    def test_filters_and_search(self, client, agent, end_user, admin, category, create_ticket):
        billing = client.post("/api/categories", json={"name": "Billing"}, headers=admin.headers).json()
        create_ticket(end_user, title="Invoice missing", description="Need March invoice", categoryId=billing["id"])
        printer = create_ticket(end_user, title="Printer jam", description="Paper stuck")
        client.put(f"/api/tickets/{printer['id']}/status", json={"status": "IN_PROGRESS"}, headers=agent.headers)

        def titles(**params):
            r = client.get("/api/tickets", params=params, headers=agent.headers)
            assert r.status_code == 200
            return [t["title"] for t in r.json()["tickets"]]

        assert titles(status="IN_PROGRESS") == ["Printer jam"]
        assert titles(category=billing["id"]) == ["Invoice missing"]
        assert titles(search="MARCH") == ["Invoice missing"]
        assert titles(search="jam") == ["Printer jam"]
        assert titles(search="nothing-matches") == []

    def test_pagination(self, client, end_user, create_ticket):
        for i in range(5):
            create_ticket(end_user, title=f"T{i}")

        r = client.get("/api/tickets", params={"page": 2, "limit": 2}, headers=end_user.headers).json()
        assert r["pagination"] == {"page": 2, "limit": 2, "total": 5, "pages": 3}
        assert [t["title"] for t in r["tickets"]] == ["T2", "T1"]

        capped = client.get("/api/tickets", params={"limit": 1000}, headers=end_user.headers).json()
        assert capped["pagination"]["limit"] == 100

    def test_sorting(self, client, end_user, create_ticket):
        create_ticket(end_user, title="b-low", priority="LOW")
        create_ticket(end_user, title="a-urgent", priority="URGENT")
        create_ticket(end_user, title="c-medium", priority="MEDIUM")

        def titles(**params):
            return [t["title"] for t in client.get("/api/tickets", params=params, headers=end_user.headers).json()["tickets"]]

        assert titles(sortBy="priority", sortOrder="desc") == ["a-urgent", "c-medium", "b-low"]
        assert titles(sortBy="title", sortOrder="asc") == ["a-urgent", "b-low", "c-medium"]
        assert titles() == ["c-medium", "a-urgent", "b-low"]

    @pytest.mark.parametrize(
        "params",
        [{"status": "DONE"}, {"sortBy": "password"}, {"sortOrder": "sideways"}, {"category": "nope"}],
    )
    def test_invalid_query(self, client, end_user, params):
        r = client.get("/api/tickets", params=params, headers=end_user.headers)
        assert r.status_code == 400

    def test_comment_count_and_user_vote(self, client, end_user, agent, create_ticket):
        ticket = create_ticket(end_user)
        client.post(f"/api/tickets/{ticket['id']}/comments", json={"content": "hi"}, headers=agent.headers)
        client.post(f"/api/tickets/{ticket['id']}/vote", json={"type": "UP"}, headers=end_user.headers)

        item = client.get("/api/tickets", headers=end_user.headers).json()["tickets"][0]
        assert item["commentCount"] == 1
        assert item["userVote"] == "UP"
        assert item["votes"] == 1

        staff_view = client.get("/api/tickets", headers=agent.headers).json()["tickets"][0]
        assert staff_view["userVote"] is None


class TestTicketDetail:
    def test_detail_with_comments_oldest_first(self, client, end_user, agent, create_ticket):
        ticket = create_ticket(end_user)
        client.post(f"/api/tickets/{ticket['id']}/comments", json={"content": "first"}, headers=agent.headers)
        client.post(f"/api/tickets/{ticket['id']}/comments", json={"content": "second"}, headers=end_user.headers)

        r = client.get(f"/api/tickets/{ticket['id']}", headers=end_user.headers)
        assert r.status_code == 200
        body = r.json()
        assert [c["content"] for c in body["comments"]] == ["first", "second"]
        assert body["comments"][0]["user"]["name"] == "Agent Smith"
        assert body["userVote"] is None

    def test_access_rules(self, client, end_user, other_user, agent, admin, create_ticket):
        ticket = create_ticket(end_user)
        r = client.get(f"/api/tickets/{ticket['id']}", headers=other_user.headers)
        assert r.status_code == 403
        assert r.json() == {"error": "Access denied"}
        for account in (agent, admin):
            assert client.get(f"/api/tickets/{ticket['id']}", headers=account.headers).status_code == 200

    def test_missing(self, client, end_user):
        r = client.get(f"/api/tickets/{uuid.uuid4()}", headers=end_user.headers)
        assert r.status_code == 404


class TestStatusChange:
    def test_agent_moves_and_closes(self, client, end_user, agent, create_ticket):
        ticket = create_ticket(end_user)
        r = client.put(f"/api/tickets/{ticket['id']}/status", json={"status": "CLOSED"}, headers=agent.headers)
        assert r.status_code == 200
        assert r.json()["status"] == "CLOSED"
        assert r.json()["closedAt"] is not None

        r = client.put(f"/api/tickets/{ticket['id']}/status", json={"status": "OPEN"}, headers=agent.headers)
        assert r.json()["closedAt"] is None

    def test_creator_closes_after_response(self, client, end_user, agent, create_ticket):
        ticket = create_ticket(end_user)
        url = f"/api/tickets/{ticket['id']}/status"

        r = client.put(url, json={"status": "CLOSED"}, headers=end_user.headers)
        assert r.status_code == 403
        assert r.json() == {"error": "You can only close your own tickets after receiving responses"}

        client.post(f"/api/tickets/{ticket['id']}/comments", json={"content": "fixed"}, headers=agent.headers)
        r = client.put(url, json={"status": "RESOLVED"}, headers=end_user.headers)
        assert r.status_code == 403
        r = client.put(url, json={"status": "CLOSED"}, headers=end_user.headers)
        assert r.status_code == 200

    def test_invalid_and_missing(self, client, agent, end_user, create_ticket):
        ticket = create_ticket(end_user)
        r = client.put(f"/api/tickets/{ticket['id']}/status", json={"status": "DONE"}, headers=agent.headers)
        assert r.status_code == 400
        assert r.json() == {"error": "Invalid status"}
        r = client.put(f"/api/tickets/{uuid.uuid4()}/status", json={"status": "OPEN"}, headers=agent.headers)
        assert r.status_code == 404


class TestAssignment:
    def test_assign_and_unassign(self, client, end_user, agent, admin, create_ticket):
        ticket = create_ticket(end_user)
        url = f"/api/tickets/{ticket['id']}/assign"

        r = client.put(url, json={"assigneeId": str(agent.id)}, headers=admin.headers)
        assert r.status_code == 200
        assert r.json()["assignee"]["id"] == str(agent.id)

        r = client.put(url, json={"assigneeId": None}, headers=agent.headers)
        assert r.status_code == 200
        assert r.json()["assignee"] is None

    def test_assign_rules(self, client, end_user, other_user, agent, create_ticket):
        ticket = create_ticket(end_user)
        url = f"/api/tickets/{ticket['id']}/assign"
        assert client.put(url, json={"assigneeId": str(agent.id)}, headers=end_user.headers).status_code == 403
        assert client.put(url, json={"assigneeId": str(other_user.id)}, headers=agent.headers).status_code == 400
        assert client.put(url, json={"assigneeId": str(uuid.uuid4())}, headers=agent.headers).status_code == 400


class TestComments:
    def test_add_comment(self, client, end_user, create_ticket):
        ticket = create_ticket(end_user)
        r = client.post(f"/api/tickets/{ticket['id']}/comments", json={"content": "More details"}, headers=end_user.headers)
        assert r.status_code == 201
        body = r.json()
        assert body["content"] == "More details"
        assert body["ticketId"] == ticket["id"]
        assert body["user"]["id"] == str(end_user.id)

    def test_comment_rules(self, client, end_user, other_user, create_ticket):
        ticket = create_ticket(end_user)
        url = f"/api/tickets/{ticket['id']}/comments"
        assert client.post(url, json={"content": "  "}, headers=end_user.headers).status_code == 400
        assert client.post(url, json={"content": "hi"}, headers=other_user.headers).status_code == 403
        missing = f"/api/tickets/{uuid.uuid4()}/comments"
        assert client.post(missing, json={"content": "hi"}, headers=end_user.headers).status_code == 404
