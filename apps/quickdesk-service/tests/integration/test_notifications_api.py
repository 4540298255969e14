import uuid


def _notifications(client, account, **params):
    r = client.get("/api/notifications", params=params, headers=account.headers)
    assert r.status_code == 200
    return r.json()


def test_ticket_events_notify_the_right_people(client, end_user, agent, admin, create_ticket):
    ticket = create_ticket(end_user, priority="URGENT")

    staff_feed = _notifications(client, agent)
    assert staff_feed["unreadCount"] == 1
    item = staff_feed["notifications"][0]
    assert item["eventType"] == "new_ticket"
    assert item["ticketId"] == ticket["id"]
    assert item["metadata"] == {"priority": "URGENT"}
    assert item["isRead"] is False
    assert _notifications(client, admin)["unreadCount"] == 1
    assert _notifications(client, end_user)["totalCount"] == 0

    client.put(f"/api/tickets/{ticket['id']}/assign", json={"assigneeId": str(agent.id)}, headers=admin.headers)
    client.post(f"/api/tickets/{ticket['id']}/comments", json={"content": "On it"}, headers=agent.headers)
    client.put(f"/api/tickets/{ticket['id']}/status", json={"status": "IN_PROGRESS"}, headers=agent.headers)

    creator_events = [n["eventType"] for n in _notifications(client, end_user)["notifications"]]
    assert sorted(creator_events) == ["comment", "status_change"]

    agent_events = [n["eventType"] for n in _notifications(client, agent)["notifications"]]
    assert sorted(agent_events) == ["assignment", "new_ticket"]


def test_role_request_events(client, end_user, admin):
    request = client.post("/api/role-requests", json={"requestedRole": "ADMIN"}, headers=end_user.headers).json()
    assert [n["eventType"] for n in _notifications(client, admin)["notifications"]] == ["role_request"]

    client.put(f"/api/role-requests/{request['id']}", json={"status": "REJECTED"}, headers=admin.headers)
    feed = _notifications(client, end_user)["notifications"]
    assert [n["title"] for n in feed] == ["Role Request Rejected"]


def test_unread_only_and_mark_read(client, end_user, agent, create_ticket):
    create_ticket(end_user, title="one")
    create_ticket(end_user, title="two")

    feed = _notifications(client, agent)
    assert feed["unreadCount"] == 2
    first = feed["notifications"][0]

    r = client.post(f"/api/notifications/{first['id']}/read", headers=agent.headers)
    assert r.status_code == 204

    unread = _notifications(client, agent, unreadOnly="true")
    assert unread["unreadCount"] == 1
    assert unread["totalCount"] == 1
    assert unread["notifications"][0]["id"] != first["id"]

    everything = _notifications(client, agent)
    read_item = next(n for n in everything["notifications"] if n["id"] == first["id"])
    assert read_item["isRead"] is True
    assert read_item["readAt"] is not None


def test_mark_read_is_scoped_to_owner(client, end_user, agent, admin, create_ticket):
    create_ticket(end_user)
    agent_item = _notifications(client, agent)["notifications"][0]

    r = client.post(f"/api/notifications/{agent_item['id']}/read", headers=admin.headers)
    assert r.status_code == 404
    assert r.json() == {"error": "Notification not found"}
    assert client.post(f"/api/notifications/{uuid.uuid4()}/read", headers=agent.headers).status_code == 404
    assert _notifications(client, agent)["unreadCount"] == 1


def test_mark_all_read(client, end_user, agent, create_ticket):
    for i in range(3):
        create_ticket(end_user, title=f"t{i}")

    r = client.post("/api/notifications/read-all", headers=agent.headers)
    assert r.status_code == 200
    assert r.json() == {"updated": 3}
    assert _notifications(client, agent)["unreadCount"] == 0
    assert client.post("/api/notifications/read-all", headers=agent.headers).json() == {"updated": 0}


def test_limit(client, end_user, agent, create_ticket):
    for i in range(3):
        create_ticket(end_user, title=f"t{i}")
    feed = _notifications(client, agent, limit=2)
    assert feed["totalCount"] == 2
    assert feed["unreadCount"] == 3


def test_requires_auth(client):
    assert client.get("/api/notifications").status_code == 401
