"""
Tests for role capabilities and the ticket permission helpers built on them.
"""
import uuid
from types import SimpleNamespace

from quickdesk.services.permissions import (
    can_change_ticket_status,
    can_triage,
    can_view_ticket,
)
from quickdesk.utils.role_permissions import (
    ADMIN_ROLES,
    ROLE_ADMIN,
    ROLE_END_USER,
    ROLE_SUPPORT_AGENT,
    STAFF_ROLES,
    role_allows_triage,
    role_sees_all_tickets,
)


def _user(role):
    return SimpleNamespace(id=uuid.uuid4(), role=role)


def _ticket(creator):
    return SimpleNamespace(id=uuid.uuid4(), created_by=creator.id)


class TestRoleCapabilities:
    def test_end_user(self):
        assert not role_sees_all_tickets(ROLE_END_USER)
        assert not role_allows_triage(ROLE_END_USER)

    def test_support_agent(self):
        assert role_sees_all_tickets(ROLE_SUPPORT_AGENT)
        assert role_allows_triage(ROLE_SUPPORT_AGENT)
        assert ROLE_SUPPORT_AGENT not in ADMIN_ROLES

    def test_admin(self):
        assert role_sees_all_tickets(ROLE_ADMIN)
        assert role_allows_triage(ROLE_ADMIN)
        assert ROLE_ADMIN in ADMIN_ROLES

    def test_unknown_role(self):
        assert not role_sees_all_tickets("OWNER")
        assert not role_allows_triage("OWNER")

    def test_staff_roles(self):
        assert STAFF_ROLES == {ROLE_SUPPORT_AGENT, ROLE_ADMIN}


class TestTicketPermissions:
    def test_creator_and_staff_can_view(self):
        owner = _user(ROLE_END_USER)
        ticket = _ticket(owner)
        assert can_view_ticket(ticket, owner)
        assert can_view_ticket(ticket, _user(ROLE_SUPPORT_AGENT))
        assert can_view_ticket(ticket, _user(ROLE_ADMIN))
        assert not can_view_ticket(ticket, _user(ROLE_END_USER))
        assert not can_view_ticket(None, owner)
        assert not can_view_ticket(ticket, None)

    def test_staff_can_set_any_status(self):
        ticket = _ticket(_user(ROLE_END_USER))
        for role in (ROLE_SUPPORT_AGENT, ROLE_ADMIN):
            assert can_change_ticket_status(ticket, "IN_PROGRESS", _user(role), comment_count=0)

    def test_creator_may_close_only_after_a_response(self):
        owner = _user(ROLE_END_USER)
        ticket = _ticket(owner)
        assert not can_change_ticket_status(ticket, "CLOSED", owner, comment_count=0)
        assert can_change_ticket_status(ticket, "CLOSED", owner, comment_count=1)
        assert not can_change_ticket_status(ticket, "RESOLVED", owner, comment_count=3)

    def test_other_end_user_cannot_close(self):
        ticket = _ticket(_user(ROLE_END_USER))
        assert not can_change_ticket_status(ticket, "CLOSED", _user(ROLE_END_USER), comment_count=5)

    def test_triage_helper(self):
        assert can_triage(_user(ROLE_SUPPORT_AGENT))
        assert not can_triage(_user(ROLE_END_USER))
        assert not can_triage(None)
