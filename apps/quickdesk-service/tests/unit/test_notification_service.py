import uuid

from quickdesk.services.notification_service import (
    EVENT_COMMENT,
    EVENT_NEW_TICKET,
    NotificationService,
)


def test_create_and_list_newest_first(db, end_user):
    svc = NotificationService(db)
    first = svc.create_notification(end_user.id, EVENT_COMMENT, "First", "one")
    second = svc.create_notification(end_user.id, EVENT_NEW_TICKET, "Second", "two", metadata={"priority": "HIGH"})
    db.commit()

    items = svc.get_user_notifications(end_user.id)
    assert [n.id for n in items] == [second.id, first.id]
    assert items[0].metadata_json == {"priority": "HIGH"}
    assert items[1].metadata_json is None
    assert svc.get_unread_count(end_user.id) == 2


def test_notify_users_skips_excluded_duplicates_and_none(db, end_user, other_user):
    svc = NotificationService(db)
    created = svc.notify_users(
        [end_user.id, None, end_user.id, other_user.id],
        EVENT_COMMENT,
        "t",
        "m",
        exclude=other_user.id,
    )
    db.commit()
    assert [n.user_id for n in created] == [end_user.id]


def test_mark_read_only_for_owner(db, end_user, other_user):
    svc = NotificationService(db)
    note = svc.create_notification(end_user.id, EVENT_COMMENT, "t", "m")
    db.commit()

    assert svc.mark_notification_read(note.id, other_user.id) is False
    assert svc.mark_notification_read(uuid.uuid4(), end_user.id) is False
    assert svc.mark_notification_read(note.id, end_user.id) is True
    db.refresh(note)
    assert note.is_read is True
    assert note.read_at is not None
    assert svc.get_unread_count(end_user.id) == 0


def test_unread_only_and_mark_all(db, end_user, other_user):
    svc = NotificationService(db)
    for i in range(3):
        svc.create_notification(end_user.id, EVENT_COMMENT, f"t{i}", "m")
    svc.create_notification(other_user.id, EVENT_COMMENT, "theirs", "m")
    db.commit()

    assert len(svc.get_user_notifications(end_user.id, unread_only=True, limit=2)) == 2
    assert svc.mark_all_read(end_user.id) == 3
    assert svc.get_user_notifications(end_user.id, unread_only=True) == []
    assert svc.get_unread_count(other_user.id) == 1
    assert svc.mark_all_read(end_user.id) == 0
