"""
Tests for the notification sink.

Covers:
- Dispatcher persists intents and isolates failing ones
- Recipient scoping of reads and read-flag updates
"""

import pytest

from brandhub.models.notification import Notification, NotificationType
from brandhub.services.notification_service import (
    NotificationDispatcher,
    NotificationIntent,
    NotificationService,
    intents_for_users,
)
from brandhub.tests.factories import create_company, create_user, master_of


@pytest.fixture
def service(db_session):
    return NotificationService(db_session)


@pytest.fixture
def dispatcher(db_session):
    return NotificationDispatcher(db_session)


@pytest.fixture
def company(db_session):
    return create_company(db_session)


def _intent(recipient_id: str, title="Hello", content="World") -> NotificationIntent:
    return NotificationIntent(
        recipient_id=recipient_id,
        type=NotificationType.ACCESS_REQUEST,
        title=title,
        content=content,
    )


class TestIntentsForUsers:

    def test_one_intent_per_user(self, db_session, company):
        member = create_user(db_session, company)

        intents = intents_for_users(
            company.users, NotificationType.NEW_ASSETS, "New Assets Available", "1 new asset"
        )

        assert {i.recipient_id for i in intents} == {master_of(company).id, member.id}
        assert all(i.title == "New Assets Available" for i in intents)


class TestDispatcher:

    def test_persists_every_intent(self, db_session, dispatcher, company):
        member = create_user(db_session, company)
        master = master_of(company)

        written = dispatcher.dispatch([_intent(master.id), _intent(member.id)])

        assert written == 2
        rows = db_session.query(Notification).all()
        assert {n.recipient_id for n in rows} == {master.id, member.id}
        assert all(n.read is False for n in rows)
        assert all(n.type == "ACCESS_REQUEST" for n in rows)

    def test_failing_intent_is_skipped(self, db_session, dispatcher, company):
        """A NOT NULL violation on one intent does not block the others."""
        member = create_user(db_session, company)
        master = master_of(company)

        written = dispatcher.dispatch([
            _intent(master.id),
            _intent(member.id, title=None),
            _intent(member.id, title="Second"),
        ])

        assert written == 2
        titles = sorted(n.title for n in db_session.query(Notification).all())
        assert titles == ["Hello", "Second"]

    def test_empty_dispatch(self, db_session, dispatcher):
        assert dispatcher.dispatch([]) == 0
        assert db_session.query(Notification).count() == 0


class TestNotificationQueries:

    def test_list_is_recipient_scoped(self, db_session, dispatcher, service, company):
        member = create_user(db_session, company)
        master = master_of(company)
        dispatcher.dispatch([_intent(master.id), _intent(member.id, title="For member")])

        notifications = service.list_notifications(member.id)

        assert [n["title"] for n in notifications] == ["For member"]

    def test_unread_only_filter(self, db_session, dispatcher, service, company):
        master = master_of(company)
        dispatcher.dispatch([_intent(master.id, title="one"), _intent(master.id, title="two")])
        first = db_session.query(Notification).filter(Notification.title == "one").first()
        service.mark_read(first.id, master.id)

        unread = service.list_notifications(master.id, unread_only=True)

        assert [n["title"] for n in unread] == ["two"]
        assert service.unread_count(master.id) == 1

    def test_mark_read_of_other_users_notification_is_noop(
        self, db_session, dispatcher, service, company
    ):
        member = create_user(db_session, company)
        master = master_of(company)
        dispatcher.dispatch([_intent(master.id)])
        notification = db_session.query(Notification).first()

        assert service.mark_read(notification.id, member.id) is False

        db_session.refresh(notification)
        assert notification.read is False

    def test_mark_read(self, db_session, dispatcher, service, company):
        master = master_of(company)
        dispatcher.dispatch([_intent(master.id)])
        notification = db_session.query(Notification).first()

        assert service.mark_read(notification.id, master.id) is True
        assert service.unread_count(master.id) == 0

    def test_mark_all_read(self, db_session, dispatcher, service, company):
        member = create_user(db_session, company)
        master = master_of(company)
        dispatcher.dispatch([_intent(master.id), _intent(master.id), _intent(member.id)])

        assert service.mark_all_read(master.id) == 2
        assert service.unread_count(master.id) == 0
        assert service.unread_count(member.id) == 1
