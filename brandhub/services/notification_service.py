"""
Notification sink: intents, dispatcher and the recipient-facing queries.

State transitions never write notifications directly. They return
NotificationIntent objects (an outbox) which the caller hands to
NotificationDispatcher after the transition has been committed.

Delivery is best-effort:
- Each intent is persisted in its own savepoint
- A failing intent is logged and skipped; the rest are still written
- dispatch() never raises into the caller
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from brandhub.models.notification import Notification, NotificationType
from brandhub.models.user import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationIntent:
    """A notification that should be persisted for one recipient."""
    recipient_id: str
    type: NotificationType
    title: str
    content: str


@dataclass
class TransitionResult:
    """Outcome of a state transition plus the notifications it should produce."""
    result: dict
    intents: List[NotificationIntent] = field(default_factory=list)


def intents_for_users(
    users: Iterable[User],
    notification_type: NotificationType,
    title: str,
    content: str,
) -> List[NotificationIntent]:
    """Fan out one intent per user."""
    return [
        NotificationIntent(
            recipient_id=user.id,
            type=notification_type,
            title=title,
            content=content,
        )
        for user in users
    ]


class NotificationDispatcher:
    """Persists notification intents produced by state transitions."""

    def __init__(self, session: Session):
        self.session = session

    def dispatch(self, intents: Iterable[NotificationIntent]) -> int:
        """
        Persist one Notification per intent.

        Args:
            intents: Pending notification intents

        Returns:
            Number of notifications written
        """
        written = 0
        for intent in intents:
            try:
                with self.session.begin_nested():
                    self.session.add(Notification(
                        recipient_id=intent.recipient_id,
                        type=NotificationType(intent.type).value,
                        title=intent.title,
                        content=intent.content,
                        read=False,
                    ))
                written += 1
            except Exception:
                logger.warning(
                    "notification.dispatch_failed",
                    extra={
                        "recipient_id": intent.recipient_id,
                        "type": str(intent.type),
                    },
                    exc_info=True,
                )

        if written:
            try:
                self.session.commit()
            except Exception:
                self.session.rollback()
                logger.warning(
                    "notification.commit_failed",
                    extra={"count": written},
                    exc_info=True,
                )
                return 0

            logger.info("Notifications dispatched", extra={"count": written})
        return written


class NotificationService:
    """Recipient-scoped reads and read-flag updates."""

    DEFAULT_LIMIT = 50

    def __init__(self, session: Session):
        self.session = session

    def list_notifications(
        self,
        user_id: str,
        unread_only: bool = False,
        limit: Optional[int] = None,
    ) -> List[dict]:
        """Most recent notifications for a user, newest first."""
        query = self.session.query(Notification).filter(
            Notification.recipient_id == user_id
        )
        if unread_only:
            query = query.filter(Notification.read == False)  # noqa: E712

        notifications = (
            query.order_by(Notification.created_at.desc())
            .limit(limit or self.DEFAULT_LIMIT)
            .all()
        )
        return [self._notification_to_dict(n) for n in notifications]

    def unread_count(self, user_id: str) -> int:
        return (
            self.session.query(Notification)
            .filter(
                Notification.recipient_id == user_id,
                Notification.read == False,  # noqa: E712
            )
            .count()
        )

    def mark_read(self, notification_id: str, user_id: str) -> bool:
        """
        Mark one notification as read.

        The update is scoped to the recipient, so a notification that
        belongs to someone else is indistinguishable from a missing one.

        Returns:
            True if a notification was updated
        """
        updated = (
            self.session.query(Notification)
            .filter(
                Notification.id == notification_id,
                Notification.recipient_id == user_id,
            )
            .update({"read": True}, synchronize_session=False)
        )
        self.session.flush()
        return updated > 0

    def mark_all_read(self, user_id: str) -> int:
        """Mark all of a user's unread notifications as read."""
        updated = (
            self.session.query(Notification)
            .filter(
                Notification.recipient_id == user_id,
                Notification.read == False,  # noqa: E712
            )
            .update({"read": True}, synchronize_session=False)
        )
        self.session.flush()
        return updated

    def _notification_to_dict(self, notification: Notification) -> dict:
        return {
            "id": notification.id,
            "type": notification.type,
            "title": notification.title,
            "content": notification.content,
            "read": notification.read,
            "created_at": notification.created_at.isoformat() if notification.created_at else None,
        }
