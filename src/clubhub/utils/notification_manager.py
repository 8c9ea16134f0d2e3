"""Notification management utilities.

Notifications are written by the membership and event managers inside their
own transactions; this manager only adds rows to the session for those
callers and commits for the read-state operations it owns.
"""

import logging
import uuid
from datetime import datetime
from typing import Iterable, List, Optional

import pytz
from sqlalchemy.orm import Session, joinedload

from clubhub.config import NOTIFICATION_FEED_LIMIT
from clubhub.core.exceptions import NotificationNotFoundError, ValidationError
from clubhub.models.notification import NOTIFICATION_TYPES, NotificationModel

logger = logging.getLogger(__name__)


class NotificationManager:
    """Manages notification fan-out and read state."""

    def __init__(self, db: Session):
        self.db = db

    def notify(
        self,
        user_ids: Iterable[str],
        type_: str,
        title: str,
        message: str,
        club_id: Optional[str] = None,
    ) -> List[NotificationModel]:
        """Stage one notification per recipient.

        The rows are added to the session but not committed; the caller's
        commit makes them visible together with the change they describe.

        Args:
            user_ids: Recipients. Duplicates are written once.
            type_: One of NOTIFICATION_TYPES.
            title: Short headline.
            message: Body text.
            club_id: Club the notification refers to, if any.

        Returns:
            The staged NotificationModel rows.

        Raises:
            ValidationError: If the notification type is unknown.
        """
        if type_ not in NOTIFICATION_TYPES:
            raise ValidationError(f"Unknown notification type: {type_}")
        now = datetime.now(pytz.utc).isoformat()
        staged = []
        for user_id in dict.fromkeys(user_ids):
            model = NotificationModel(
                id=str(uuid.uuid4()),
                user_id=user_id,
                club_id=club_id,
                type=type_,
                title=title,
                message=message,
                read=False,
                created_at=now,
            )
            self.db.add(model)
            staged.append(model)
        return staged

    def list_for_user(
        self, user_id: str, limit: int = NOTIFICATION_FEED_LIMIT
    ) -> List[NotificationModel]:
        """Return the user's most recent notifications, newest first."""
        return (
            self.db.query(NotificationModel)
            .options(joinedload(NotificationModel.club))
            .filter(NotificationModel.user_id == user_id)
            .order_by(NotificationModel.created_at.desc())
            .limit(limit)
            .all()
        )

    def count_unread(self, user_id: str) -> int:
        return (
            self.db.query(NotificationModel)
            .filter(
                NotificationModel.user_id == user_id,
                NotificationModel.read.is_(False),
            )
            .count()
        )

    def mark_read(self, notification_id: str, user_id: str) -> NotificationModel:
        """Mark one of the user's notifications as read.

        Raises:
            NotificationNotFoundError: If it does not exist or belongs to someone else.
        """
        model = (
            self.db.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.user_id == user_id,
            )
            .first()
        )
        if not model:
            raise NotificationNotFoundError(notification_id)
        model.read = True
        self.db.commit()
        self.db.refresh(model)
        logger.info("Marked notification %s read for user %s", notification_id, user_id)
        return model

    def mark_all_read(self, user_id: str) -> int:
        """Mark every unread notification of the user as read.

        Returns:
            Number of notifications that changed.
        """
        updated = (
            self.db.query(NotificationModel)
            .filter(
                NotificationModel.user_id == user_id,
                NotificationModel.read.is_(False),
            )
            .update({NotificationModel.read: True}, synchronize_session=False)
        )
        self.db.commit()
        logger.info("Marked %d notifications read for user %s", updated, user_id)
        return updated
