# marketplace/services/notification_service.py
from sqlalchemy.orm import Session

from marketplace.data.models.notification import NotificationModel
from marketplace.domain.errors import ForbiddenError, NotFoundError
from marketplace.repos.notification_repo import NotificationRepo
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    In-app notifications.
    Rows are written by order events; users only read, mark or delete them.
    """

    def __init__(self, db: Session):
        self.repo = NotificationRepo(db)

    def create(self, user_id: int, message: str) -> NotificationModel:
        """
        Stages a notification in the current transaction.
        The caller commits together with the event that caused it.
        """
        logger.info(f"[NOTIFICATION] User {user_id}: {message}")
        return self.repo.add_notification(NotificationModel(user_id=user_id, message=message))

    def list_all(self, user_id: int) -> list[NotificationModel]:
        return self.repo.list_for_user(user_id)

    def list_unread(self, user_id: int) -> list[NotificationModel]:
        return self.repo.list_for_user(user_id, unread_only=True)

    def _owned(self, notification_id: int, user_id: int) -> NotificationModel:
        notification = self.repo.get_notification(notification_id)
        if not notification:
            raise NotFoundError("Notification", notification_id)
        if notification.user_id != user_id:
            raise ForbiddenError("You can only manage your own notifications")
        return notification

    def mark_read(self, notification_id: int, user_id: int) -> NotificationModel:
        notification = self._owned(notification_id, user_id)
        notification.is_read = True
        self.repo.commit()
        return notification

    def mark_all_read(self, user_id: int) -> int:
        updated = self.repo.mark_all_read(user_id)
        self.repo.commit()
        return updated

    def delete(self, notification_id: int, user_id: int):
        notification = self._owned(notification_id, user_id)
        self.repo.delete_notification(notification)
        self.repo.commit()
