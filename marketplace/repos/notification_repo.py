from sqlalchemy import select, update

from marketplace.data.models.notification import NotificationModel
from marketplace.repos.base import BaseRepo


class NotificationRepo(BaseRepo):
    def add_notification(self, notification: NotificationModel) -> NotificationModel:
        self.db.add(notification)
        return notification

    def get_notification(self, notification_id: int) -> NotificationModel | None:
        return self.db.get(NotificationModel, notification_id)

    def list_for_user(self, user_id: int, unread_only: bool = False) -> list[NotificationModel]:
        stmt = select(NotificationModel).where(NotificationModel.user_id == user_id)
        if unread_only:
            stmt = stmt.where(NotificationModel.is_read.is_(False))
        stmt = stmt.order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        return list(self.db.execute(stmt).scalars())

    def mark_all_read(self, user_id: int) -> int:
        result = self.db.execute(
            update(NotificationModel)
            .where(
                NotificationModel.user_id == user_id,
                NotificationModel.is_read.is_(False),
            )
            .values(is_read=True)
        )
        return result.rowcount

    def delete_notification(self, notification: NotificationModel):
        self.db.delete(notification)
