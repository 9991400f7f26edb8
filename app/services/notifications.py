from typing import List, Optional

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError
from app.models import models
from app.schemas import NotificationCreate
from app.services.common import commit


def list_notifications(db: Session, limit: Optional[int] = None) -> List[models.Notification]:
    query = db.query(models.Notification).order_by(models.Notification.created_at.desc())
    if limit:
        query = query.limit(limit)
    return query.all()


def create_notification(db: Session, data: NotificationCreate, created_by: str) -> models.Notification:
    notification = models.Notification(message=data.message, type=data.type, created_by=created_by)
    db.add(notification)
    commit(db, "Create notification")
    db.refresh(notification)
    return notification


def delete_notification(db: Session, notification_id: str) -> None:
    notification = db.get(models.Notification, notification_id)
    if notification is None:
        raise NotFoundError("Notification", notification_id)
    db.delete(notification)
    commit(db, "Delete notification")
