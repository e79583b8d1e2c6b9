from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from app.enums.notification_type import NotificationType
from app.models.notification import Notification
from app.schemas.notification import NotificationCreate


def _inbox(db: Session, user_id: int):
    return db.query(Notification).filter(Notification.user_id == user_id)


def create_notification(db: Session, notification: NotificationCreate) -> Notification:
    db_notification = Notification(
        user_id=notification.user_id,
        booking_id=notification.booking_id,
        title=notification.title,
        message=notification.message,
        type=notification.type.value,
        data=notification.data,
    )
    db.add(db_notification)
    db.commit()
    db.refresh(db_notification)
    return db_notification


def get_user_notifications(
    db: Session,
    user_id: int,
    skip: int = 0,
    limit: int = 100,
    unread_only: bool = False,
    notification_type: Optional[NotificationType] = None,
) -> List[Notification]:
    """Newest first"""
    query = _inbox(db, user_id)
    if unread_only:
        query = query.filter(Notification.is_read == False)
    if notification_type is not None:
        query = query.filter(Notification.type == notification_type.value)
    return (
        query.order_by(Notification.created_at.desc(), Notification.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def count_unread(db: Session, user_id: int) -> int:
    return _inbox(db, user_id).filter(Notification.is_read == False).count()


def get_notification(
    db: Session, notification_id: int, user_id: int
) -> Optional[Notification]:
    """A notification only resolves for its owner."""
    return _inbox(db, user_id).filter(Notification.id == notification_id).first()


def mark_read(db: Session, notification: Notification) -> Notification:
    if not notification.is_read:
        notification.is_read = True
        notification.read_at = datetime.utcnow()
        db.commit()
        db.refresh(notification)
    return notification


def mark_all_read(db: Session, user_id: int, booking_id: Optional[int] = None) -> int:
    """Marks the inbox read, or only the notifications about one booking."""
    query = _inbox(db, user_id).filter(Notification.is_read == False)
    if booking_id is not None:
        query = query.filter(Notification.booking_id == booking_id)
    updated = query.update(
        {"is_read": True, "read_at": datetime.utcnow()}, synchronize_session=False
    )
    db.commit()
    return updated


def delete_notification(db: Session, notification: Notification) -> None:
    db.delete(notification)
    db.commit()
