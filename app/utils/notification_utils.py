from sqlalchemy.orm import Session
from app.crud import notification as notification_crud
from app.crud import fcm_token as fcm_crud
from app.enums.notification_type import NotificationType
from app.schemas.notification import NotificationCreate
import logging

logger = logging.getLogger(__name__)


def create_notification(
    db: Session,
    user_id: int,
    title: str,
    message: str,
    notification_type: NotificationType,
    data: dict = None,
):
    """
    Store an in-app notification.

    Args:
        db: Database session
        user_id: Recipient
        title: Notification title
        message: Notification body
        notification_type: Kind of event being reported
        data: Extra JSON payload; a `booking_id` key also links the
            notification to that booking

    Returns:
        Notification: The stored notification
    """
    notification_data = NotificationCreate(
        user_id=user_id,
        title=title,
        message=message,
        type=notification_type,
        booking_id=(data or {}).get("booking_id"),
        data=data,
    )

    notification = notification_crud.create_notification(db, notification_data)
    logger.info(f"Notification created for user {user_id}: {notification.type}")
    return notification


def _fcm_data_stringify(data: dict) -> dict:
    """FCM only accepts string values in the data payload."""
    if not data:
        return {}
    return {k: str(v) if v is not None else "" for k, v in data.items()}


def push_to_user(
    db: Session,
    push,
    user_id: int,
    title: str,
    message: str,
    data: dict = None,
) -> int:
    """Sends a push to every active device of the user. Returns deliveries."""
    if push is None or not push.is_configured():
        logger.debug(f"Push not configured, nothing sent to user {user_id}")
        return 0

    tokens = fcm_crud.get_active_tokens_for_users(db, [user_id])
    if not tokens:
        logger.info(f"No push tokens for user {user_id}")
        return 0

    result = push.send_notification_to_multiple_tokens(
        tokens=tokens, title=title, body=message, data=_fcm_data_stringify(data)
    )
    if result.get("invalid_tokens"):
        fcm_crud.deactivate_tokens(db, result["invalid_tokens"])

    logger.info(
        f"Push sent to user {user_id} ({result.get('success', 0)} ok, "
        f"{result.get('failure', 0)} fail)"
    )
    return result.get("success", 0)


def send_notification_with_fcm(
    db: Session,
    push,
    user_id: int,
    title: str,
    message: str,
    notification_type: NotificationType,
    data: dict = None,
):
    """
    Store an in-app notification and push it to the user's devices.

    Push errors are logged; the stored notification is returned regardless.
    """
    notification = create_notification(
        db=db,
        user_id=user_id,
        title=title,
        message=message,
        notification_type=notification_type,
        data=data,
    )

    payload = dict(data or {})
    payload.update({"type": notification.type, "notification_id": notification.id})
    try:
        push_to_user(db, push, user_id, title, message, payload)
    except Exception as e:
        logger.error(f"Error sending push for {notification.type}: {e}", exc_info=True)

    return notification
