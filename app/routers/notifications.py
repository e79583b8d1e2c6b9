from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.database import get_db
from app.services.auth import get_current_user
from app.models.user import User
from app.schemas.fcm_token import FCMTokenCreate, FCMTokenResponse
from app.schemas.notification import (
    NotificationsListResponse,
    NotificationActionResponse,
)
from app.crud import fcm_token as fcm_crud
from app.crud import notification as notification_crud
from app.enums.notification_type import NotificationType
from app.exceptions import NotFound
from app.services.fcm_service import fcm_service

router = APIRouter()
logger = logging.getLogger(__name__)


# ===== Device tokens =====


@router.post(
    "/register-token",
    response_model=FCMTokenResponse,
    status_code=status.HTTP_201_CREATED,
)
def register_fcm_token(
    token_data: FCMTokenCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Register a push token for the caller's device.

    Clients call this on first launch, on login, and whenever FCM rotates
    the token.
    """
    return fcm_crud.create_fcm_token(db, token_data, current_user.id)


@router.get("/tokens", response_model=List[FCMTokenResponse])
def get_my_fcm_tokens(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return fcm_crud.get_user_fcm_tokens(db, current_user.id)


@router.delete("/tokens/{token_id}", response_model=NotificationActionResponse)
def delete_fcm_token(
    token_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    db_token = fcm_crud.get_user_token(db, token_id, current_user.id)
    if not db_token:
        raise NotFound("Push token not found")

    fcm_crud.delete_fcm_token(db, db_token)
    return NotificationActionResponse(message="Push token deleted")


@router.get("/status")
def get_notification_status():
    return {
        "push_configured": fcm_service.is_configured(),
    }


# ===== In-app notifications =====


def _owned_notification(db: Session, notification_id: int, user: User):
    notification = notification_crud.get_notification(db, notification_id, user.id)
    if not notification:
        raise NotFound("Notification not found")
    return notification


@router.get("/", response_model=NotificationsListResponse)
def get_notifications(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=200),
    unread_only: bool = False,
    notification_type: Optional[NotificationType] = Query(None, alias="type"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Caller's notifications, newest first, with the unread count."""
    notifications = notification_crud.get_user_notifications(
        db,
        current_user.id,
        skip=skip,
        limit=limit,
        unread_only=unread_only,
        notification_type=notification_type,
    )
    unread_count = notification_crud.count_unread(db, current_user.id)

    return NotificationsListResponse(notifications=notifications, unread_count=unread_count)


@router.put("/read-all", response_model=NotificationActionResponse)
def mark_all_notifications_as_read(
    booking_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    updated_count = notification_crud.mark_all_read(db, current_user.id, booking_id)

    return NotificationActionResponse(
        message=f"All notifications marked as read ({updated_count} updated)",
    )


@router.put("/{notification_id}/read", response_model=NotificationActionResponse)
def mark_notification_as_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    notification_crud.mark_read(db, _owned_notification(db, notification_id, current_user))
    return NotificationActionResponse(message="Notification marked as read")


@router.delete("/{notification_id}", response_model=NotificationActionResponse)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    notification_crud.delete_notification(
        db, _owned_notification(db, notification_id, current_user)
    )
    return NotificationActionResponse(message="Notification deleted")
