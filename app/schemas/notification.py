from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List
from datetime import datetime

from app.enums.notification_type import NotificationType


class NotificationCreate(BaseModel):
    user_id: int
    title: str = Field(..., max_length=255)
    message: str
    type: NotificationType
    booking_id: Optional[int] = None
    data: Optional[Dict[str, Any]] = None


class NotificationResponse(BaseModel):
    id: int
    user_id: int
    booking_id: Optional[int] = None
    title: str
    message: str
    type: str
    data: Optional[Dict[str, Any]] = None
    is_read: bool
    read_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class NotificationsListResponse(BaseModel):
    success: bool = True
    notifications: List[NotificationResponse]
    unread_count: int


class NotificationActionResponse(BaseModel):
    success: bool = True
    message: str
