from pydantic import Field
from typing import Optional, List
from datetime import datetime

from app.schemas.common import CamelModel, Pagination


class ChatMessageCreate(CamelModel):
    content: str = Field(..., max_length=2000)


class ChatMessageResponse(CamelModel):
    id: int
    booking_id: int
    sender_id: int
    sender_name: Optional[str] = None
    receiver_id: int
    content: str
    is_read: bool
    created_at: datetime


class ChatMessageEnvelope(CamelModel):
    success: bool = True
    data: ChatMessageResponse
    message: Optional[str] = None


class ChatMessagesResponse(CamelModel):
    success: bool = True
    data: List[ChatMessageResponse]
    pagination: Pagination


class ChatSummary(CamelModel):
    booking_id: int
    counterpart_id: int
    counterpart_name: Optional[str] = None
    unread_count: int = 0
    last_message: Optional[ChatMessageResponse] = None


class ChatListResponse(CamelModel):
    success: bool = True
    data: List[ChatSummary]


class MarkReadResponse(CamelModel):
    success: bool = True
    modified_count: int
    message: str
