from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging

from app.database import get_db
from app.crud import booking as booking_crud
from app.crud import chat as chat_crud
from app.exceptions import NotFound, PermissionDenied, ValidationError
from app.models.user import User
from app.schemas.chat import (
    ChatMessageCreate,
    ChatMessageResponse,
    ChatMessageEnvelope,
    ChatMessagesResponse,
    ChatSummary,
    ChatListResponse,
    MarkReadResponse,
)
from app.services.auth import get_current_user
from app.services.notification_service import (
    NotificationService,
    get_notification_service,
)
from app.utils.booking_access import identity_for, require_party
from app.utils.pagination import page_bounds, pagination_meta

router = APIRouter()
logger = logging.getLogger(__name__)


def _counterpart(booking, is_student: bool):
    """(user_id, name) of the other party."""
    if is_student:
        return booking.tutor.user_id, booking.tutor.name
    return booking.student_id, booking.student.name if booking.student else None


def _chat_booking(db: Session, booking_id: int, user: User):
    booking = booking_crud.get_booking(db, booking_id)
    if not booking:
        raise NotFound("Booking not found")
    access = require_party(identity_for(db, user), booking, "chat on")
    if not booking.can_chat:
        raise PermissionDenied("Chat is available once the booking is paid")
    return booking, access


def _message_response(message) -> ChatMessageResponse:
    return ChatMessageResponse.model_validate(message.to_dict())


@router.get("/", response_model=ChatListResponse)
def list_chats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    caller = identity_for(db, current_user)
    summaries = []
    for booking in booking_crud.get_chat_bookings(db, current_user.id, caller.tutor_id):
        is_student = booking.student_id == current_user.id
        counterpart_id, counterpart_name = _counterpart(booking, is_student)
        last = chat_crud.get_last_message(db, booking.id)
        summaries.append(
            ChatSummary(
                booking_id=booking.id,
                counterpart_id=counterpart_id,
                counterpart_name=counterpart_name,
                unread_count=chat_crud.count_unread(db, booking.id, current_user.id),
                last_message=_message_response(last) if last else None,
            )
        )
    return ChatListResponse(data=summaries)


@router.get("/bookings/{booking_id}/messages", response_model=ChatMessagesResponse)
def read_messages(
    booking_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    booking, _ = _chat_booking(db, booking_id, current_user)

    skip, limit = page_bounds(page, limit)
    messages, total = chat_crud.get_messages(db, booking.id, skip=skip, limit=limit)
    data = [_message_response(m) for m in messages]
    chat_crud.mark_read(db, booking.id, current_user.id)

    return ChatMessagesResponse(data=data, pagination=pagination_meta(page, limit, total))


@router.post(
    "/bookings/{booking_id}/messages",
    response_model=ChatMessageEnvelope,
    status_code=status.HTTP_201_CREATED,
)
def send_message(
    booking_id: int,
    body: ChatMessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    notifications: NotificationService = Depends(get_notification_service),
):
    booking, access = _chat_booking(db, booking_id, current_user)
    receiver_id, _ = _counterpart(booking, access.is_student)

    message = chat_crud.create_message(
        db, booking.id, current_user.id, receiver_id, body.content
    )
    if message is None:
        raise ValidationError("Message cannot be empty")

    notifications.chat_message(db, message)
    return ChatMessageEnvelope(data=_message_response(message), message="Message sent")


@router.patch("/bookings/{booking_id}/mark-read", response_model=MarkReadResponse)
def mark_messages_read(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    booking, _ = _chat_booking(db, booking_id, current_user)
    modified = chat_crud.mark_read(db, booking.id, current_user.id)
    return MarkReadResponse(modified_count=modified, message="Messages marked as read")
