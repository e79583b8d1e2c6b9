"""
CRUD for the chat attached to a booking.

Access rules (party to the booking, chat unlocked by payment) are enforced by
the chat router before any of these helpers are called.
"""
from typing import List, Optional, Tuple
from datetime import datetime
from sqlalchemy.orm import Session, joinedload

from app.models.chat_message import ChatMessage

MAX_MESSAGE_LENGTH = 2000


def get_messages(
    db: Session,
    booking_id: int,
    skip: int = 0,
    limit: int = 50,
) -> Tuple[List[ChatMessage], int]:
    """Page of messages, newest page first, each page returned oldest first."""
    query = db.query(ChatMessage).filter(ChatMessage.booking_id == booking_id)
    total = query.count()
    messages = (
        query.options(joinedload(ChatMessage.sender))
        .order_by(ChatMessage.created_at.desc(), ChatMessage.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
    messages.reverse()
    return messages, total


def get_last_message(db: Session, booking_id: int) -> Optional[ChatMessage]:
    return (
        db.query(ChatMessage)
        .filter(ChatMessage.booking_id == booking_id)
        .order_by(ChatMessage.created_at.desc(), ChatMessage.id.desc())
        .first()
    )


def create_message(
    db: Session,
    booking_id: int,
    sender_id: int,
    receiver_id: int,
    content: str,
) -> Optional[ChatMessage]:
    if not content or not content.strip():
        return None
    msg = ChatMessage(
        booking_id=booking_id,
        sender_id=sender_id,
        receiver_id=receiver_id,
        content=content.strip()[:MAX_MESSAGE_LENGTH],
    )
    db.add(msg)
    db.commit()
    db.refresh(msg)
    return msg


def mark_read(db: Session, booking_id: int, receiver_id: int) -> int:
    """Marks every unread message addressed to the receiver as read."""
    updated = (
        db.query(ChatMessage)
        .filter(
            ChatMessage.booking_id == booking_id,
            ChatMessage.receiver_id == receiver_id,
            ChatMessage.is_read == False,
        )
        .update({"is_read": True, "read_at": datetime.utcnow()}, synchronize_session=False)
    )
    db.commit()
    return updated


def count_unread(db: Session, booking_id: int, receiver_id: int) -> int:
    return (
        db.query(ChatMessage)
        .filter(
            ChatMessage.booking_id == booking_id,
            ChatMessage.receiver_id == receiver_id,
            ChatMessage.is_read == False,
        )
        .count()
    )
