from sqlalchemy.orm import Session, joinedload
from sqlalchemy.orm.exc import StaleDataError
from typing import List, Optional, Tuple
import logging

from app.exceptions import ConcurrentUpdate
from app.models.booking import Booking
from app.models.tutor import Tutor
from app.enums.booking_status import BookingStatus

logger = logging.getLogger(__name__)


def _joined(db: Session):
    return db.query(Booking).options(
        joinedload(Booking.student),
        joinedload(Booking.tutor).joinedload(Tutor.user),
        joinedload(Booking.course),
    )


def get_booking(db: Session, booking_id: int) -> Optional[Booking]:
    return _joined(db).filter(Booking.id == booking_id).first()


def get_bookings(
    db: Session,
    skip: int = 0,
    limit: int = 10,
    student_id: Optional[int] = None,
    tutor_id: Optional[int] = None,
    status: Optional[BookingStatus] = None,
) -> Tuple[List[Booking], int]:
    """Bookings newest first plus the total matching the filters."""
    query = db.query(Booking)

    if student_id:
        query = query.filter(Booking.student_id == student_id)
    if tutor_id:
        query = query.filter(Booking.tutor_id == tutor_id)
    if status:
        query = query.filter(Booking.status == status)

    total = query.count()
    bookings = (
        query.options(
            joinedload(Booking.student),
            joinedload(Booking.tutor).joinedload(Tutor.user),
            joinedload(Booking.course),
        )
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
    return bookings, total


def get_latest_booking_between(
    db: Session, student_id: int, tutor_id: int
) -> Optional[Booking]:
    return (
        _joined(db)
        .filter(Booking.student_id == student_id, Booking.tutor_id == tutor_id)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .first()
    )


def get_chat_bookings(
    db: Session, user_id: int, tutor_id: Optional[int] = None
) -> List[Booking]:
    """Bookings with chat unlocked where the user is the student or the tutor."""
    query = _joined(db).filter(Booking.can_chat == True)
    if tutor_id:
        query = query.filter(
            (Booking.student_id == user_id) | (Booking.tutor_id == tutor_id)
        )
    else:
        query = query.filter(Booking.student_id == user_id)
    return query.order_by(Booking.updated_at.desc()).all()


def create_booking(db: Session, booking: Booking) -> Booking:
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking


def save_booking(db: Session, booking: Booking) -> Booking:
    """
    Persist pending changes to a booking.

    The version column makes the UPDATE conditional on the version that was
    read, so a concurrent writer surfaces as ConcurrentUpdate instead of a
    silent overwrite.
    """
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        logger.warning(f"Concurrent update detected on booking {booking.id}")
        raise ConcurrentUpdate()
    db.refresh(booking)
    return booking


def count_course_bookings(db: Session, course_id: int) -> int:
    return db.query(Booking).filter(Booking.course_id == course_id).count()
