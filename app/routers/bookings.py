from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from app.database import get_db
from app.models.user import User
from app.schemas.booking import (
    BookingCreate,
    BookingStatusUpdate,
    BookingResponse,
    BookingEnvelope,
    BookingListResponse,
    BookingWithTutorResponse,
    TutorContact,
)
from app.services.auth import get_current_user
from app.services.booking_service import BookingService, get_booking_service

router = APIRouter()


@router.post("/", response_model=BookingEnvelope, status_code=status.HTTP_201_CREATED)
def create_booking(
    booking: BookingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    db_booking = service.create_booking(db, current_user, booking)
    return BookingEnvelope(
        data=BookingResponse.from_booking(db_booking),
        message="Booking created successfully",
    )


@router.get("/my-bookings", response_model=BookingListResponse)
def read_my_bookings(
    status: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    bookings, pagination = service.list_for_student(db, current_user, status, page, limit)
    return BookingListResponse(
        data=[BookingResponse.from_booking(b) for b in bookings],
        pagination=pagination,
    )


@router.get("/tutor-bookings", response_model=BookingListResponse)
def read_tutor_bookings(
    status: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    bookings, pagination = service.list_for_tutor(db, current_user, status, page, limit)
    return BookingListResponse(
        data=[BookingResponse.from_booking(b) for b in bookings],
        pagination=pagination,
    )


@router.get("/with-tutor/{tutor_id}", response_model=BookingWithTutorResponse)
def read_booking_with_tutor(
    tutor_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Whether the caller may chat with the tutor and see their contact details."""
    booking = service.booking_with_tutor(db, current_user, tutor_id)
    if booking is None:
        return BookingWithTutorResponse()

    contact = None
    if booking.private_details_unlocked:
        contact = TutorContact(
            phone=booking.tutor.phone,
            whatsapp=booking.tutor.whatsapp,
            email=booking.tutor.email,
        )
    return BookingWithTutorResponse(
        booking=BookingResponse.from_booking(booking),
        can_chat=booking.can_chat,
        private_details_unlocked=booking.private_details_unlocked,
        contact=contact,
    )


@router.get("/{booking_id}", response_model=BookingEnvelope)
def read_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    db_booking = service.get_booking(db, current_user, booking_id)
    return BookingEnvelope(data=BookingResponse.from_booking(db_booking))


@router.patch("/{booking_id}/status", response_model=BookingEnvelope)
def update_booking_status(
    booking_id: int,
    update: BookingStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    db_booking = service.transition_status(
        db,
        current_user,
        booking_id,
        update.status,
        rejection_reason=update.rejection_reason,
        version=update.version,
    )
    return BookingEnvelope(
        data=BookingResponse.from_booking(db_booking),
        message=f"Booking {db_booking.status.value} successfully",
    )
