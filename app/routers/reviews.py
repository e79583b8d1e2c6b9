from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.crud import booking as booking_crud
from app.crud import review as review_crud
from app.crud import tutor as tutor_crud
from app.enums.booking_status import BookingStatus
from app.exceptions import NotFound, PermissionDenied, ValidationError
from app.models.user import User
from app.schemas.review import (
    ReviewCreate,
    ReviewResponse,
    ReviewEnvelope,
    ReviewListResponse,
)
from app.services.auth import get_current_user

router = APIRouter()


@router.post("/", response_model=ReviewEnvelope, status_code=status.HTTP_201_CREATED)
def create_review(
    review: ReviewCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    tutor = tutor_crud.get_tutor(db, review.tutor_id)
    if not tutor:
        raise NotFound("Tutor not found")
    if tutor.user_id == current_user.id:
        raise ValidationError("You cannot review yourself")

    if review.booking_id is not None:
        booking = booking_crud.get_booking(db, review.booking_id)
        if not booking:
            raise NotFound("Booking not found")
        if booking.student_id != current_user.id:
            raise PermissionDenied("You can only review your own bookings")
        if booking.tutor_id != tutor.id:
            raise ValidationError("Booking does not belong to this tutor")
        if booking.status != BookingStatus.COMPLETED:
            raise ValidationError("Only completed sessions can be reviewed")
        if review_crud.get_review_for_booking(db, booking.id):
            raise ValidationError("This booking has already been reviewed")

    db_review = review_crud.create_review(
        db,
        tutor,
        student_id=current_user.id,
        rating=review.rating,
        comment=review.comment,
        booking_id=review.booking_id,
    )
    return ReviewEnvelope(review=ReviewResponse.from_review(db_review))


@router.get("/tutor/{tutor_id}", response_model=ReviewListResponse)
def read_tutor_reviews(tutor_id: int, db: Session = Depends(get_db)):
    tutor = tutor_crud.get_tutor(db, tutor_id)
    if not tutor:
        raise NotFound("Tutor not found")

    reviews = review_crud.get_tutor_reviews(db, tutor.id)
    return ReviewListResponse(
        reviews=[ReviewResponse.from_review(r) for r in reviews],
        average_rating=tutor.rating or 0.0,
        total_reviews=tutor.total_reviews or 0,
    )
