from pydantic import Field
from datetime import date, datetime
from typing import Optional, List

from app.enums.booking_status import BookingStatus, PaymentStatus, BookingType
from app.schemas.common import CamelModel, Pagination


class BookingCreate(CamelModel):
    # Required fields are checked by the booking service so a missing one
    # produces a 400 with a readable message instead of a schema error.
    tutor_id: Optional[int] = None
    course_id: Optional[int] = None
    session_date: Optional[date] = None
    session_time: Optional[str] = Field(None, max_length=20)
    message: Optional[str] = Field(None, max_length=1000)
    booking_type: Optional[str] = None
    is_trial: bool = False


class BookingStatusUpdate(CamelModel):
    status: Optional[str] = None
    rejection_reason: Optional[str] = Field(None, max_length=500)
    version: Optional[int] = None


class StudentSummary(CamelModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class TutorSummary(CamelModel):
    id: int
    name: str
    profile_image: Optional[str] = ""
    city: Optional[str] = None
    subjects: List[str] = []
    rating: float = 0.0
    trial_fee: Optional[float] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    email: Optional[str] = None


class CourseSummary(CamelModel):
    id: int
    title: str
    description: Optional[str] = ""
    price: float


class BookingResponse(CamelModel):
    id: int
    student: StudentSummary
    tutor: TutorSummary
    course: Optional[CourseSummary] = None
    session_date: date
    session_time: str
    message: Optional[str] = ""
    booking_type: BookingType
    is_trial: bool
    amount: float
    status: BookingStatus
    payment_status: PaymentStatus
    can_chat: bool
    private_details_unlocked: bool
    rejection_reason: Optional[str] = None
    tutor_paid: bool = False
    version: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_booking(cls, booking) -> "BookingResponse":
        """Joined view of a booking. Phone numbers and the tutor's e-mail
        are only disclosed once the booking is paid."""
        unlocked = bool(booking.private_details_unlocked)
        student = booking.student
        tutor = booking.tutor
        course = booking.course

        return cls(
            id=booking.id,
            student=StudentSummary(
                id=student.id,
                name=student.name,
                email=student.email,
                phone=student.phone if unlocked else None,
            ),
            tutor=TutorSummary(
                id=tutor.id,
                name=tutor.name,
                profile_image=tutor.profile_image,
                city=tutor.city,
                subjects=tutor.subjects or [],
                rating=tutor.rating or 0.0,
                trial_fee=tutor.trial_fee,
                phone=tutor.phone if unlocked else None,
                whatsapp=tutor.whatsapp if unlocked else None,
                email=tutor.email if unlocked else None,
            ),
            course=CourseSummary.model_validate(course) if course else None,
            session_date=booking.session_date,
            session_time=booking.session_time,
            message=booking.message,
            booking_type=booking.booking_type,
            is_trial=booking.is_trial,
            amount=booking.amount,
            status=booking.status,
            payment_status=booking.payment_status,
            can_chat=booking.can_chat,
            private_details_unlocked=booking.private_details_unlocked,
            rejection_reason=booking.rejection_reason,
            tutor_paid=booking.tutor_paid,
            version=booking.version,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


class BookingEnvelope(CamelModel):
    success: bool = True
    data: BookingResponse
    message: Optional[str] = None


class BookingListResponse(CamelModel):
    success: bool = True
    data: List[BookingResponse]
    pagination: Pagination


class TutorContact(CamelModel):
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    email: Optional[str] = None


class BookingWithTutorResponse(CamelModel):
    """Chat/contact unlock state of the caller's latest booking with a tutor."""

    success: bool = True
    booking: Optional[BookingResponse] = None
    can_chat: bool = False
    private_details_unlocked: bool = False
    contact: Optional[TutorContact] = None
