import logging
import os
from typing import List, Optional, Tuple

from dotenv import load_dotenv
from sqlalchemy.orm import Session

from app.crud import booking as booking_crud
from app.crud import course as course_crud
from app.crud import tutor as tutor_crud
from app.enums.booking_status import (
    BookingStatus,
    BookingType,
    PaymentOutcome,
    PaymentStatus,
)
from app.exceptions import (
    InvalidStatus,
    NotFound,
    PermissionDenied,
    SignatureMismatch,
    ValidationError,
    ConcurrentUpdate,
)
from app.models.booking import Booking
from app.models.user import User
from app.schemas.booking import BookingCreate
from app.services.notification_service import NotificationService, notification_service
from app.services.payment_gateway import RazorpayGateway, payment_gateway
from app.utils.booking_access import identity_for, require_party, require_tutor, authorize
from app.utils.booking_status import (
    PAYABLE_STATUSES,
    is_terminal,
    parse_target,
    validate_transition,
)
from app.utils.pagination import page_bounds, pagination_meta
from app.utils.pricing import compute_amount, tutor_payout

load_dotenv()

logger = logging.getLogger(__name__)

ENFORCE_STATUS_ORDER = os.getenv("ENFORCE_STATUS_ORDER", "true").lower() in {
    "1",
    "true",
    "yes",
}
PLATFORM_COMMISSION = float(os.getenv("PLATFORM_COMMISSION", "0.10"))

def _parse_status_filter(value: Optional[str]) -> Optional[BookingStatus]:
    if not value or value == "all":
        return None
    try:
        return BookingStatus(value)
    except ValueError:
        raise InvalidStatus(f"Unknown status filter '{value}'")


class BookingService:
    """
    Booking lifecycle: creation and pricing, tutor status transitions,
    payment outcomes and the contact/chat unlock that follows a payment.
    """

    def __init__(
        self,
        notifications: NotificationService = None,
        gateway: RazorpayGateway = None,
        enforce_order: bool = None,
        commission: float = None,
    ):
        self.notifications = notifications if notifications is not None else notification_service
        self.gateway = gateway if gateway is not None else payment_gateway
        self.enforce_order = ENFORCE_STATUS_ORDER if enforce_order is None else enforce_order
        self.commission = PLATFORM_COMMISSION if commission is None else commission

    def _load(self, db: Session, booking_id: int) -> Booking:
        booking = booking_crud.get_booking(db, booking_id)
        if not booking:
            raise NotFound("Booking not found")
        return booking

    def create_booking(self, db: Session, student: User, data: BookingCreate) -> Booking:
        """
        Creates a pending booking for the student.

        The amount is computed here once and never recomputed afterwards.
        """
        session_time = (data.session_time or "").strip()
        if not data.tutor_id or not data.session_date or not session_time:
            raise ValidationError("Tutor, session date and session time are required")

        tutor = tutor_crud.get_tutor(db, data.tutor_id)
        if not tutor or not tutor.is_active:
            raise NotFound("Tutor not found")
        if tutor.user_id == student.id:
            raise ValidationError("You cannot book your own tutor profile")

        course = None
        if data.course_id:
            course = course_crud.get_course(db, data.course_id)
            if not course:
                raise NotFound("Course not found")

        is_trial = bool(data.is_trial) or data.booking_type == "trial"
        amount = compute_amount(is_trial, tutor, course)

        booking = Booking(
            student_id=student.id,
            tutor_id=tutor.id,
            course_id=course.id if course else None,
            session_date=data.session_date,
            session_time=session_time,
            message=data.message or "",
            booking_type=BookingType.COURSE if course else BookingType.TUTOR,
            is_trial=is_trial,
            amount=amount,
            status=BookingStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            can_chat=False,
            private_details_unlocked=False,
        )
        booking = booking_crud.create_booking(db, booking)
        logger.info(
            f"Booking {booking.id} created | student={student.id} tutor={tutor.id} "
            f"trial={is_trial} amount={amount}"
        )

        booking = booking_crud.get_booking(db, booking.id)
        self.notifications.booking_created(db, booking)
        return booking

    def get_booking(self, db: Session, caller: User, booking_id: int) -> Booking:
        booking = self._load(db, booking_id)
        require_party(identity_for(db, caller), booking, "view")
        return booking

    def transition_status(
        self,
        db: Session,
        caller: User,
        booking_id: int,
        status: Optional[str],
        rejection_reason: Optional[str] = None,
        version: Optional[int] = None,
    ) -> Booking:
        booking = self._load(db, booking_id)
        require_tutor(identity_for(db, caller), booking)

        if version is not None and version != booking.version:
            raise ConcurrentUpdate()

        target = parse_target(status)
        validate_transition(booking.status, target, self.enforce_order)

        previous = booking.status
        booking.status = target
        if target == BookingStatus.REJECTED:
            booking.rejection_reason = rejection_reason
        booking = booking_crud.save_booking(db, booking)
        logger.info(
            f"Booking {booking.id} status {previous.value} -> {target.value} by user {caller.id}"
        )

        self.notifications.status_changed(db, booking)
        return booking

    def apply_payment_outcome(
        self,
        db: Session,
        booking_id: int,
        outcome: PaymentOutcome,
        order_id: Optional[str] = None,
        payment_id: Optional[str] = None,
        signature: Optional[str] = None,
    ) -> Booking:
        """
        Records the gateway's verdict on a booking's payment.

        A success is only applied once its signature checks out; a bad
        signature marks the payment failed before SignatureMismatch is raised.
        Bookings already paid are returned untouched.
        """
        booking = self._load(db, booking_id)

        if booking.payment_status == PaymentStatus.SUCCESS:
            logger.info(f"Booking {booking.id} already paid, outcome {outcome.value} ignored")
            return booking

        if outcome == PaymentOutcome.FAILED:
            booking.payment_status = PaymentStatus.FAILED
            if payment_id:
                booking.payment_id = payment_id
            booking = booking_crud.save_booking(db, booking)
            logger.info(f"Booking {booking.id} payment failed")
            self.notifications.payment_failed(db, booking)
            return booking

        order_matches = not booking.order_id or booking.order_id == order_id
        if not order_matches or not self.gateway.verify_signature(order_id, payment_id, signature):
            booking.payment_status = PaymentStatus.FAILED
            booking_crud.save_booking(db, booking)
            logger.warning(f"Payment signature mismatch on booking {booking.id}")
            raise SignatureMismatch()

        booking.payment_status = PaymentStatus.SUCCESS
        booking.order_id = order_id
        booking.payment_id = payment_id
        booking.can_chat = True
        booking.private_details_unlocked = True
        if booking.status in PAYABLE_STATUSES:
            booking.status = BookingStatus.CONFIRMED
        booking = booking_crud.save_booking(db, booking)
        logger.info(f"Booking {booking.id} paid | payment={payment_id} status={booking.status.value}")

        self.notifications.payment_succeeded(db, booking)
        return booking

    def verify_payment(
        self,
        db: Session,
        caller: User,
        booking_id: int,
        order_id: str,
        payment_id: str,
        signature: str,
    ) -> Booking:
        if not (booking_id and order_id and payment_id and signature):
            raise ValidationError("Missing payment details")
        booking = self._load(db, booking_id)
        require_party(identity_for(db, caller), booking, "pay for")
        return self.apply_payment_outcome(
            db, booking.id, PaymentOutcome.SUCCESS, order_id, payment_id, signature
        )

    def create_payment_order(self, db: Session, caller: User, booking_id: int) -> dict:
        booking = self._load(db, booking_id)
        access = authorize(identity_for(db, caller), booking)
        if not access.is_student:
            raise PermissionDenied("Only the booking's student can pay for it")
        if booking.payment_status == PaymentStatus.SUCCESS:
            raise ValidationError("Booking already paid")
        if is_terminal(booking.status):
            raise ValidationError(f"A {booking.status.value} booking cannot be paid")
        if booking.amount <= 0:
            raise ValidationError("Free bookings need no payment")

        order = self.gateway.create_order(booking.amount, booking.id)
        booking.order_id = order["id"]
        booking_crud.save_booking(db, booking)

        return {
            "order_id": order["id"],
            "razorpay_key": self.gateway.key_id,
            "amount": order.get("amount", int(round(booking.amount * 100))),
            "currency": order.get("currency", self.gateway.currency),
        }

    def release_tutor_payment(self, db: Session, booking_id: int) -> int:
        """Marks the tutor paid and returns their share after commission."""
        booking = self._load(db, booking_id)

        if booking.status != BookingStatus.COMPLETED:
            raise ValidationError("Session not completed yet")
        if booking.payment_status != PaymentStatus.SUCCESS:
            raise ValidationError("Payment not confirmed on booking")
        if booking.tutor_paid:
            raise ValidationError("Tutor already paid")

        booking.tutor_paid = True
        booking = booking_crud.save_booking(db, booking)
        tutor_amount = tutor_payout(booking.amount, self.commission)
        logger.info(f"Payout of {tutor_amount} released for booking {booking.id}")

        self.notifications.payout_released(db, booking, tutor_amount)
        return tutor_amount

    def list_for_student(
        self,
        db: Session,
        student: User,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Booking], dict]:
        status_filter = _parse_status_filter(status)
        skip, limit = page_bounds(page, limit)
        bookings, total = booking_crud.get_bookings(
            db, skip=skip, limit=limit, student_id=student.id, status=status_filter
        )
        return bookings, pagination_meta(max(page, 1), limit, total)

    def list_for_tutor(
        self,
        db: Session,
        caller: User,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Booking], dict]:
        tutor = tutor_crud.get_tutor_by_user(db, caller.id)
        if not tutor:
            raise NotFound("Tutor profile not found")

        status_filter = _parse_status_filter(status)
        skip, limit = page_bounds(page, limit)
        bookings, total = booking_crud.get_bookings(
            db, skip=skip, limit=limit, tutor_id=tutor.id, status=status_filter
        )
        return bookings, pagination_meta(max(page, 1), limit, total)

    def booking_with_tutor(self, db: Session, caller: User, tutor_id: int) -> Optional[Booking]:
        """The caller's most recent booking with the tutor, if any."""
        tutor = tutor_crud.get_tutor(db, tutor_id)
        if not tutor:
            raise NotFound("Tutor not found")
        return booking_crud.get_latest_booking_between(db, caller.id, tutor.id)


booking_service = BookingService()


def get_booking_service() -> BookingService:
    return booking_service
