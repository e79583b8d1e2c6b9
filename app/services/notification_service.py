import logging
from sqlalchemy.orm import Session

from app.enums.notification_type import NotificationType
from app.services.email_service import email_service
from app.services.fcm_service import fcm_service
from app.utils import email_templates
from app.utils.notification_utils import send_notification_with_fcm, push_to_user

logger = logging.getLogger(__name__)


def _session_label(booking) -> str:
    return f"{booking.session_date} at {booking.session_time}"


def _subject_label(booking) -> str:
    if booking.course is not None:
        return booking.course.title
    return "Trial session" if booking.is_trial else "Tutoring session"


class NotificationService:
    """
    Fans booking events out to e-mail, push and the in-app inbox.

    Every method swallows and logs its own failures: a notification problem
    never fails the operation that triggered it.
    """

    def __init__(self, mailer=None, push=None):
        self.mailer = mailer if mailer is not None else email_service
        self.push = push if push is not None else fcm_service

    def _notify(self, db: Session, user_id: int, title: str, message: str,
                notification_type: NotificationType, data: dict = None) -> None:
        try:
            send_notification_with_fcm(
                db, self.push, user_id, title, message, notification_type, data
            )
        except Exception as e:
            db.rollback()
            logger.error(f"Error storing {notification_type.value} notification for user {user_id}: {e}")

    def _mail(self, to: str, subject: str, html: str) -> None:
        try:
            self.mailer.send(to, subject, html)
        except Exception as e:
            logger.error(f"Error sending e-mail '{subject}' to {to}: {e}")

    def booking_created(self, db: Session, booking) -> None:
        student = booking.student
        tutor = booking.tutor
        when = _session_label(booking)
        subject = _subject_label(booking)

        self._mail(
            tutor.email,
            "New Booking Request - TutorMitra",
            email_templates.booking_request_template(tutor.name, subject, when, tutor.name),
        )
        self._mail(
            student.email,
            "Booking Requested - TutorMitra",
            email_templates.booking_request_template(student.name, subject, when, tutor.name),
        )
        self._notify(
            db,
            tutor.user_id,
            "New booking request",
            f"{student.name} requested {subject} on {when}",
            NotificationType.BOOKING_CREATED,
            {"booking_id": booking.id},
        )

    def status_changed(self, db: Session, booking) -> None:
        status = booking.status.value
        when = _session_label(booking)

        self._mail(
            booking.student.email,
            f"Booking {status.capitalize()} - TutorMitra",
            email_templates.booking_status_template(
                booking.student.name, status, when, booking.rejection_reason
            ),
        )
        self._notify(
            db,
            booking.student_id,
            f"Booking {status}",
            f"Your booking with {booking.tutor.name} on {when} is now {status}",
            NotificationType.BOOKING_STATUS,
            {"booking_id": booking.id, "status": status},
        )

    def payment_succeeded(self, db: Session, booking) -> None:
        student = booking.student
        tutor = booking.tutor
        when = _session_label(booking)
        subject = _subject_label(booking)

        self._mail(
            tutor.email,
            "Booking Paid - TutorMitra",
            email_templates.payment_notification_template(tutor.name, booking.amount, "received"),
        )
        self._mail(
            tutor.email,
            "Booking Confirmed - TutorMitra",
            email_templates.booking_confirmation_template(tutor.name, subject, when, tutor.name),
        )
        self._mail(
            student.email,
            "Payment Successful - TutorMitra",
            email_templates.payment_notification_template(student.name, booking.amount, "successful"),
        )
        self._mail(
            student.email,
            "Booking Confirmed - TutorMitra",
            email_templates.booking_confirmation_template(student.name, subject, when, tutor.name),
        )
        for user_id in (booking.student_id, tutor.user_id):
            self._notify(
                db,
                user_id,
                "Booking confirmed",
                f"Payment of Rs.{booking.amount:g} received for {subject} on {when}",
                NotificationType.PAYMENT_SUCCESS,
                {"booking_id": booking.id},
            )

    def payment_failed(self, db: Session, booking) -> None:
        self._mail(
            booking.student.email,
            "Payment Failed - TutorMitra",
            email_templates.payment_notification_template(
                booking.student.name, booking.amount, "failed"
            ),
        )
        self._notify(
            db,
            booking.student_id,
            "Payment failed",
            f"Your payment for the session on {_session_label(booking)} did not go through",
            NotificationType.PAYMENT_FAILED,
            {"booking_id": booking.id},
        )

    def payout_released(self, db: Session, booking, tutor_amount: int) -> None:
        tutor = booking.tutor
        self._mail(
            tutor.email,
            "Payment Released - TutorMitra",
            email_templates.payout_released_template(
                tutor.name, tutor_amount, str(booking.session_date)
            ),
        )
        self._notify(
            db,
            tutor.user_id,
            "Payment released",
            f"Rs.{tutor_amount} for the session on {booking.session_date} has been released",
            NotificationType.PAYOUT_RELEASED,
            {"booking_id": booking.id, "amount": tutor_amount},
        )

    def kyc_decided(self, db: Session, user, status: str, reason: str = None) -> None:
        self._mail(
            user.email,
            "KYC Update - TutorMitra",
            email_templates.kyc_decision_template(user.name, status, reason),
        )
        self._notify(
            db,
            user.id,
            "KYC update",
            f"Your KYC verification is {status}",
            NotificationType.KYC_STATUS,
            {"status": status},
        )

    def chat_message(self, db: Session, message) -> None:
        """Realtime delivery of a chat message to the other party."""
        try:
            preview = message.content if len(message.content) <= 80 else message.content[:77] + "..."
            push_to_user(
                db,
                self.push,
                message.receiver_id,
                f"New message from {message.sender.name}",
                preview,
                {
                    "type": NotificationType.CHAT_MESSAGE.value,
                    "booking_id": message.booking_id,
                    "message_id": message.id,
                },
            )
        except Exception as e:
            logger.error(f"Error pushing chat message {message.id}: {e}")


notification_service = NotificationService()


def get_notification_service() -> NotificationService:
    return notification_service
