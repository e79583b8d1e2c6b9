from enum import Enum


class BookingStatus(str, Enum):
    """Lifecycle states of a booking"""

    PENDING = "pending"
    ACCEPTED = "accepted"
    CONFIRMED = "confirmed"  # set by a successful payment
    REJECTED = "rejected"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentOutcome(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


class BookingType(str, Enum):
    TUTOR = "tutor"
    COURSE = "course"
