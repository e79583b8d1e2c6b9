from enum import Enum


class NotificationType(str, Enum):
    """Kinds of in-app notification, also sent as `type` in push payloads"""

    BOOKING_CREATED = "booking_created"
    BOOKING_STATUS = "booking_status"
    PAYMENT_SUCCESS = "payment_success"
    PAYMENT_FAILED = "payment_failed"
    PAYOUT_RELEASED = "payout_released"
    KYC_STATUS = "kyc_status"
    CHAT_MESSAGE = "chat_message"
