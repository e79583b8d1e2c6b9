import logging
import os

import razorpay
from dotenv import load_dotenv
from razorpay.errors import SignatureVerificationError

from app.exceptions import PaymentGatewayError

load_dotenv()

logger = logging.getLogger(__name__)


class RazorpayGateway:
    """Order creation and signature checks against Razorpay."""

    def __init__(self, key_id: str = None, key_secret: str = None, currency: str = None):
        self.key_id = key_id if key_id is not None else os.getenv("RAZORPAY_KEY_ID", "")
        self.key_secret = (
            key_secret if key_secret is not None else os.getenv("RAZORPAY_KEY_SECRET", "")
        )
        self.currency = currency or os.getenv("PAYMENT_CURRENCY", "INR")
        self._client = None

    def _get_client(self):
        if self._client is None:
            self._client = razorpay.Client(auth=(self.key_id, self.key_secret))
        return self._client

    def create_order(self, amount: float, booking_id: int) -> dict:
        """
        Creates a gateway order for the booking.

        Args:
            amount: Charge in rupees; sent to the gateway in paise
            booking_id: Booking the order pays for

        Returns:
            dict: The order as returned by Razorpay (id, amount, currency...)
        """
        payload = {
            "amount": int(round(amount * 100)),
            "currency": self.currency,
            "receipt": f"tm-booking-{booking_id}",
            "payment_capture": 1,
        }
        try:
            order = self._get_client().order.create(payload)
        except Exception as e:
            logger.error(f"Razorpay order creation failed for booking {booking_id}: {e}")
            raise PaymentGatewayError("Failed to create order", error=str(e))

        logger.info(f"Razorpay order {order.get('id')} created for booking {booking_id}")
        return order

    def verify_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        """Checkout signature over ``order_id|payment_id``."""
        if not (self.key_secret and order_id and payment_id and signature):
            return False
        try:
            self._get_client().utility.verify_payment_signature(
                {
                    "razorpay_order_id": order_id,
                    "razorpay_payment_id": payment_id,
                    "razorpay_signature": signature,
                }
            )
        except SignatureVerificationError:
            return False
        return True

    def verify_webhook_signature(self, body: bytes, signature: str) -> bool:
        """Signature of the raw webhook body."""
        if not (self.key_secret and signature):
            return False
        try:
            self._get_client().utility.verify_webhook_signature(
                body.decode("utf-8"), signature, self.key_secret
            )
        except (SignatureVerificationError, UnicodeDecodeError):
            return False
        return True


payment_gateway = RazorpayGateway()


def get_payment_gateway() -> RazorpayGateway:
    return payment_gateway
