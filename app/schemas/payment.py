from pydantic import Field
from typing import Optional

from app.schemas.common import CamelModel


class CreateOrderRequest(CamelModel):
    booking_id: int


class CreateOrderResponse(CamelModel):
    success: bool = True
    order_id: str
    razorpay_key: Optional[str] = None
    amount: int  # smallest currency unit (paise)
    currency: str


class VerifyPaymentRequest(CamelModel):
    # populate_by_name lets the raw Razorpay checkout keys through as-is
    booking_id: int
    razorpay_order_id: str = Field(..., min_length=1)
    razorpay_payment_id: str = Field(..., min_length=1)
    razorpay_signature: str = Field(..., min_length=1)


class PaymentFailureReport(CamelModel):
    booking_id: int
    status: str = "failed"
    order_id: Optional[str] = None
    payment_id: Optional[str] = None


class ReleasePaymentRequest(CamelModel):
    booking_id: int


class ReleasePaymentResponse(CamelModel):
    success: bool = True
    tutor_amount: int
    message: str
