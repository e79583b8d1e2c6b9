from fastapi import APIRouter, Depends, Header, Request
from sqlalchemy.orm import Session
from typing import Optional
import json
import logging

from app.database import get_db
from app.enums.booking_status import PaymentOutcome
from app.exceptions import SignatureMismatch, ValidationError
from app.models.user import User
from app.schemas.booking import BookingEnvelope, BookingResponse
from app.schemas.payment import (
    CreateOrderRequest,
    CreateOrderResponse,
    VerifyPaymentRequest,
    PaymentFailureReport,
    ReleasePaymentRequest,
    ReleasePaymentResponse,
)
from app.services.auth import get_current_user, get_current_admin
from app.services.booking_service import BookingService, get_booking_service
from app.services.payment_gateway import RazorpayGateway, get_payment_gateway

router = APIRouter()
logger = logging.getLogger(__name__)


async def raw_body(request: Request) -> bytes:
    return await request.body()


@router.post("/create-order", response_model=CreateOrderResponse)
def create_order(
    body: CreateOrderRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    order = service.create_payment_order(db, current_user, body.booking_id)
    return CreateOrderResponse(**order)


@router.post("/verify", response_model=BookingEnvelope)
def verify_payment(
    body: VerifyPaymentRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    booking = service.verify_payment(
        db,
        current_user,
        body.booking_id,
        body.razorpay_order_id,
        body.razorpay_payment_id,
        body.razorpay_signature,
    )
    return BookingEnvelope(
        data=BookingResponse.from_booking(booking),
        message="Payment verified successfully",
    )


@router.post("/webhook", response_model=BookingEnvelope)
def payment_webhook(
    body: bytes = Depends(raw_body),
    x_razorpay_signature: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    gateway: RazorpayGateway = Depends(get_payment_gateway),
    service: BookingService = Depends(get_booking_service),
):
    """Failure reports pushed by the gateway, signed over the raw body."""
    if not gateway.verify_webhook_signature(body, x_razorpay_signature):
        logger.warning("Rejected payment webhook with a bad signature")
        raise SignatureMismatch("Invalid webhook signature")

    try:
        report = PaymentFailureReport.model_validate(json.loads(body))
    except ValueError as e:
        raise ValidationError("Malformed webhook payload", error=str(e))

    if report.status != PaymentOutcome.FAILED.value:
        raise ValidationError(f"Unsupported webhook status '{report.status}'")

    booking = service.apply_payment_outcome(
        db,
        report.booking_id,
        PaymentOutcome.FAILED,
        order_id=report.order_id,
        payment_id=report.payment_id,
    )
    return BookingEnvelope(
        data=BookingResponse.from_booking(booking), message="Payment failure recorded"
    )


@router.post("/release", response_model=ReleasePaymentResponse)
def release_tutor_payment(
    body: ReleasePaymentRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
    service: BookingService = Depends(get_booking_service),
):
    tutor_amount = service.release_tutor_payment(db, body.booking_id)
    return ReleasePaymentResponse(
        tutor_amount=tutor_amount, message="Payment released to tutor."
    )
