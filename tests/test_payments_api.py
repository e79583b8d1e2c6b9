"""
Payment endpoints: order creation, checkout verification, gateway webhook
and the admin payout release
"""
import json

from app.crud import booking as booking_crud
from app.enums.booking_status import PaymentStatus


def _order(client, headers, booking_id):
    return client.post("/payments/create-order", json={"bookingId": booking_id}, headers=headers)


def _verify(client, headers, booking_id, order_id, payment_id, signature):
    return client.post(
        "/payments/verify",
        json={
            "bookingId": booking_id,
            "razorpay_order_id": order_id,
            "razorpay_payment_id": payment_id,
            "razorpay_signature": signature,
        },
        headers=headers,
    )


def test_create_order(client, auth_for, booking, student):
    response = _order(client, auth_for(student), booking.id)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["orderId"] == f"order_{booking.id}_1"
    assert body["amount"] == 50000
    assert body["currency"] == "INR"
    assert body["razorpayKey"] == "rzp_test_key"


def test_create_order_by_tutor_denied(client, auth_for, booking, tutor_user):
    response = _order(client, auth_for(tutor_user), booking.id)

    assert response.status_code == 403


def test_create_order_gateway_down(client, auth_for, gateway, booking, student):
    gateway.fail = True

    response = _order(client, auth_for(student), booking.id)

    assert response.status_code == 502
    assert response.json()["success"] is False


def test_verify_unlocks_booking(client, auth_for, booking, student, payment_signature):
    order_id = _order(client, auth_for(student), booking.id).json()["orderId"]

    response = _verify(
        client,
        auth_for(student),
        booking.id,
        order_id,
        "pay_123",
        payment_signature(order_id, "pay_123"),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["paymentStatus"] == "success"
    assert data["status"] == "confirmed"
    assert data["canChat"] is True
    assert data["privateDetailsUnlocked"] is True
    assert data["tutor"]["phone"] == "9000000002"


def test_verify_with_forged_signature(client, auth_for, db, booking, student):
    order_id = _order(client, auth_for(student), booking.id).json()["orderId"]

    response = _verify(client, auth_for(student), booking.id, order_id, "pay_123", "deadbeef")

    assert response.status_code == 400
    assert response.json()["message"] == "Payment signature mismatch"
    db.expire_all()
    stored = booking_crud.get_booking(db, booking.id)
    assert stored.payment_status == PaymentStatus.FAILED
    assert stored.can_chat is False


def test_verify_missing_fields(client, auth_for, booking, student):
    response = client.post(
        "/payments/verify",
        json={"bookingId": booking.id, "razorpay_order_id": "order_1"},
        headers=auth_for(student),
    )

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_verify_by_stranger(client, auth_for, booking, other_student, payment_signature):
    response = _verify(
        client,
        auth_for(other_student),
        booking.id,
        "order_1",
        "pay_1",
        payment_signature("order_1", "pay_1"),
    )

    assert response.status_code == 403


def test_webhook_records_failure(client, booking, webhook_signature):
    body = json.dumps({"bookingId": booking.id, "status": "failed", "paymentId": "pay_9"}).encode()

    response = client.post(
        "/payments/webhook",
        content=body,
        headers={"X-Razorpay-Signature": webhook_signature(body), "Content-Type": "application/json"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["paymentStatus"] == "failed"
    assert data["status"] == "pending"
    assert data["canChat"] is False


def test_webhook_bad_signature(client, booking):
    body = json.dumps({"bookingId": booking.id, "status": "failed"}).encode()

    response = client.post(
        "/payments/webhook", content=body, headers={"X-Razorpay-Signature": "nope"}
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid webhook signature"


def test_webhook_unsigned(client, booking):
    body = json.dumps({"bookingId": booking.id, "status": "failed"}).encode()

    response = client.post("/payments/webhook", content=body)

    assert response.status_code == 400


def test_webhook_cannot_report_success(client, booking, webhook_signature):
    body = json.dumps({"bookingId": booking.id, "status": "success"}).encode()

    response = client.post(
        "/payments/webhook", content=body, headers={"X-Razorpay-Signature": webhook_signature(body)}
    )

    assert response.status_code == 400


def test_release_by_admin(
    client, auth_for, db, service, booking, student, tutor_user, admin, payment_signature
):
    order = service.create_payment_order(db, student, booking.id)
    service.verify_payment(
        db, student, booking.id, order["order_id"], "pay_1",
        payment_signature(order["order_id"], "pay_1"),
    )
    service.transition_status(db, tutor_user, booking.id, "completed")

    response = client.post(
        "/payments/release", json={"bookingId": booking.id}, headers=auth_for(admin)
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "tutorAmount": 450,
        "message": "Payment released to tutor.",
    }

    again = client.post(
        "/payments/release", json={"bookingId": booking.id}, headers=auth_for(admin)
    )
    assert again.status_code == 400
    assert again.json()["message"] == "Tutor already paid"


def test_release_requires_admin(client, auth_for, booking, tutor_user):
    response = client.post(
        "/payments/release", json={"bookingId": booking.id}, headers=auth_for(tutor_user)
    )

    assert response.status_code == 403
    assert response.json()["success"] is False
