from app.crud import fcm_token as fcm_crud
from app.schemas.fcm_token import FCMTokenCreate
from app.utils.notification_utils import push_to_user


class RejectingPush:
    """Push backend reporting every token as unregistered."""

    def is_configured(self):
        return True

    def send_notification_to_multiple_tokens(self, tokens, title, body, data=None):
        return {"success": 0, "failure": len(tokens), "invalid_tokens": list(tokens)}


def test_booking_request_lands_in_tutor_inbox(client, auth_for, booking, tutor_user):
    body = client.get("/notifications/", headers=auth_for(tutor_user)).json()

    assert body["unread_count"] == 1
    assert body["notifications"][0]["type"] == "booking_created"
    assert body["notifications"][0]["data"] == {"booking_id": booking.id}
    assert body["notifications"][0]["booking_id"] == booking.id


def test_mark_read_and_delete(client, auth_for, booking, tutor_user, student):
    headers = auth_for(tutor_user)
    notification_id = client.get("/notifications/", headers=headers).json()["notifications"][0]["id"]

    assert client.put(f"/notifications/{notification_id}/read", headers=auth_for(student)).status_code == 404
    assert client.put(f"/notifications/{notification_id}/read", headers=headers).status_code == 200
    assert client.get("/notifications/", headers=headers).json()["unread_count"] == 0

    assert client.delete(f"/notifications/{notification_id}", headers=headers).status_code == 200
    assert client.get("/notifications/", headers=headers).json()["notifications"] == []


def test_mark_all_read(client, auth_for, service, db, booking, tutor_user, student):
    service.transition_status(db, tutor_user, booking.id, "accepted")
    service.transition_status(db, tutor_user, booking.id, "cancelled")

    response = client.put("/notifications/read-all", headers=auth_for(student))

    assert response.json()["message"] == "All notifications marked as read (2 updated)"


def test_register_token_reassigns_device(client, auth_for, student, other_student):
    first = client.post(
        "/notifications/register-token",
        json={"token": "shared-device", "device_type": "android"},
        headers=auth_for(student),
    )
    second = client.post(
        "/notifications/register-token",
        json={"token": "shared-device", "device_type": "android"},
        headers=auth_for(other_student),
    )

    assert first.status_code == 201
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["user_id"] == other_student.id
    assert client.get("/notifications/tokens", headers=auth_for(student)).json() == []


def test_delete_token(client, auth_for, student, other_student):
    token_id = client.post(
        "/notifications/register-token", json={"token": "abc"}, headers=auth_for(student)
    ).json()["id"]

    assert client.delete(f"/notifications/tokens/{token_id}", headers=auth_for(other_student)).status_code == 404
    assert client.delete(f"/notifications/tokens/{token_id}", headers=auth_for(student)).status_code == 200
    assert client.get("/notifications/tokens", headers=auth_for(student)).json() == []


def test_invalid_tokens_are_deactivated(db, student):
    fcm_crud.create_fcm_token(db, FCMTokenCreate(token="stale-token"), student.id)

    delivered = push_to_user(db, RejectingPush(), student.id, "Hi", "There", {"booking_id": 1})

    assert delivered == 0
    assert fcm_crud.get_active_tokens_for_users(db, [student.id]) == []
    assert len(fcm_crud.get_user_fcm_tokens(db, student.id, active_only=False)) == 1


def test_push_skipped_without_backend(db, student):
    fcm_crud.create_fcm_token(db, FCMTokenCreate(token="device"), student.id)

    assert push_to_user(db, None, student.id, "Hi", "There") == 0


def test_status_endpoint(client):
    response = client.get("/notifications/status")

    assert response.status_code == 200
    assert "push_configured" in response.json()


def test_inbox_filters(client, auth_for, service, db, booking, tutor_user, student, payment_signature):
    order = service.create_payment_order(db, student, booking.id)
    service.verify_payment(
        db, student, booking.id, order["order_id"], "pay_1",
        payment_signature(order["order_id"], "pay_1"),
    )
    headers = auth_for(tutor_user)

    payments = client.get("/notifications/?type=payment_success", headers=headers).json()
    assert [n["type"] for n in payments["notifications"]] == ["payment_success"]

    client.put(f"/notifications/read-all?booking_id={booking.id}", headers=headers)
    unread = client.get("/notifications/?unread_only=true", headers=headers).json()
    assert unread["notifications"] == []
    assert unread["unread_count"] == 0


def test_unknown_type_filter(client, auth_for, student):
    response = client.get("/notifications/?type=gossip", headers=auth_for(student))

    assert response.status_code == 400
