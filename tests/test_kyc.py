import os

from app.models.tutor import Tutor


def _files(**overrides):
    files = {
        "aadhaar_front": ("front.jpg", b"front-bytes", "image/jpeg"),
        "aadhaar_back": ("back.JPG", b"back-bytes", "image/jpeg"),
        "pan_card": ("pan.pdf", b"%PDF-1.4", "application/pdf"),
        "selfie": ("me.png", b"png-bytes", "image/png"),
    }
    files.update(overrides)
    return {k: v for k, v in files.items() if v is not None}


def test_status_before_upload(client, auth_for, tutor_user):
    body = client.get("/kyc/status", headers=auth_for(tutor_user)).json()

    assert body == {"status": "not_started", "documents": [], "rejectionReason": None}


def test_upload_stores_documents(client, auth_for, db, tmp_path, tutor_user, tutor):
    response = client.post("/kyc/upload", files=_files(), headers=auth_for(tutor_user))

    assert response.status_code == 200
    assert response.json()["success"] is True

    stored = tmp_path / str(tutor_user.id)
    assert sorted(os.listdir(stored)) == [
        "aadhaar_back.jpg",
        "aadhaar_front.jpg",
        "pan_card.pdf",
        "selfie.png",
    ]
    assert (stored / "pan_card.pdf").read_bytes() == b"%PDF-1.4"

    status = client.get("/kyc/status", headers=auth_for(tutor_user)).json()
    assert status["status"] == "pending"
    assert status["documents"][0] == f"{tutor_user.id}/aadhaar_front.jpg"

    db.expire_all()
    assert db.query(Tutor).filter(Tutor.id == tutor.id).first().kyc_status == "pending"


def test_upload_requires_every_document(client, auth_for, tutor_user):
    response = client.post("/kyc/upload", files=_files(selfie=None), headers=auth_for(tutor_user))

    assert response.status_code == 400
    assert response.json()["message"] == "All documents are required"


def test_upload_rejects_other_file_types(client, auth_for, tutor_user):
    response = client.post(
        "/kyc/upload",
        files=_files(selfie=("me.exe", b"MZ", "application/octet-stream")),
        headers=auth_for(tutor_user),
    )

    assert response.status_code == 400


def test_admin_approves(client, auth_for, db, push, mailer, tutor_user, tutor, admin):
    client.post("/kyc/upload", files=_files(), headers=auth_for(tutor_user))

    response = client.post(
        "/kyc/approve", json={"userId": tutor_user.id}, headers=auth_for(admin)
    )

    assert response.status_code == 200
    assert response.json()["status"] == "verified"
    db.expire_all()
    stored = db.query(Tutor).filter(Tutor.id == tutor.id).first()
    assert stored.kyc_status == "verified"
    assert stored.is_verified is True
    assert mailer.subjects_to(tutor_user.email) == ["KYC Update - TutorMitra"]


def test_admin_rejects_with_reason(client, auth_for, tutor_user, tutor, admin):
    client.post("/kyc/upload", files=_files(), headers=auth_for(tutor_user))

    response = client.post(
        "/kyc/reject",
        json={"userId": tutor_user.id, "reason": "Blurry PAN card"},
        headers=auth_for(admin),
    )

    assert response.status_code == 200
    status = client.get("/kyc/status", headers=auth_for(tutor_user)).json()
    assert status["status"] == "rejected"
    assert status["rejectionReason"] == "Blurry PAN card"


def test_reupload_resets_to_pending(client, auth_for, tutor_user, admin):
    client.post("/kyc/upload", files=_files(), headers=auth_for(tutor_user))
    client.post("/kyc/reject", json={"userId": tutor_user.id, "reason": "Expired"}, headers=auth_for(admin))

    client.post("/kyc/upload", files=_files(), headers=auth_for(tutor_user))

    status = client.get("/kyc/status", headers=auth_for(tutor_user)).json()
    assert status["status"] == "pending"
    assert status["rejectionReason"] is None


def test_decisions_require_admin(client, auth_for, tutor_user):
    client.post("/kyc/upload", files=_files(), headers=auth_for(tutor_user))

    response = client.post(
        "/kyc/approve", json={"userId": tutor_user.id}, headers=auth_for(tutor_user)
    )

    assert response.status_code == 403


def test_decision_without_record(client, auth_for, student, admin):
    response = client.post("/kyc/approve", json={"userId": student.id}, headers=auth_for(admin))

    assert response.status_code == 404
