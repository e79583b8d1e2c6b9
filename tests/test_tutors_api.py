from app.models.user import User


def test_create_profile_promotes_student(client, auth_for, db, student):
    response = client.post(
        "/tutors/profile",
        json={
            "name": "Asha Sharma",
            "city": "Nagpur",
            "subjects": ["Chemistry"],
            "feePerHour": 650,
            "trialFee": 99,
            "mode": "online",
        },
        headers=auth_for(student),
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["feePerHour"] == 650
    assert data["phone"] == "9000000001"
    assert data["kycStatus"] == "not_started"
    assert data["isVerified"] is False

    db.expire_all()
    assert db.query(User).filter(User.id == student.id).first().role == "tutor"


def test_one_profile_per_user(client, auth_for, tutor_user, tutor):
    response = client.post("/tutors/profile", json={"name": "Again"}, headers=auth_for(tutor_user))

    assert response.status_code == 400


def test_update_and_read_own_profile(client, auth_for, tutor_user, tutor):
    updated = client.put(
        "/tutors/profile", json={"trialFee": 149, "bio": "IIT alumnus"}, headers=auth_for(tutor_user)
    )

    assert updated.status_code == 200
    me = client.get("/tutors/me", headers=auth_for(tutor_user)).json()["data"]
    assert me["trialFee"] == 149
    assert me["bio"] == "IIT alumnus"
    assert me["feePerHour"] == 500
    assert me["whatsapp"] == "9000000003"


def test_my_profile_missing(client, auth_for, student):
    assert client.get("/tutors/me", headers=auth_for(student)).status_code == 404


def test_public_profile_hides_contact(client, tutor):
    response = client.get(f"/tutors/{tutor.id}")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Ravi Tutor"
    assert "phone" not in data
    assert "whatsapp" not in data


def test_search_filters(client, tutor, other_tutor):
    by_city = client.get("/tutors/?city=pune").json()
    by_subject = client.get("/tutors/?subject=physics").json()
    by_fee = client.get("/tutors/?max_fee=600").json()
    everyone = client.get("/tutors/?limit=1").json()

    assert [t["id"] for t in by_city["data"]] == [tutor.id]
    assert [t["id"] for t in by_subject["data"]] == [other_tutor.id]
    assert by_city["pagination"]["total"] == 1
    assert len(everyone["data"]) == 1
    assert everyone["pagination"] == {"page": 1, "limit": 1, "total": 2, "pages": 2}
    assert [t["id"] for t in by_fee["data"]] == [tutor.id]


def test_unknown_tutor(client):
    response = client.get("/tutors/999")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Tutor not found"}
