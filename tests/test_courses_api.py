COURSE = {
    "title": "Python for Beginners",
    "description": "Variables, loops and functions",
    "price": 2500,
    "category": "programming",
    "coachingType": "online",
    "topics": ["variables", "loops"],
}


def test_tutor_creates_course(client, auth_for, tutor_user, tutor):
    response = client.post("/courses/", json=COURSE, headers=auth_for(tutor_user))

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["instructorId"] == tutor.id
    assert data["coachingType"] == "online"
    assert data["language"] == "English"


def test_student_cannot_create_course(client, auth_for, student):
    response = client.post("/courses/", json=COURSE, headers=auth_for(student))

    assert response.status_code == 403


def test_unknown_category(client, auth_for, tutor_user, tutor):
    response = client.post(
        "/courses/", json={**COURSE, "category": "astrology"}, headers=auth_for(tutor_user)
    )

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_list_and_filter(client, auth_for, tutor_user, course):
    client.post("/courses/", json=COURSE, headers=auth_for(tutor_user))

    everything = client.get("/courses/").json()
    maths = client.get("/courses/?category=mathematics").json()
    searched = client.get("/courses/?q=python").json()

    assert everything["pagination"]["total"] == 2
    assert [c["title"] for c in maths["data"]] == ["Algebra Basics"]
    assert [c["title"] for c in searched["data"]] == ["Python for Beginners"]


def test_owner_updates_course(client, auth_for, tutor_user, course):
    response = client.put(
        f"/courses/{course.id}", json={"price": 1500}, headers=auth_for(tutor_user)
    )

    assert response.status_code == 200
    assert response.json()["data"]["price"] == 1500
    assert client.get(f"/courses/{course.id}").json()["data"]["title"] == "Algebra Basics"


def test_other_tutor_cannot_update(client, auth_for, other_tutor, course):
    response = client.put(
        f"/courses/{course.id}", json={"price": 1}, headers=auth_for(other_tutor.user)
    )

    assert response.status_code == 403


def test_delete_course(client, auth_for, tutor_user, course):
    response = client.delete(f"/courses/{course.id}", headers=auth_for(tutor_user))

    assert response.status_code == 200
    assert client.get(f"/courses/{course.id}").status_code == 404


def test_course_with_bookings_is_kept(client, auth_for, db, service, student, tutor, tutor_user, course):
    from app.schemas.booking import BookingCreate
    from conftest import SESSION_DATE

    service.create_booking(
        db,
        student,
        BookingCreate(
            tutor_id=tutor.id, course_id=course.id, session_date=SESSION_DATE, session_time="18:00"
        ),
    )

    response = client.delete(f"/courses/{course.id}", headers=auth_for(tutor_user))

    assert response.status_code == 400
    assert client.get(f"/courses/{course.id}").status_code == 200
