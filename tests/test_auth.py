from app.services.auth import create_refresh_token, verify_password, get_password_hash


def _register(client, **fields):
    payload = {"name": "Neha", "email": "neha@example.com", "password": "secret123"}
    payload.update(fields)
    return client.post("/auth/register", json=payload)


def _login(client, email="neha@example.com", password="secret123"):
    return client.post("/auth/token", data={"username": email, "password": password})


def test_password_hashing():
    hashed = get_password_hash("secret123")

    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)


def test_register_and_login(client):
    registered = _register(client, phone="9876543210")

    assert registered.status_code == 201
    user = registered.json()
    assert user["email"] == "neha@example.com"
    assert user["role"] == "student"
    assert "hashedPassword" not in user and "password" not in user

    token = _login(client)
    assert token.status_code == 200
    assert token.json()["token_type"] == "bearer"

    me = client.get(
        "/auth/me", headers={"Authorization": f"Bearer {token.json()['access_token']}"}
    )
    assert me.status_code == 200
    assert me.json()["name"] == "Neha"


def test_register_as_tutor(client):
    assert _register(client, role="tutor").json()["role"] == "tutor"


def test_admin_cannot_self_register(client):
    response = _register(client, role="admin")

    assert response.status_code == 403
    assert response.json()["success"] is False


def test_duplicate_email(client):
    _register(client)

    response = _register(client, name="Other Neha")

    assert response.status_code == 400
    assert response.json()["message"] == "Email already registered"


def test_wrong_password(client):
    _register(client)

    response = _login(client, password="nope")

    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Incorrect email or password"}


def test_me_requires_token(client):
    response = client.get("/auth/me")

    assert response.status_code == 401
    assert response.json()["success"] is False


def test_garbage_token(client):
    response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401


def test_refresh_token_flow(client):
    _register(client)
    tokens = _login(client).json()

    refreshed = client.post("/auth/refresh", json={"refreshToken": tokens["refresh_token"]})

    assert refreshed.status_code == 200
    access = refreshed.json()["access_token"]
    assert client.get("/auth/me", headers={"Authorization": f"Bearer {access}"}).status_code == 200


def test_refresh_token_is_not_an_access_token(client, student):
    refresh = create_refresh_token(data={"sub": student.email})

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {refresh}"})

    assert response.status_code == 401


def test_change_password(client):
    _register(client)
    access = _login(client).json()["access_token"]
    headers = {"Authorization": f"Bearer {access}"}

    wrong = client.post(
        "/auth/change-password",
        json={"currentPassword": "bad", "newPassword": "newsecret1"},
        headers=headers,
    )
    assert wrong.status_code == 401

    changed = client.post(
        "/auth/change-password",
        json={"currentPassword": "secret123", "newPassword": "newsecret1"},
        headers=headers,
    )
    assert changed.status_code == 200
    assert _login(client, password="newsecret1").status_code == 200
