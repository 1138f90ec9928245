"""
Tests de registro, login y perfil
"""
from app.models.user import User
from app.services.auth import verify_password

NEW_USER = {
    "firstName": "Amina",
    "lastName": "Benali",
    "email": "Amina.Benali@locmaroc.ma",
    "phone": "0612345678",
    "password": "motdepasse",
}


def test_register_returns_token_and_user(client, db):
    response = client.post("/auth/register", json=NEW_USER)

    assert response.status_code == 201
    data = response.json()
    assert data["token"]
    assert data["tokenType"] == "bearer"
    assert data["user"]["email"] == "amina.benali@locmaroc.ma"
    assert data["user"]["trustScore"] == 50
    assert "hashedPassword" not in data["user"]

    user = db.query(User).one()
    assert verify_password("motdepasse", user.hashed_password)
    assert user.last_login is not None


def test_register_duplicate_email(client):
    client.post("/auth/register", json=NEW_USER)

    response = client.post(
        "/auth/register", json={**NEW_USER, "email": "amina.benali@locmaroc.ma"}
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Email already registered"


def test_register_short_password(client):
    response = client.post("/auth/register", json={**NEW_USER, "password": "123"})

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "invalid_input"


def test_login_and_use_token(client, owner, password):
    response = client.post(
        "/auth/login", json={"email": owner.email, "password": password}
    )

    assert response.status_code == 200
    token = response.json()["token"]

    profile = client.get("/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert profile.status_code == 200
    assert profile.json()["id"] == owner.id


def test_login_with_wrong_password(client, owner):
    response = client.post(
        "/auth/login", json={"email": owner.email, "password": "wrong-password"}
    )

    assert response.status_code == 400


def test_login_inactive_user(client, owner, db, password):
    owner.is_active = False
    db.commit()

    response = client.post(
        "/auth/login", json={"email": owner.email, "password": password}
    )

    assert response.status_code == 400


def test_oauth2_token_form(client, owner, password):
    response = client.post(
        "/auth/token", data={"username": owner.email, "password": password}
    )

    assert response.status_code == 200
    assert response.json()["token_type"] == "bearer"

    response = client.post(
        "/auth/token", data={"username": owner.email, "password": "nope"}
    )
    assert response.status_code == 401


def test_profile_requires_token(client):
    assert client.get("/auth/profile").status_code == 401


def test_update_profile(client, auth_headers, owner):
    response = client.put(
        "/users/profile",
        json={"city": "Fès", "postalCode": "30000"},
        headers=auth_headers(owner),
    )

    assert response.status_code == 200
    assert response.json()["city"] == "Fès"
    assert response.json()["postalCode"] == "30000"
    assert response.json()["firstName"] == "Karim"


def test_change_password(client, auth_headers, owner, db, password):
    response = client.put(
        "/users/change-password",
        json={"currentPassword": "bad-password", "newPassword": "nouveau123"},
        headers=auth_headers(owner),
    )
    assert response.status_code == 400

    response = client.put(
        "/users/change-password",
        json={"currentPassword": password, "newPassword": "nouveau123"},
        headers=auth_headers(owner),
    )
    assert response.status_code == 200

    db.refresh(owner)
    assert verify_password("nouveau123", owner.hashed_password)
