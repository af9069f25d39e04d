from app.core.jwt import create_session_token, decode_session_token
from app.core.hashing import hash_password, verify_password
from datetime import timedelta

PASSWORD = "s3cure-bakery-pass"


def test_signup_creates_account(client):
    response = client.post(
        "/auth/signup",
        json={
            "email": "ana@bakery.com",
            "password": PASSWORD,
            "business_name": "Ana Bolos",
        },
    )

    assert response.status_code == 201
    assert response.json()["message"].startswith("Account created")


def test_signup_rejects_duplicate_email(client):
    payload = {"email": "ana@bakery.com", "password": PASSWORD, "business_name": "Ana Bolos"}
    client.post("/auth/signup", json=payload)

    response = client.post("/auth/signup", json={**payload, "business_name": "Other"})

    assert response.status_code == 409
    assert response.json() == {"success": False, "message": "Email already exists"}


def test_signup_rejects_weak_passwords(client):
    common = client.post(
        "/auth/signup",
        json={"email": "a@b.com", "password": "password123", "business_name": "A"},
    )
    digits = client.post(
        "/auth/signup",
        json={"email": "a@b.com", "password": "1234567890", "business_name": "A"},
    )

    assert common.status_code == 422
    assert common.json() == {
        "success": False,
        "message": "Password is too common. Please choose a stronger password.",
    }
    assert digits.status_code == 422
    assert digits.json()["message"] == "Password cannot be numbers only."


def test_login_sets_http_only_session_cookie(client):
    client.post(
        "/auth/signup",
        json={"email": "ana@bakery.com", "password": PASSWORD, "business_name": "Ana Bolos"},
    )

    response = client.post("/auth/login", json={"email": "ana@bakery.com", "password": PASSWORD})

    assert response.status_code == 200
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("session=")
    assert "HttpOnly" in set_cookie
    assert "Max-Age=432000" in set_cookie


def test_login_rejects_wrong_password(client):
    client.post(
        "/auth/signup",
        json={"email": "ana@bakery.com", "password": PASSWORD, "business_name": "Ana Bolos"},
    )

    response = client.post("/auth/login", json={"email": "ana@bakery.com", "password": "wrong-pass"})

    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Invalid credentials"}


def test_me_requires_session(client):
    response = client.get("/auth/me")

    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Please log in."}


def test_me_returns_current_user(auth_client):
    response = auth_client.get("/auth/me")

    assert response.status_code == 200
    assert response.json()["email"] == "owner@bakery.com"
    assert response.json()["business_name"] == "Doce Bakery"


def test_invalid_session_cookie_is_rejected(client):
    response = client.get("/auth/me", headers={"Cookie": "session=not-a-jwt"})

    assert response.status_code == 401
    assert response.json()["success"] is False


def test_logout_clears_session(auth_client):
    response = auth_client.post("/auth/logout")

    assert response.status_code == 200
    assert auth_client.get("/auth/me").status_code == 401


def test_session_token_round_trip_and_expiry():
    token = create_session_token({"sub": "7"})
    expired = create_session_token({"sub": "7"}, expires_delta=timedelta(seconds=-1))

    assert decode_session_token(token)["sub"] == "7"
    assert decode_session_token(expired) is None


def test_password_hashing():
    hashed = hash_password(PASSWORD)

    assert hashed != PASSWORD
    assert verify_password(PASSWORD, hashed)
    assert not verify_password("something-else", hashed)
