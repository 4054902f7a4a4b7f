from __future__ import annotations

from auth import security

from conftest import TEST_PASSWORD


def _register(client, **overrides):
    body = {
        "name": "Alex Driver",
        "email": "alex@example.com",
        "password": TEST_PASSWORD,
        "confirmPassword": TEST_PASSWORD,
    }
    body.update(overrides)
    return client.post("/api/register", json=body)


def test_register_returns_public_fields_only(client):
    response = _register(client)

    assert response.status_code == 201
    body = response.json()
    assert set(body) == {"id", "name", "email"}
    assert body["email"] == "alex@example.com"
    assert body["name"] == "Alex Driver"


def test_register_twice_conflicts(client):
    assert _register(client).status_code == 201

    second = _register(client, email="  ALEX@example.com ")
    assert second.status_code == 409
    assert second.json()["detail"] == "Email already registered"


def test_register_validation_messages(client):
    cases = [
        ({"name": "A"}, "Name must be at least 2 characters"),
        ({"email": "   "}, "Invalid email address"),
        ({"password": "short", "confirmPassword": "short"}, "Password must be at least 8 characters"),
        ({"confirmPassword": "different123"}, "Passwords do not match"),
    ]
    for overrides, message in cases:
        response = _register(client, **overrides)
        assert response.status_code == 400, overrides
        assert response.json()["detail"] == message


def test_register_rejects_passwords_over_72_bytes(client):
    for password in ("a" * 100, "é" * 50):
        response = _register(client, password=password, confirmPassword=password)
        assert response.status_code == 400, password
        assert response.json()["detail"] == "Password must be at most 72 bytes"

    exactly_72 = "a" * 72
    assert _register(client, password=exactly_72, confirmPassword=exactly_72).status_code == 201


def test_login_issues_token_for_registered_user(client, settings):
    _register(client)

    response = client.post("/api/auth/login", json={"email": "alex@example.com", "password": TEST_PASSWORD})

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["email"] == "alex@example.com"
    assert body["user"]["name"] == "Alex Driver"

    claims = security.decode_access_token(body["token"], secret=settings.jwt_secret)
    assert claims["sub"] == body["user"]["id"]
    assert claims["email"] == "alex@example.com"
    assert claims["exp"] - claims["iat"] == 24 * 60 * 60


def test_login_failures_are_indistinguishable(client):
    _register(client)

    wrong_password = client.post("/api/auth/login", json={"email": "alex@example.com", "password": "nope-nope-nope"})
    unknown_email = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": TEST_PASSWORD})

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()


def test_login_requires_both_fields(client):
    response = client.post("/api/auth/login", json={"email": "alex@example.com"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Email and password are required"


def test_protected_endpoint_rejects_bad_tokens(client, settings, make_user):
    user = make_user()
    expired = security.build_access_token(
        user_id=user["id"],
        email=user["email"],
        secret=settings.jwt_secret,
        expire_hours=-1,
    )
    forged = security.build_access_token(user_id=user["id"], email=user["email"], secret="some-other-secret")

    header_variants = [
        {},
        {"Authorization": ""},
        {"Authorization": "Bearer"},
        {"Authorization": f"Token {user['token']}"},
        {"Authorization": "Bearer not-a-jwt"},
        {"Authorization": f"Bearer {expired}"},
        {"Authorization": f"Bearer {forged}"},
    ]
    for headers in header_variants:
        response = client.get("/api/cars", headers=headers)
        assert response.status_code == 401, headers
        assert response.json()["detail"] == "Unauthorized"


def test_malformed_body_is_a_400(client):
    response = client.post(
        "/api/register",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid request body"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
