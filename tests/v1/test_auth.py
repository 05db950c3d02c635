# tests/v1/test_auth.py
"""Tests for login, logout and password management."""

from fastapi import status

from stratizen_hub.models import AuthSession

DEFAULT_PASSWORD = "stratizens#web"


def _login(client, admission_number: str, password: str = DEFAULT_PASSWORD):
    return client.post(
        "/api/v1/auth/login",
        json={"admission_number": admission_number, "password": password},
    )


def test_login_awards_bonus_and_opens_session(client, db_session, test_user) -> None:
    """A successful login returns a token and credits the login bonus."""
    response = _login(client, test_user.admission_number)
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["points_awarded"] == 5
    assert body["user"]["points"] == 5
    assert body["user"]["last_login"] is not None

    auth_session = db_session.get(AuthSession, body["session_id"])
    assert auth_session is not None
    assert auth_session.user_id == test_user.id


def test_each_login_is_a_new_session(client, test_user) -> None:
    first = _login(client, test_user.admission_number).json()
    second = _login(client, test_user.admission_number).json()
    assert first["session_id"] != second["session_id"]
    assert second["user"]["points"] == 10


def test_login_wrong_password(client, db_session, test_user) -> None:
    response = _login(client, test_user.admission_number, "not-the-password")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Invalid admission number or password"
    db_session.refresh(test_user)
    assert test_user.points == 0


def test_login_unknown_admission(client) -> None:
    response = _login(client, "999999")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Invalid admission number or password"


def test_logout_revokes_token(client, test_user) -> None:
    token = _login(client, test_user.admission_number).json()["access_token"]
    headers = {"Authorization": f"Bearer {token}"}

    assert client.get("/api/v1/users/me", headers=headers).status_code == status.HTTP_200_OK
    assert client.post("/api/v1/auth/logout", headers=headers).status_code == (
        status.HTTP_204_NO_CONTENT
    )
    response = client.get("/api/v1/users/me", headers=headers)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_requests_without_token_are_rejected(client) -> None:
    response = client.get("/api/v1/users/me")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_garbage_token_rejected(client) -> None:
    response = client.get("/api/v1/users/me", headers={"Authorization": "Bearer nope"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_change_password(client, auth_token, test_user) -> None:
    response = client.post(
        "/api/v1/auth/change-password",
        json={"current_password": DEFAULT_PASSWORD, "new_password": "correct-horse-42"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_200_OK
    assert _login(client, test_user.admission_number, "correct-horse-42").status_code == (
        status.HTTP_200_OK
    )


def test_change_password_requires_current(client, auth_token) -> None:
    response = client.post(
        "/api/v1/auth/change-password",
        json={"current_password": "wrong", "new_password": "correct-horse-42"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_reset_password_with_code(client, make_user) -> None:
    user = make_user("Forgetful", password="my-old-password", reset_code="123456")
    assert _login(client, user.admission_number, "my-old-password").status_code == (
        status.HTTP_200_OK
    )

    response = client.post(
        "/api/v1/auth/reset-password",
        json={"admission_number": user.admission_number, "reset_code": "123456"},
    )
    assert response.status_code == status.HTTP_200_OK
    assert _login(client, user.admission_number, "my-old-password").status_code == (
        status.HTTP_401_UNAUTHORIZED
    )


def test_reset_password_wrong_code(client, make_user) -> None:
    user = make_user("Forgetful", reset_code="123456")
    response = client.post(
        "/api/v1/auth/reset-password",
        json={"admission_number": user.admission_number, "reset_code": "000000"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
