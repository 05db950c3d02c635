# tests/v1/test_users.py
"""Tests for profile and leaderboard endpoints."""

from fastapi import status

from stratizen_hub.models import User
from stratizen_hub.services.points import award_points


def test_get_my_profile(client, auth_token, test_user) -> None:
    """The profile carries the account and its rank progress."""
    response = client.get("/api/v1/users/me", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["user"]["id"] == test_user.id
    assert body["user"]["name"] == "Victoria Mutheu"
    assert body["rank"]["current"]["name"] == "Freshman Scholar"
    assert body["rank"]["next"]["name"] == "Knowledge Seeker"
    assert body["rank"]["points_to_next"] == 100


def test_update_profile(client, auth_token) -> None:
    response = client.patch(
        "/api/v1/users/me",
        json={"name": "Victoria M.", "profile_picture_url": "http://files.test/me.png"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_200_OK
    user = response.json()["user"]
    assert user["name"] == "Victoria M."
    assert user["profile_picture_url"] == "http://files.test/me.png"


def test_update_profile_rejects_bad_email(client, auth_token) -> None:
    response = client.patch("/api/v1/users/me", json={"email": "nope"}, headers=auth_token)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_leaderboard_orders_by_points(client, db_session, auth_token, test_user, other_user) -> None:
    award_points(db_session, test_user.id, 40, "setup")
    award_points(db_session, other_user.id, 120, "setup")
    db_session.commit()

    response = client.get("/api/v1/users/leaderboard", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    names = [entry["name"] for entry in response.json()]
    assert names[:2] == ["Ethan Joseph", "Victoria Mutheu"]
    assert response.json()[0]["rank"] == 2


def test_leaderboard_class_scope(client, db_session, auth_token, admin_user) -> None:
    award_points(db_session, admin_user.id, 500, "setup")
    db_session.commit()

    everyone = client.get("/api/v1/users/leaderboard", headers=auth_token).json()
    classmates = client.get(
        "/api/v1/users/leaderboard", params={"scope": "class"}, headers=auth_token
    ).json()
    assert everyone[0]["id"] == admin_user.id
    assert admin_user.id not in {entry["id"] for entry in classmates}


def test_leaderboard_limit(client, auth_token, make_user) -> None:
    for i in range(7):
        make_user(f"Student {i}")
    response = client.get("/api/v1/users/leaderboard", headers=auth_token)
    assert len(response.json()) == 5


def test_admin_creates_user(client, admin_auth_token, class_instance) -> None:
    response = client.post(
        "/api/v1/users/",
        json={
            "admission_number": "200001",
            "email": "200001@strathmore.edu",
            "name": "New Student",
            "class_instance_id": class_instance.id,
        },
        headers=admin_auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["points"] == 0
    assert response.json()["rank"] == 1


def test_duplicate_admission_rejected(client, admin_auth_token, test_user) -> None:
    response = client.post(
        "/api/v1/users/",
        json={
            "admission_number": test_user.admission_number,
            "email": "dup@strathmore.edu",
            "name": "Duplicate",
        },
        headers=admin_auth_token,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_student_cannot_create_user(client, auth_token) -> None:
    response = client.post(
        "/api/v1/users/",
        json={"admission_number": "200002", "email": "x@strathmore.edu", "name": "X"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_my_completions(client, auth_token, assignment) -> None:
    client.post(f"/api/v1/resources/{assignment.id}/complete", headers=auth_token)
    response = client.get("/api/v1/users/me/completions", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert [c["resource_id"] for c in response.json()] == [assignment.id]


def test_unit_admin_cannot_grant_super_admin(client, db_session, admin_auth_token) -> None:
    """Only a super admin may hand out elevated rights."""
    response = client.post(
        "/api/v1/users/",
        json={
            "admission_number": "200003",
            "email": "200003@strathmore.edu",
            "name": "Would-be Root",
            "is_super_admin": True,
        },
        headers=admin_auth_token,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert db_session.query(User).filter_by(admission_number="200003").first() is None


def test_unit_admin_cannot_grant_admin(client, admin_auth_token) -> None:
    response = client.post(
        "/api/v1/users/",
        json={
            "admission_number": "200004",
            "email": "200004@strathmore.edu",
            "name": "Would-be Admin",
            "is_admin": True,
        },
        headers=admin_auth_token,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_super_admin_grants_admin(client, make_user, auth_headers_for) -> None:
    super_admin = make_user("Registrar", is_super_admin=True)
    response = client.post(
        "/api/v1/users/",
        json={
            "admission_number": "200005",
            "email": "200005@strathmore.edu",
            "name": "New Class Rep",
            "is_admin": True,
        },
        headers=auth_headers_for(super_admin),
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["is_admin"] is True
