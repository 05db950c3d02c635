# tests/v1/test_comments.py
"""Tests for resource comments."""

from fastapi import status

from stratizen_hub.core.settings import settings


def test_comment_and_list(client, other_auth_token, note) -> None:
    created = client.post(
        f"/api/v1/resources/{note.id}/comments",
        json={"content": "  Very helpful, thanks  "},
        headers=other_auth_token,
    )
    assert created.status_code == status.HTTP_201_CREATED
    assert created.json()["content"] == "Very helpful, thanks"
    assert created.json()["author"]["name"] == "Ethan Joseph"

    client.post(
        f"/api/v1/resources/{note.id}/comments",
        json={"content": "Second"},
        headers=other_auth_token,
    )
    listing = client.get(f"/api/v1/resources/{note.id}/comments", headers=other_auth_token)
    assert [c["content"] for c in listing.json()] == ["Second", "Very helpful, thanks"]


def test_blank_comment_rejected(client, auth_token, note) -> None:
    response = client.post(
        f"/api/v1/resources/{note.id}/comments", json={"content": "   "}, headers=auth_token
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_comment_awards_nothing_by_default(client, db_session, other_auth_token, other_user, note) -> None:
    client.post(
        f"/api/v1/resources/{note.id}/comments", json={"content": "Nice"}, headers=other_auth_token
    )
    db_session.refresh(other_user)
    assert other_user.points == 0


def test_comment_points_when_enabled(
    client, db_session, other_auth_token, other_user, note, monkeypatch
) -> None:
    monkeypatch.setattr(settings, "award_comment_points", True)
    client.post(
        f"/api/v1/resources/{note.id}/comments", json={"content": "Nice"}, headers=other_auth_token
    )
    db_session.refresh(other_user)
    assert other_user.points == 1


def test_comment_outside_class_forbidden(client, auth_headers_for, make_user, other_class_instance, note) -> None:
    outsider = make_user("Outsider", class_instance_id=other_class_instance.id)
    response = client.post(
        f"/api/v1/resources/{note.id}/comments",
        json={"content": "Hello"},
        headers=auth_headers_for(outsider),
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN
