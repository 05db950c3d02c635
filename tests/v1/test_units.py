# tests/v1/test_units.py
"""Tests for unit catalog endpoints."""

from fastapi import status


def test_list_my_units(client, auth_token, unit, other_unit) -> None:
    response = client.get("/api/v1/units/", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert [u["id"] for u in response.json()] == [unit.id]


def test_student_cannot_list_other_class(client, auth_token, other_class_instance) -> None:
    response = client.get(
        "/api/v1/units/",
        params={"class_instance_id": other_class_instance.id},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_admin_lists_any_class(client, admin_auth_token, class_instance, unit) -> None:
    response = client.get(
        "/api/v1/units/",
        params={"class_instance_id": class_instance.id},
        headers=admin_auth_token,
    )
    assert response.status_code == status.HTTP_200_OK
    assert [u["code"] for u in response.json()] == ["ICS 2105"]


def test_get_unit_outside_class(client, auth_token, other_unit) -> None:
    response = client.get(f"/api/v1/units/{other_unit.id}", headers=auth_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_get_missing_unit(client, auth_token) -> None:
    response = client.get("/api/v1/units/9999", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_admin_creates_unit(client, admin_auth_token, class_instance) -> None:
    response = client.post(
        "/api/v1/units/",
        json={
            "name": "Operating Systems",
            "code": "ICS 2203",
            "lecturer": "Dr. Kamau",
            "class_instance_id": class_instance.id,
        },
        headers=admin_auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["name"] == "Operating Systems"


def test_student_cannot_create_unit(client, auth_token, class_instance) -> None:
    response = client.post(
        "/api/v1/units/",
        json={"name": "X", "code": "X 1", "class_instance_id": class_instance.id},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_unit_resources_filter(client, auth_token, unit, assignment, note) -> None:
    response = client.get(
        f"/api/v1/units/{unit.id}/resources", params={"type": "note"}, headers=auth_token
    )
    assert response.status_code == status.HTTP_200_OK
    assert [r["id"] for r in response.json()] == [note.id]

    everything = client.get(f"/api/v1/units/{unit.id}/resources", headers=auth_token).json()
    assert {r["id"] for r in everything} == {assignment.id, note.id}
    assert everything[0]["owner"]["name"] == "Victoria Mutheu"


def test_my_unit_completions(client, auth_token, unit, assignment) -> None:
    client.post(f"/api/v1/resources/{assignment.id}/complete", headers=auth_token)
    response = client.get(f"/api/v1/units/{unit.id}/my-completions", headers=auth_token)
    assert response.json() == [assignment.id]


def test_unit_rankings_endpoint(client, auth_token, other_auth_token, unit, assignment) -> None:
    client.post(f"/api/v1/resources/{assignment.id}/complete", headers=other_auth_token)
    response = client.get(f"/api/v1/units/{unit.id}/rankings", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    entries = response.json()
    assert len(entries) == 1
    assert entries[0]["name"] == "Ethan Joseph"
    assert entries[0]["completion"] == 100
    assert isinstance(entries[0]["avg_time"], str)


def test_describe_class_instance(client, auth_token, class_instance) -> None:
    response = client.get(f"/api/v1/units/class-instances/{class_instance.id}", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["course"] == "Informatics"
