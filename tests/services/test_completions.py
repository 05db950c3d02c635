"""Tests for assignment completion tracking."""

from datetime import datetime, timezone

import pytest

from stratizen_hub.models import Completion, ResourceType
from stratizen_hub.services import completion_service
from stratizen_hub.services.completion_service import CompletionStatus
from stratizen_hub.services.errors import InvalidOperationError, UnauthorizedError

DEADLINE = datetime(2024, 1, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture()
def dated_assignment(make_resource, other_user):
    return make_resource(
        other_user,
        ResourceType.ASSIGNMENT,
        title="Graph traversal",
        file_url=None,
        deadline=DEADLINE,
    )


def _completion_count(db_session, resource_id: int) -> int:
    return db_session.query(Completion).filter(Completion.resource_id == resource_id).count()


def test_complete_on_time_awards_ten(db_session, test_user, dated_assignment) -> None:
    result = completion_service.complete(
        db_session,
        test_user,
        dated_assignment.id,
        now=datetime(2024, 1, 9, 23, 59, tzinfo=timezone.utc),
    )
    assert result.status is CompletionStatus.COMPLETED
    assert result.on_time is True
    assert result.points_awarded == 10
    assert "on time" in result.message

    db_session.refresh(test_user)
    assert test_user.points == 10


def test_complete_overdue_awards_three(db_session, test_user, dated_assignment) -> None:
    result = completion_service.complete(
        db_session,
        test_user,
        dated_assignment.id,
        now=datetime(2024, 1, 10, 0, 1, tzinfo=timezone.utc),
    )
    assert result.on_time is False
    assert result.points_awarded == 3
    assert "after the deadline" in result.message

    db_session.refresh(test_user)
    assert test_user.points == 3


def test_complete_twice_keeps_one_record(db_session, test_user, assignment) -> None:
    first = completion_service.complete(db_session, test_user, assignment.id)
    second = completion_service.complete(db_session, test_user, assignment.id)

    assert first.status is CompletionStatus.COMPLETED
    assert second.status is CompletionStatus.ALREADY_COMPLETED
    assert second.points_awarded == 0
    assert _completion_count(db_session, assignment.id) == 1

    db_session.refresh(test_user)
    assert test_user.points == first.points_awarded


def test_racing_completion_is_reported_as_duplicate(
    db_session, test_user, assignment, monkeypatch
) -> None:
    """A duplicate that slips past the lookup is caught by the unique constraint."""
    completion_service.complete(db_session, test_user, assignment.id)
    db_session.refresh(test_user)
    points_before = test_user.points

    monkeypatch.setattr(completion_service, "_find_completion", lambda *args: None)
    result = completion_service.complete(db_session, test_user, assignment.id)

    assert result.status is CompletionStatus.ALREADY_COMPLETED
    assert _completion_count(db_session, assignment.id) == 1
    db_session.refresh(test_user)
    assert test_user.points == points_before


def test_assignment_without_deadline_is_on_time(db_session, test_user, make_resource) -> None:
    open_assignment = make_resource(test_user, ResourceType.ASSIGNMENT, file_url=None)
    result = completion_service.complete(db_session, test_user, open_assignment.id)
    assert result.on_time is True


def test_only_assignments_can_be_completed(db_session, test_user, note) -> None:
    with pytest.raises(InvalidOperationError):
        completion_service.complete(db_session, test_user, note.id)
    assert _completion_count(db_session, note.id) == 0


def test_cannot_complete_outside_class(db_session, make_user, other_class_instance, assignment) -> None:
    outsider = make_user("Outsider", class_instance_id=other_class_instance.id)
    with pytest.raises(UnauthorizedError):
        completion_service.complete(db_session, outsider, assignment.id)


def test_completed_resource_ids_scoped_to_unit(db_session, test_user, assignment, unit) -> None:
    completion_service.complete(db_session, test_user, assignment.id)
    assert completion_service.completed_resource_ids(db_session, test_user, unit.id) == {
        assignment.id
    }
    assert len(completion_service.list_completions(db_session, test_user)) == 1
