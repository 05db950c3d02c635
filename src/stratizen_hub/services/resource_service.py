"""Resource lifecycle: create, read, edit and cascading delete."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from sqlalchemy import delete
from sqlalchemy.orm import Session

from stratizen_hub.models import Comment, Completion, Resource, ResourceType, ResourceVote, User
from stratizen_hub.schemas.resource import ResourceCreate, ResourceUpdate
from stratizen_hub.services import catalog_service
from stratizen_hub.services.errors import InvalidOperationError, NotFoundError, UnauthorizedError
from stratizen_hub.services.points import award_points, current_policy

logger = logging.getLogger(__name__)

__all__ = [
    "CreatedResource",
    "can_modify",
    "create_resource",
    "delete_resource",
    "get_resource",
    "get_visible_resource",
    "list_resources",
    "update_resource",
]


@dataclass(frozen=True)
class CreatedResource:
    """A new resource and the upload bonus applied to its owner."""

    resource: Resource
    points_awarded: int


def can_modify(requester: User, resource: Resource) -> bool:
    """Owners, unit admins and super admins may edit or delete a resource."""
    return requester.id == resource.user_id or requester.has_admin_rights


def _ensure_can_modify(requester: User, resource: Resource) -> None:
    if not can_modify(requester, resource):
        logger.info(
            "User %s denied modification of resource %s",
            requester.id,
            resource.id,
        )
        raise UnauthorizedError("Only the owner or an admin can modify this resource")


def get_resource(db: Session, resource_id: int) -> Resource:
    """Return a resource or raise NotFoundError."""
    resource = db.get(Resource, resource_id)
    if resource is None:
        raise NotFoundError("Resource not found")
    return resource


def get_visible_resource(db: Session, user: User, resource_id: int) -> Resource:
    """Return a resource whose unit the user may see."""
    resource = get_resource(db, resource_id)
    catalog_service.get_visible_unit(db, user, resource.unit_id)
    return resource


def list_resources(
    db: Session,
    unit_id: int,
    resource_type: ResourceType | None = None,
) -> Sequence[Resource]:
    """Return a unit's resources, newest first, optionally of one type."""
    query = db.query(Resource).filter(Resource.unit_id == unit_id)
    if resource_type is not None:
        query = query.filter(Resource.type == resource_type)
    return query.order_by(Resource.created_at.desc(), Resource.id.desc()).all()


def create_resource(db: Session, owner: User, data: ResourceCreate) -> CreatedResource:
    """Share a resource in a unit and award the upload bonus for its type.

    Raises:
        NotFoundError: If the unit does not exist.
        UnauthorizedError: If the unit is outside the owner's class.
        InvalidOperationError: If a note or past paper has no file, or a
            non-assignment carries a deadline.
    """
    catalog_service.get_visible_unit(db, owner, data.unit_id)
    if data.type.requires_file and not data.file_url:
        raise InvalidOperationError(f"A {data.type.value} must include a file")
    if data.deadline is not None and data.type is not ResourceType.ASSIGNMENT:
        raise InvalidOperationError("Only assignments can have a deadline")

    resource = Resource(
        title=data.title,
        description=data.description,
        type=data.type,
        unit_id=data.unit_id,
        user_id=owner.id,
        file_url=data.file_url,
        deadline=data.deadline,
        likes=0,
        dislikes=0,
    )
    db.add(resource)
    db.flush()

    bonus = current_policy().upload_delta(data.type.value)
    award_points(db, owner.id, bonus, f"upload {data.type.value}")
    db.commit()
    db.refresh(resource)
    logger.info("User %s shared %s %s", owner.id, data.type.value, resource.id)
    return CreatedResource(resource=resource, points_awarded=bonus)


def update_resource(
    db: Session,
    requester: User,
    resource_id: int,
    data: ResourceUpdate,
) -> Resource:
    """Apply a partial edit after the owner/admin check."""
    resource = get_resource(db, resource_id)
    _ensure_can_modify(requester, resource)

    changes = data.model_dump(exclude_unset=True)
    if changes.get("deadline") is not None and resource.type is not ResourceType.ASSIGNMENT:
        raise InvalidOperationError("Only assignments can have a deadline")
    if "file_url" in changes and not changes["file_url"] and resource.type.requires_file:
        raise InvalidOperationError(f"A {resource.type.value} must include a file")
    if "title" in changes and changes["title"] is None:
        raise InvalidOperationError("Title cannot be empty")

    for key, value in changes.items():
        if key == "description" and value is None:
            value = ""
        setattr(resource, key, value)

    db.commit()
    db.refresh(resource)
    return resource


def delete_resource(db: Session, requester: User, resource_id: int) -> None:
    """Delete a resource with its completions, comments and votes.

    Everything goes in one transaction; dependants are removed first so no
    foreign reference is left dangling.
    """
    resource = get_resource(db, resource_id)
    _ensure_can_modify(requester, resource)

    db.execute(delete(Completion).where(Completion.resource_id == resource_id))
    db.execute(delete(Comment).where(Comment.resource_id == resource_id))
    db.execute(delete(ResourceVote).where(ResourceVote.resource_id == resource_id))
    db.delete(resource)
    db.commit()
    logger.info("User %s deleted resource %s", requester.id, resource_id)
