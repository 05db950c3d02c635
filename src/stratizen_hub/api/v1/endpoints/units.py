"""Unit catalog endpoints: units, their resources and rankings."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from stratizen_hub.api.v1.dependencies import AdminUserDep, CurrentUserDep, SessionDep
from stratizen_hub.core.settings import settings
from stratizen_hub.models import ResourceType
from stratizen_hub.schemas.catalog import ClassInstanceResponse, UnitCreate, UnitResponse
from stratizen_hub.schemas.ranking import UnitRankingEntry
from stratizen_hub.schemas.resource import ResourceResponse
from stratizen_hub.services import (
    catalog_service,
    completion_service,
    ranking_service,
    resource_service,
)
from stratizen_hub.services.errors import UnauthorizedError

router = APIRouter(prefix="/units", tags=["units"])


@router.get("/", response_model=list[UnitResponse])
async def list_my_units(
    current_user: CurrentUserDep,
    db: SessionDep,
    class_instance_id: int | None = Query(default=None, description="Admins only"),
) -> list[UnitResponse]:
    """List the units of the caller's class instance."""
    target = current_user.class_instance_id
    if class_instance_id is not None and class_instance_id != target:
        if not current_user.has_admin_rights:
            raise UnauthorizedError("Unit list is limited to your class")
        target = class_instance_id
    if target is None:
        return []
    return [UnitResponse.model_validate(unit) for unit in catalog_service.list_units(db, target)]


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=UnitResponse)
async def create_unit(payload: UnitCreate, admin: AdminUserDep, db: SessionDep) -> UnitResponse:
    """Add a unit to a class instance (admins only)."""
    return UnitResponse.model_validate(catalog_service.create_unit(db, payload))


@router.get("/class-instances/{class_instance_id}", response_model=ClassInstanceResponse)
async def get_class_instance(
    class_instance_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ClassInstanceResponse:
    """Describe a class instance by the names of its hierarchy levels."""
    return catalog_service.describe_class_instance(db, class_instance_id)


@router.get("/{unit_id}", response_model=UnitResponse)
async def get_unit(unit_id: int, current_user: CurrentUserDep, db: SessionDep) -> UnitResponse:
    """Return a unit visible to the caller."""
    return UnitResponse.model_validate(catalog_service.get_visible_unit(db, current_user, unit_id))


@router.get("/{unit_id}/resources", response_model=list[ResourceResponse])
async def list_unit_resources(
    unit_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    type: ResourceType | None = Query(default=None),
) -> list[ResourceResponse]:
    """List a unit's resources, newest first, optionally filtered by type."""
    catalog_service.get_visible_unit(db, current_user, unit_id)
    resources = resource_service.list_resources(db, unit_id, type)
    return [ResourceResponse.model_validate(resource) for resource in resources]


@router.get("/{unit_id}/my-completions", response_model=list[int])
async def list_my_unit_completions(
    unit_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> list[int]:
    """Return ids of the unit's assignments the caller has completed."""
    catalog_service.get_visible_unit(db, current_user, unit_id)
    return sorted(completion_service.completed_resource_ids(db, current_user, unit_id))


@router.get("/{unit_id}/rankings", response_model=list[UnitRankingEntry])
async def get_unit_rankings(
    unit_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> list[UnitRankingEntry]:
    """Students ordered by average time to complete the unit's assignments."""
    catalog_service.get_visible_unit(db, current_user, unit_id)
    rankings = ranking_service.unit_rankings(db, unit_id, settings.unit_ranking_limit)
    return [
        UnitRankingEntry(
            id=entry.user.id,
            name=entry.user.name,
            admission_number=entry.user.admission_number,
            profile_picture_url=entry.user.profile_picture_url,
            avg_time_ms=entry.avg_time_ms,
            avg_time=entry.avg_time,
            completion=entry.completion_percent,
            points=entry.user.points,
        )
        for entry in rankings
    ]
