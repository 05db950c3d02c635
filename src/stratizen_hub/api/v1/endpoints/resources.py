"""Resource endpoints: sharing, editing, deleting, completing and comments."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile, status

from stratizen_hub.api.v1.dependencies import CurrentUserDep, SessionDep
from stratizen_hub.schemas.engagement import (
    CommentCreate,
    CommentResponse,
    CompletionOutcome,
    CompletionResponse,
)
from stratizen_hub.schemas.resource import (
    ResourceCreate,
    ResourceCreatedResponse,
    ResourceResponse,
    ResourceUpdate,
    UploadResponse,
)
from stratizen_hub.services import comment_service, completion_service, resource_service
from stratizen_hub.services.errors import InvalidOperationError
from stratizen_hub.services.storage import ObjectStorage, get_storage

router = APIRouter(prefix="/resources", tags=["resources"])


def get_storage_dep() -> ObjectStorage:
    """Return the shared object storage."""
    return get_storage()


StorageDep = Annotated[ObjectStorage, Depends(get_storage_dep)]

UPLOAD_CHUNK_BYTES = 64 * 1024


async def read_capped(file: UploadFile, max_bytes: int) -> bytes:
    """Read an upload in chunks, rejecting it once it passes ``max_bytes``."""
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(UPLOAD_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise InvalidOperationError(f"Uploaded file exceeds the {max_bytes} byte limit")
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/upload", status_code=status.HTTP_201_CREATED, response_model=UploadResponse)
async def upload_file(
    current_user: CurrentUserDep,
    storage: StorageDep,
    file: UploadFile = File(...),
) -> UploadResponse:
    """Store a file and return the public URL to attach to a resource."""
    data = await read_capped(file, storage.max_bytes)
    stored = storage.upload(file.filename or "file", data)
    return UploadResponse(path=stored.path, url=stored.url)


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=ResourceCreatedResponse)
async def create_resource(
    payload: ResourceCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ResourceCreatedResponse:
    """Share a note, assignment or past paper in a unit."""
    created = resource_service.create_resource(db, current_user, payload)
    return ResourceCreatedResponse(
        resource=ResourceResponse.model_validate(created.resource),
        points_awarded=created.points_awarded,
    )


@router.get("/{resource_id}", response_model=ResourceResponse)
async def get_resource(
    resource_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ResourceResponse:
    """Return a resource visible to the caller."""
    resource = resource_service.get_visible_resource(db, current_user, resource_id)
    return ResourceResponse.model_validate(resource)


@router.patch("/{resource_id}", response_model=ResourceResponse)
async def update_resource(
    resource_id: int,
    payload: ResourceUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ResourceResponse:
    """Edit a resource (owner or admin only)."""
    resource = resource_service.update_resource(db, current_user, resource_id, payload)
    return ResourceResponse.model_validate(resource)


@router.delete("/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resource(
    resource_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> None:
    """Delete a resource with its completions and comments (owner or admin only)."""
    resource_service.delete_resource(db, current_user, resource_id)


@router.post("/{resource_id}/complete", response_model=CompletionOutcome)
async def complete_resource(
    resource_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CompletionOutcome:
    """Mark an assignment complete; repeating the call is a no-op."""
    result = completion_service.complete(db, current_user, resource_id)
    return CompletionOutcome(
        status=result.status.value,
        on_time=result.on_time,
        points_awarded=result.points_awarded,
        completion=(
            CompletionResponse.model_validate(result.completion)
            if result.completion is not None
            else None
        ),
        message=result.message,
    )


@router.get("/{resource_id}/comments", response_model=list[CommentResponse])
async def list_comments(
    resource_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> list[CommentResponse]:
    """List a resource's comments, newest first."""
    resource_service.get_visible_resource(db, current_user, resource_id)
    comments = comment_service.list_comments(db, resource_id)
    return [CommentResponse.model_validate(comment) for comment in comments]


@router.post(
    "/{resource_id}/comments",
    status_code=status.HTTP_201_CREATED,
    response_model=CommentResponse,
)
async def add_comment(
    resource_id: int,
    payload: CommentCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentResponse:
    """Append a comment to a resource."""
    comment = comment_service.add_comment(db, current_user, resource_id, payload.content)
    return CommentResponse.model_validate(comment)
