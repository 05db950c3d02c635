"""Resource Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from stratizen_hub.models.resource import ResourceType


class ResourceCreate(BaseModel):
    """Schema for sharing a new resource."""

    title: str = Field(..., min_length=1, max_length=300)
    description: str = Field("", max_length=5000)
    type: ResourceType
    unit_id: int
    file_url: str | None = Field(None, description="Public URL returned by the upload endpoint")
    deadline: datetime | None = Field(None, description="Assignments only")


class ResourceUpdate(BaseModel):
    """Partial update of an existing resource; the type is immutable."""

    title: str | None = Field(None, min_length=1, max_length=300)
    description: str | None = Field(None, max_length=5000)
    file_url: str | None = None
    deadline: datetime | None = None


class ResourceOwner(BaseModel):
    """Subset of the owner shown next to a resource."""

    id: str
    name: str
    admission_number: str
    profile_picture_url: str | None

    model_config = ConfigDict(from_attributes=True)


class ResourceResponse(BaseModel):
    """Schema for resource information returned by the API."""

    id: int
    title: str
    description: str
    type: ResourceType
    file_url: str | None
    deadline: datetime | None
    unit_id: int
    user_id: str
    likes: int
    dislikes: int
    created_at: datetime
    owner: ResourceOwner | None = None

    model_config = ConfigDict(from_attributes=True)


class ResourceCreatedResponse(BaseModel):
    """A newly shared resource and the upload bonus it earned."""

    resource: ResourceResponse
    points_awarded: int


class UploadResponse(BaseModel):
    """Location of a stored file."""

    path: str
    url: str
