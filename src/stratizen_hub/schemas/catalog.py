"""Catalog Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UnitCreate(BaseModel):
    """Schema for adding a unit to a class instance."""

    name: str = Field(..., min_length=1, max_length=200)
    code: str = Field(..., min_length=1, max_length=32)
    lecturer: str = Field("", max_length=200)
    class_instance_id: int


class UnitResponse(BaseModel):
    """Unit information returned by the API."""

    id: int
    name: str
    code: str
    lecturer: str
    class_instance_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ClassInstanceResponse(BaseModel):
    """Class instance with the names of its hierarchy levels."""

    id: int
    program: str
    course: str
    year: str
    semester: str
    group: str
    admin_id: str | None
