"""Event schemas for API request/response."""

from datetime import datetime

from pydantic import BaseModel, Field

SLUG_PATTERN = r"^[a-z0-9-]+$"


class EventCreate(BaseModel):
    """Event creation schema. The slug is derived from the name when omitted."""

    name: str = Field(..., min_length=1)
    slug: str | None = Field(None, min_length=1, pattern=SLUG_PATTERN)
    description: str | None = None
    start_date: datetime | None = Field(None, alias="startDate")
    end_date: datetime | None = Field(None, alias="endDate")
    is_active: bool = Field(True, alias="isActive")

    model_config = {"populate_by_name": True}


class EventUpdate(BaseModel):
    """Partial event update."""

    name: str | None = Field(None, min_length=1)
    slug: str | None = Field(None, min_length=1, pattern=SLUG_PATTERN)
    description: str | None = None
    start_date: datetime | None = Field(None, alias="startDate")
    end_date: datetime | None = Field(None, alias="endDate")
    is_active: bool | None = Field(None, alias="isActive")

    model_config = {"populate_by_name": True}


class EventDTO(BaseModel):
    """Event response schema."""

    id: int
    name: str
    slug: str
    description: str | None = None
    start_date: datetime | None = Field(None, alias="startDate")
    end_date: datetime | None = Field(None, alias="endDate")
    is_active: bool = Field(True, alias="isActive")
    created_at: datetime | None = Field(None, alias="createdAt")

    model_config = {"populate_by_name": True, "from_attributes": True}
