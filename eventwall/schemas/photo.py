"""Photo schemas for API request/response."""

from datetime import datetime

from pydantic import BaseModel, Field

from eventwall.models.photo import ModerationAction, PhotoStatus


class PhotoDTO(BaseModel):
    """Photo response schema."""

    id: int
    event_id: int = Field(..., alias="eventId")
    original_path: str = Field(..., alias="originalPath")
    status: PhotoStatus
    display_order: int | None = Field(None, alias="displayOrder")
    submitter_name: str | None = Field(None, alias="submitterName")
    caption: str | None = None
    created_at: datetime = Field(..., alias="createdAt")

    model_config = {"populate_by_name": True, "from_attributes": True}


class ModerationRequest(BaseModel):
    """Moderation action request."""

    photo_id: int = Field(..., alias="photoId")
    action: ModerationAction

    model_config = {"populate_by_name": True}


class PhotoOrder(BaseModel):
    """Single display order assignment."""

    photo_id: int = Field(..., alias="photoId")
    display_order: int = Field(..., alias="displayOrder", ge=0)

    model_config = {"populate_by_name": True}


class ReorderRequest(BaseModel):
    """Bulk display order assignment, usually a 0..N-1 relabeling."""

    photo_orders: list[PhotoOrder] = Field(..., alias="photoOrders")

    model_config = {"populate_by_name": True}


class SetCurrentImageRequest(BaseModel):
    """Promote one photo to the front of the rotation."""

    image_id: int = Field(..., alias="imageId")

    model_config = {"populate_by_name": True}


class SetCurrentImageResponse(BaseModel):
    """Result of a promote-to-front call."""

    success: bool
    current_image_id: int = Field(..., alias="currentImageId")

    model_config = {"populate_by_name": True}


class DisplayImageDTO(BaseModel):
    """Entry of the ranked list consumed by the display wall."""

    id: int
    original_path: str = Field(..., alias="originalPath")
    submitter_name: str = Field("Anonymous", alias="submitterName")
    caption: str | None = None
    display_order: int | None = Field(None, alias="displayOrder")
    created_at: datetime = Field(..., alias="createdAt")

    model_config = {"populate_by_name": True}
