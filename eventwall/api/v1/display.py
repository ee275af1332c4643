"""Display wall API endpoints."""

from fastapi import APIRouter, File, Query, UploadFile

from eventwall.core.deps import CurrentUserRequired, DBSession
from eventwall.schemas.display import DisplaySettingsDTO, DisplaySettingsUpdate
from eventwall.schemas.photo import (
    DisplayImageDTO,
    SetCurrentImageRequest,
    SetCurrentImageResponse,
)
from eventwall.services.display_service import DisplayService
from eventwall.services.event_service import EventService
from eventwall.services.photo_service import ImageUpload
from eventwall.services.ranking import RankingService

router = APIRouter()
settings_router = APIRouter()


@router.get("/images", response_model=list[DisplayImageDTO])
async def get_display_images(
    db: DBSession,
    event_id: int | None = Query(None, alias="eventId"),
) -> list[DisplayImageDTO]:
    """
    Approved photos in rotation order.

    Sorted by displayOrder ascending (unordered photos last), newest first
    among equal orders.
    """
    resolved_event_id = await EventService(db).resolve_event_id(event_id)
    return await RankingService(db).get_display_images(resolved_event_id)


@router.post("/set-current-image", response_model=SetCurrentImageResponse)
async def set_current_image(
    data: SetCurrentImageRequest,
    db: DBSession,
    user: CurrentUserRequired,
) -> SetCurrentImageResponse:
    """
    Move an approved photo to the front of the rotation.

    - **imageId**: Photo ID (must be approved)
    """
    photo = await RankingService(db).promote_to_front(data.image_id)
    return SetCurrentImageResponse(success=True, current_image_id=photo.id)


@router.get("/settings", response_model=DisplaySettingsDTO)
@settings_router.get("", response_model=DisplaySettingsDTO)
async def get_display_settings(
    db: DBSession,
    event_id: int | None = Query(None, alias="eventId"),
) -> DisplaySettingsDTO:
    """Get display settings, creating defaults on first access."""
    resolved_event_id = await EventService(db).resolve_event_id(event_id)
    return await DisplayService(db).get_settings(resolved_event_id)


@router.patch("/settings", response_model=DisplaySettingsDTO)
@settings_router.patch("", response_model=DisplaySettingsDTO)
async def update_display_settings(
    data: DisplaySettingsUpdate,
    db: DBSession,
    user: CurrentUserRequired,
    event_id: int | None = Query(None, alias="eventId"),
) -> DisplaySettingsDTO:
    """
    Partially update display settings.

    - **autoRotate**: Advance slides automatically
    - **slideInterval**: Seconds per slide (1-60)
    """
    resolved_event_id = await EventService(db).resolve_event_id(event_id)
    return await DisplayService(db).update_settings(resolved_event_id, data)


@router.post("/settings/background", response_model=DisplaySettingsDTO)
@settings_router.post("/background", response_model=DisplaySettingsDTO)
async def upload_display_background(
    db: DBSession,
    user: CurrentUserRequired,
    background: UploadFile = File(...),
    event_id: int | None = Query(None, alias="eventId"),
) -> DisplaySettingsDTO:
    """
    Upload the display wall background image.

    - **background**: Image file; its URL becomes backgroundPath
    """
    resolved_event_id = await EventService(db).resolve_event_id(event_id)
    upload = ImageUpload(await background.read(), background.filename, background.content_type)
    return await DisplayService(db).upload_background(resolved_event_id, upload)
