"""Photo API endpoints: ingest, listing, moderation and ordering."""

from fastapi import APIRouter, File, Form, Query, UploadFile, status

from eventwall.core.deps import CurrentUserRequired, DBSession
from eventwall.models.photo import PhotoStatus
from eventwall.schemas.photo import ModerationRequest, PhotoDTO, PhotoOrder, ReorderRequest
from eventwall.services.event_service import EventService
from eventwall.services.moderation_service import ModerationService
from eventwall.services.photo_service import ImageUpload, PhotoService
from eventwall.services.ranking import RankingService

router = APIRouter()


@router.post("", response_model=list[PhotoDTO], status_code=status.HTTP_201_CREATED)
async def upload_photos(
    db: DBSession,
    photos: list[UploadFile] = File(...),
    event_id: int | None = Form(None, alias="eventId"),
    submitter_name: str | None = Form(None, alias="submitterName"),
    caption: str | None = Form(None),
) -> list[PhotoDTO]:
    """
    Submit up to five photos at once. New photos start as pending.

    - **photos**: Image files (repeat the field per file)
    - **eventId**: Owning event (default event when omitted)
    - **submitterName**: Display name of the attendee, shared by the batch
    - **caption**: Optional caption (max 200 characters), shared by the batch

    The batch is stored all-or-nothing.
    """
    resolved_event_id = await EventService(db).resolve_event_id(event_id)
    uploads = [
        ImageUpload(await f.read(), f.filename, f.content_type) for f in photos
    ]

    created = await PhotoService(db).ingest_many(
        resolved_event_id,
        uploads,
        submitter_name=submitter_name,
        caption=caption,
    )
    return [PhotoDTO.model_validate(p) for p in created]


@router.get("", response_model=list[PhotoDTO])
async def get_photos(
    db: DBSession,
    photo_status: PhotoStatus | None = Query(None, alias="status"),
    event_id: int | None = Query(None, alias="eventId"),
) -> list[PhotoDTO]:
    """
    List photos.

    - **status**: pending, approved, rejected or archived
    - **eventId**: Restrict to one event (all events when omitted)
    """
    photos = await PhotoService(db).list_photos(status=photo_status, event_id=event_id)
    return [PhotoDTO.model_validate(p) for p in photos]


@router.get("/recent", response_model=list[PhotoDTO])
async def get_recent_photos(
    db: DBSession,
    limit: int = Query(6, ge=1, le=100),
    event_id: int | None = Query(None, alias="eventId"),
) -> list[PhotoDTO]:
    """Most recent submissions, newest first."""
    photos = await PhotoService(db).get_recent(limit, event_id=event_id)
    return [PhotoDTO.model_validate(p) for p in photos]


@router.get("/{photo_id}", response_model=PhotoDTO)
async def get_photo(
    photo_id: int,
    db: DBSession,
) -> PhotoDTO:
    """Get one photo."""
    return await PhotoService(db).get_photo(photo_id)


@router.post("/moderate", response_model=PhotoDTO)
async def moderate_photo(
    data: ModerationRequest,
    db: DBSession,
    user: CurrentUserRequired,
) -> PhotoDTO:
    """
    Apply a moderation action.

    - **photoId**: Photo ID
    - **action**: approve, reject or archive
    """
    photo = await ModerationService(db).moderate(data.photo_id, data.action)
    return PhotoDTO.model_validate(photo)


@router.post("/reorder", response_model=list[PhotoDTO])
async def reorder_photos(
    data: ReorderRequest,
    db: DBSession,
    user: CurrentUserRequired,
) -> list[PhotoDTO]:
    """
    Bulk assign display orders.

    Unknown photo IDs are skipped; only updated photos are returned.
    """
    photos = await RankingService(db).reorder(data.photo_orders)
    return [PhotoDTO.model_validate(p) for p in photos]


@router.post("/display-order", response_model=PhotoDTO)
async def set_photo_display_order(
    data: PhotoOrder,
    db: DBSession,
    user: CurrentUserRequired,
) -> PhotoDTO:
    """Assign one photo's display order."""
    photo = await RankingService(db).set_display_order(data.photo_id, data.display_order)
    return PhotoDTO.model_validate(photo)
