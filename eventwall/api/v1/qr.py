"""Guest upload QR code endpoints."""

from fastapi import APIRouter, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from eventwall.core.deps import DBSession
from eventwall.schemas.qr import QRCodeResponse
from eventwall.services.event_service import EventService
from eventwall.services.qr_service import build_upload_url, render_png

router = APIRouter()


async def _upload_url(request: Request, db: AsyncSession, event_id: int | None) -> str:
    if event_id is not None:
        event_id = await EventService(db).resolve_event_id(event_id)
    return build_upload_url(str(request.base_url), event_id)


@router.get("", response_model=QRCodeResponse)
async def get_qrcode(
    request: Request,
    db: DBSession,
    event_id: int | None = Query(None, alias="eventId"),
) -> QRCodeResponse:
    """
    Upload page URL and the URL of its QR code image.

    - **eventId**: Scope the upload page to one event (unscoped when omitted)
    """
    upload_url = await _upload_url(request, db, event_id)
    image_url = request.url_for("get_qrcode_image")
    if event_id is not None:
        image_url = image_url.include_query_params(eventId=event_id)
    return QRCodeResponse(upload_url=upload_url, qr_code_url=str(image_url))


@router.get("/image", response_class=Response)
async def get_qrcode_image(
    request: Request,
    db: DBSession,
    event_id: int | None = Query(None, alias="eventId"),
) -> Response:
    """PNG QR code encoding the upload page URL."""
    upload_url = await _upload_url(request, db, event_id)
    return Response(content=render_png(upload_url), media_type="image/png")
