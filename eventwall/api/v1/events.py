"""Event API endpoints."""

from fastapi import APIRouter, Response, status

from eventwall.core.deps import CurrentUserRequired, DBSession
from eventwall.schemas.event import EventCreate, EventDTO, EventUpdate
from eventwall.services.event_service import EventService

router = APIRouter()


@router.get("", response_model=list[EventDTO])
async def get_events(db: DBSession) -> list[EventDTO]:
    """Get all events."""
    return await EventService(db).list_events()


@router.get("/slug/{slug}", response_model=EventDTO)
async def get_event_by_slug(slug: str, db: DBSession) -> EventDTO:
    """Get event by URL slug."""
    return await EventService(db).get_event_by_slug(slug)


@router.get("/{event_id}", response_model=EventDTO)
async def get_event(event_id: int, db: DBSession) -> EventDTO:
    """Get event by ID."""
    return await EventService(db).get_event(event_id)


@router.post("", response_model=EventDTO, status_code=status.HTTP_201_CREATED)
async def create_event(
    data: EventCreate,
    db: DBSession,
    user: CurrentUserRequired,
) -> EventDTO:
    """
    Create event.

    - **name**: Event name
    - **slug**: URL slug (generated from the name when omitted)
    """
    return await EventService(db).create_event(data)


@router.put("/{event_id}", response_model=EventDTO)
async def update_event(
    event_id: int,
    data: EventUpdate,
    db: DBSession,
    user: CurrentUserRequired,
) -> EventDTO:
    """Update event fields present in the payload."""
    return await EventService(db).update_event(event_id, data)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: int,
    db: DBSession,
    user: CurrentUserRequired,
) -> Response:
    """Delete event and everything attached to it."""
    await EventService(db).delete_event(event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
