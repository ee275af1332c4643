"""Statistics and analytics API endpoints."""

from datetime import date

from fastapi import APIRouter, Query

from eventwall.core.deps import CurrentUserRequired, DBSession
from eventwall.core.exceptions import InvalidRequest
from eventwall.schemas.statistics import CounterResponse, DailyAnalyticsDTO, StatsResponse
from eventwall.services.analytics_service import AnalyticsService
from eventwall.services.event_service import EventService

router = APIRouter()
analytics_router = APIRouter()


@router.get("", response_model=StatsResponse)
async def get_stats(
    db: DBSession,
    event_id: int | None = Query(None, alias="eventId"),
) -> StatsResponse:
    """
    Photo counts by status.

    - **eventId**: Restrict to one event (all events when omitted)
    """
    return await AnalyticsService(db).get_status_counts(event_id)


@analytics_router.get("", response_model=list[DailyAnalyticsDTO])
async def get_analytics(
    db: DBSession,
    user: CurrentUserRequired,
    event_id: int | None = Query(None, alias="eventId"),
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
) -> list[DailyAnalyticsDTO]:
    """
    Daily counters for an event.

    - **startDate**: First day (inclusive, YYYY-MM-DD)
    - **endDate**: Last day (inclusive, YYYY-MM-DD)
    """
    if start_date and end_date and start_date > end_date:
        raise InvalidRequest("startDate must not be after endDate")

    resolved_event_id = await EventService(db).resolve_event_id(event_id)
    return await AnalyticsService(db).get_range(resolved_event_id, start_date, end_date)


@analytics_router.post("/qr-scan", response_model=CounterResponse)
async def record_qr_scan(
    db: DBSession,
    event_id: int | None = Query(None, alias="eventId"),
) -> CounterResponse:
    """Count a scan of the event's upload QR code."""
    resolved_event_id = await EventService(db).resolve_event_id(event_id)
    await AnalyticsService(db).record(resolved_event_id, "qr_scans")
    return CounterResponse()


@analytics_router.post("/view", response_model=CounterResponse)
async def record_view(
    db: DBSession,
    event_id: int | None = Query(None, alias="eventId"),
) -> CounterResponse:
    """Count a view of the event's display wall or gallery."""
    resolved_event_id = await EventService(db).resolve_event_id(event_id)
    await AnalyticsService(db).record(resolved_event_id, "views")
    return CounterResponse()
