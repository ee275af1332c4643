"""Tests for statistics and analytics."""

from datetime import date

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from eventwall.core import clock
from eventwall.core.exceptions import InvalidRequest
from eventwall.models.event import Event
from eventwall.models.photo import Photo
from eventwall.services.analytics_service import AnalyticsService


@pytest.mark.asyncio
async def test_stats_counts_by_status(client: AsyncClient, sample_photos: list[Photo]):
    response = await client.get("/api/v1/stats")

    assert response.status_code == 200
    assert response.json() == {
        "pending": 1,
        "approved": 3,
        "rejected": 1,
        "archived": 1,
        "totalUploads": 6,
    }


@pytest.mark.asyncio
async def test_stats_by_event(
    client: AsyncClient, sample_photos: list[Photo], other_event: Event, photo_factory
):
    await photo_factory(other_event)

    response = await client.get("/api/v1/stats", params={"eventId": other_event.id})

    assert response.json()["pending"] == 1
    assert response.json()["totalUploads"] == 1


@pytest.mark.asyncio
async def test_stats_empty(client: AsyncClient):
    response = await client.get("/api/v1/stats")

    assert response.json()["totalUploads"] == 0


@pytest.mark.asyncio
async def test_record_counters(
    client: AsyncClient, auth_headers: dict, default_event: Event
):
    for _ in range(2):
        response = await client.post("/api/v1/analytics/qr-scan")
        assert response.status_code == 200
        assert response.json() == {"success": True}
    await client.post("/api/v1/analytics/view")

    response = await client.get("/api/v1/analytics", headers=auth_headers)

    assert response.status_code == 200
    rows = response.json()
    assert len(rows) == 1
    assert rows[0]["eventId"] == default_event.id
    assert rows[0]["date"] == clock.today().isoformat()
    assert rows[0]["qrScans"] == 2
    assert rows[0]["views"] == 1
    assert rows[0]["uploads"] == 0


@pytest.mark.asyncio
async def test_analytics_date_range(
    client: AsyncClient,
    auth_headers: dict,
    db_session: AsyncSession,
    default_event: Event,
    monkeypatch,
):
    service = AnalyticsService(db_session)
    for day in (date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 3)):
        monkeypatch.setattr(clock, "today", lambda day=day: day)
        await service.record(default_event.id, "views")

    response = await client.get(
        "/api/v1/analytics",
        params={"startDate": "2024-06-02", "endDate": "2024-06-03"},
        headers=auth_headers,
    )

    assert [r["date"] for r in response.json()] == ["2024-06-02", "2024-06-03"]


@pytest.mark.asyncio
async def test_analytics_invalid_range(
    client: AsyncClient, auth_headers: dict, default_event: Event
):
    response = await client.get(
        "/api/v1/analytics",
        params={"startDate": "2024-06-03", "endDate": "2024-06-01"},
        headers=auth_headers,
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_analytics_requires_auth(client: AsyncClient, default_event: Event):
    response = await client.get("/api/v1/analytics")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_increment_rejects_unknown_counter(
    db_session: AsyncSession, default_event: Event
):
    service = AnalyticsService(db_session)

    with pytest.raises(InvalidRequest):
        await service.increment(default_event.id, "likes")

    with pytest.raises(InvalidRequest):
        await service.increment(default_event.id, "views", amount=-1)


@pytest.mark.asyncio
async def test_get_daily_without_row(db_session: AsyncSession, default_event: Event):
    daily = await AnalyticsService(db_session).get_daily(default_event.id, date(2020, 1, 1))

    assert daily.date == date(2020, 1, 1)
    assert daily.uploads == daily.views == daily.qr_scans == 0


@pytest.mark.asyncio
async def test_increment_tolerates_row_created_elsewhere(
    db_session: AsyncSession, session_maker, default_event: Event
):
    """Today's row inserted by another writer is reused, not re-inserted."""
    async with session_maker() as other:
        await AnalyticsService(other).record(default_event.id, "views")

    service = AnalyticsService(db_session)
    await service.record(default_event.id, "views")

    assert (await service.get_daily(default_event.id)).views == 2


@pytest.mark.asyncio
async def test_increment_adds_to_stored_value(
    db_session: AsyncSession, session_maker, default_event: Event
):
    """Increments add in the database, so another writer's count is kept."""
    service = AnalyticsService(db_session)
    await service.record(default_event.id, "uploads")
    assert (await service.get_daily(default_event.id)).uploads == 1
    await db_session.commit()

    async with session_maker() as other:
        await AnalyticsService(other).record(default_event.id, "uploads")

    await service.record(default_event.id, "uploads")

    assert (await service.get_daily(default_event.id)).uploads == 3
