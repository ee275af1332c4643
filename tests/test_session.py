"""Tests for the slideshow session and display client."""

import asyncio
from datetime import timedelta

import httpx
import pytest

from eventwall.display.client import DisplayClient, DisplayClientError
from eventwall.display.scheduler import SlideshowScheduler
from eventwall.display.session import ADVANCE_JOB_ID, POLL_JOB_ID, SlideshowSession

BASE_URL = "http://wall.test/api/v1"


class FakeDisplayApi:
    """In-process stand-in for the display endpoints."""

    def __init__(self, image_ids=(1, 2, 3), auto_rotate=True, slide_interval=8):
        self.image_ids = list(image_ids)
        self.auto_rotate = auto_rotate
        self.slide_interval = slide_interval
        self.fail_with: int | None = None
        self.requests: list[httpx.Request] = []

    def image_payload(self) -> list[dict]:
        return [
            {
                "id": i,
                "originalPath": f"/uploads/{i}.jpg",
                "submitterName": f"Guest {i}",
                "caption": None,
                "displayOrder": n,
                "createdAt": "2024-06-01T12:00:00",
            }
            for n, i in enumerate(self.image_ids)
        ]

    def settings_payload(self) -> dict:
        return {
            "eventId": 1,
            "autoRotate": self.auto_rotate,
            "slideInterval": self.slide_interval,
            "displayFormat": "16:9-default",
            "showInfo": True,
            "showCaptions": True,
            "transitionEffect": "slide",
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"Code": self.fail_with, "Message": "down"})
        if request.url.path == "/api/v1/display/images":
            return httpx.Response(200, json=self.image_payload())
        if request.url.path == "/api/v1/display/settings":
            return httpx.Response(200, json=self.settings_payload())
        return httpx.Response(404, json={"Code": 404, "Message": "Not found"})


@pytest.fixture
def fake_api() -> FakeDisplayApi:
    return FakeDisplayApi()


@pytest.fixture
def display_client(fake_api: FakeDisplayApi) -> DisplayClient:
    return DisplayClient(
        base_url=BASE_URL,
        event_id=1,
        transport=httpx.MockTransport(fake_api.handler),
    )


@pytest.mark.asyncio
async def test_client_fetches_feed(display_client: DisplayClient, fake_api: FakeDisplayApi):
    await display_client.connect()
    try:
        images, settings = await display_client.fetch_feed()
    finally:
        await display_client.disconnect()

    assert [i.id for i in images] == [1, 2, 3]
    assert images[0].submitter_name == "Guest 1"
    assert settings.slide_interval == 8
    assert all(r.url.params["eventId"] == "1" for r in fake_api.requests)


@pytest.mark.asyncio
async def test_client_wraps_http_errors(display_client: DisplayClient, fake_api: FakeDisplayApi):
    fake_api.fail_with = 503
    await display_client.connect()
    try:
        with pytest.raises(DisplayClientError):
            await display_client.fetch_images()
    finally:
        await display_client.disconnect()


@pytest.mark.asyncio
async def test_client_requires_connect(display_client: DisplayClient):
    with pytest.raises(DisplayClientError):
        await display_client.fetch_settings()


@pytest.mark.asyncio
async def test_client_wraps_transport_errors():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = DisplayClient(base_url=BASE_URL, transport=httpx.MockTransport(refuse))
    await client.connect()
    try:
        with pytest.raises(DisplayClientError):
            await client.fetch_images()
    finally:
        await client.disconnect()


@pytest.mark.asyncio
async def test_poll_loads_images_and_notifies(display_client: DisplayClient):
    changes: list[int | None] = []
    session = SlideshowSession(
        display_client,
        on_change=lambda state: changes.append(state.current.id if state.current else None),
    )
    await display_client.connect()

    await session.poll()

    assert [i.id for i in session.state.images] == [1, 2, 3]
    assert session.state.error is None
    assert changes == [1]
    await session.close()


@pytest.mark.asyncio
async def test_poll_failure_keeps_images(
    display_client: DisplayClient, fake_api: FakeDisplayApi
):
    session = SlideshowSession(display_client)
    await display_client.connect()
    await session.poll()
    session.next()

    fake_api.fail_with = 500
    await session.poll()

    assert session.state.error is not None
    assert [i.id for i in session.state.images] == [1, 2, 3]
    assert session.state.current_index == 1

    fake_api.fail_with = None
    await session.poll()
    assert session.state.error is None
    await session.close()


@pytest.mark.asyncio
async def test_poll_reflects_archived_photo_while_paused(
    display_client: DisplayClient, fake_api: FakeDisplayApi
):
    session = SlideshowSession(display_client)
    await display_client.connect()
    await session.poll()
    session.pause()

    fake_api.image_ids = [1, 3]
    await session.poll()

    assert [i.id for i in session.state.images] == [1, 3]
    assert session.state.paused
    await session.close()


@pytest.mark.asyncio
async def test_auto_rotate_applies_only_on_change(
    display_client: DisplayClient, fake_api: FakeDisplayApi
):
    fake_api.auto_rotate = False
    session = SlideshowSession(display_client)
    await display_client.connect()

    await session.poll()
    assert session.state.paused

    # A local resume survives polls that repeat the same server value
    session.resume()
    await session.poll()
    assert not session.state.paused

    fake_api.auto_rotate = True
    await session.poll()
    assert not session.state.paused

    fake_api.auto_rotate = False
    await session.poll()
    assert session.state.paused
    await session.close()


@pytest.mark.asyncio
async def test_advance_and_manual_navigation(display_client: DisplayClient):
    session = SlideshowSession(display_client)
    await display_client.connect()
    await session.poll()

    await session.advance()
    assert session.state.current.id == 2

    session.previous()
    session.previous()
    assert session.state.current.id == 3

    session.next()
    assert session.state.current.id == 1

    session.toggle_pause()
    await session.advance()
    assert session.state.current.id == 1
    await session.close()


async def _wait_for(predicate, timeout: float = 2.0) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.01)


@pytest.mark.asyncio
async def test_start_polls_immediately_and_close_cancels(
    display_client: DisplayClient, fake_api: FakeDisplayApi
):
    session = SlideshowSession(display_client, state=SlideshowScheduler(interval_seconds=30))

    await session.start()
    try:
        assert session.running
        scheduler = session._scheduler
        assert {job.id for job in scheduler.get_jobs()} == {POLL_JOB_ID, ADVANCE_JOB_ID}

        await _wait_for(lambda: not session.state.is_empty)
        assert scheduler.get_job(ADVANCE_JOB_ID).next_run_time is not None
    finally:
        await session.close()

    assert not session.running
    assert not display_client.connected


@pytest.mark.asyncio
async def test_advance_job_paused_while_empty(
    display_client: DisplayClient, fake_api: FakeDisplayApi
):
    fake_api.image_ids = []
    session = SlideshowSession(display_client)

    async with session:
        await _wait_for(lambda: len(fake_api.requests) >= 2)
        await session.poll()
        assert session.state.current is None
        assert session._scheduler.get_job(ADVANCE_JOB_ID).next_run_time is None

        fake_api.image_ids = [7]
        await session.poll()
        assert session._scheduler.get_job(ADVANCE_JOB_ID).next_run_time is not None

        session.pause()
        assert session._scheduler.get_job(ADVANCE_JOB_ID).next_run_time is None

    assert not session.running


@pytest.mark.asyncio
async def test_interval_change_reschedules_jobs(
    display_client: DisplayClient, fake_api: FakeDisplayApi
):
    session = SlideshowSession(display_client)

    async with session:
        fake_api.slide_interval = 3
        await session.poll()

        assert session.state.interval_seconds == 3
        for job_id in (POLL_JOB_ID, ADVANCE_JOB_ID):
            job = session._scheduler.get_job(job_id)
            assert job.trigger.interval == timedelta(seconds=3)


@pytest.mark.asyncio
async def test_fetch_feed_waits_for_sibling_request():
    finished: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/images"):
            return httpx.Response(500, json={"Code": 500, "Message": "down"})
        await asyncio.sleep(0.05)
        finished.append(request.url.path)
        return httpx.Response(200, json=FakeDisplayApi().settings_payload())

    client = DisplayClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    await client.connect()
    try:
        with pytest.raises(DisplayClientError):
            await client.fetch_feed()
        # The settings request completed before the failure surfaced
        assert finished == ["/api/v1/display/settings"]
    finally:
        await client.disconnect()


@pytest.mark.asyncio
async def test_manual_navigation_keeps_timer_phase(display_client: DisplayClient):
    session = SlideshowSession(display_client)

    async with session:
        await _wait_for(lambda: not session.state.is_empty)
        due = session._scheduler.get_job(ADVANCE_JOB_ID).next_run_time
        assert due is not None

        session.next()
        session.next()
        session.previous()

        assert session.state.current.id == 2
        assert session._scheduler.get_job(ADVANCE_JOB_ID).next_run_time == due


class SlowDisplayApi(FakeDisplayApi):
    """Answers the first poll at once and holds every later request."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.release = asyncio.Event()
        self.in_flight = 0

    async def slow_handler(self, request: httpx.Request) -> httpx.Response:
        if len(self.requests) >= 2:
            self.in_flight += 1
            try:
                await self.release.wait()
            finally:
                self.in_flight -= 1
        return self.handler(request)


@pytest.mark.asyncio
async def test_slow_poll_does_not_stall_advance():
    api = SlowDisplayApi(slide_interval=1)
    client = DisplayClient(
        base_url=BASE_URL,
        event_id=1,
        transport=httpx.MockTransport(api.slow_handler),
    )
    shown: list[int] = []
    session = SlideshowSession(
        client,
        state=SlideshowScheduler(interval_seconds=1),
        on_change=lambda state: shown.append(state.current.id),
    )

    async with session:
        await _wait_for(lambda: not session.state.is_empty)
        await _wait_for(lambda: api.in_flight > 0, timeout=3.0)

        before = len(shown)
        await _wait_for(lambda: len(shown) >= before + 2, timeout=4.0)
        assert api.in_flight > 0

        api.release.set()
        await _wait_for(lambda: api.in_flight == 0)
