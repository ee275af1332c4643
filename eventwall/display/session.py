"""Slideshow session: timers and polling around SlideshowScheduler."""

from collections.abc import Callable
from datetime import datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from loguru import logger

from eventwall.core.config import get_settings
from eventwall.display.client import DisplayClient, DisplayClientError
from eventwall.display.scheduler import SlideshowScheduler
from eventwall.schemas.display import DisplaySettingsDTO

settings = get_settings()

POLL_JOB_ID = "slideshow_poll"
ADVANCE_JOB_ID = "slideshow_advance"

ChangeCallback = Callable[[SlideshowScheduler], None]


class SlideshowSession:
    """
    Drives a display wall.

    Owns one AsyncIOScheduler with two interval jobs: ``poll`` refreshes
    images and settings from the API, ``advance`` moves the rotation
    forward. Both run every ``interval_seconds``. The advance job is
    paused while the slideshow is paused or empty. ``close()`` cancels
    both jobs before the HTTP client is released.
    """

    def __init__(
        self,
        client: DisplayClient,
        state: SlideshowScheduler | None = None,
        on_change: ChangeCallback | None = None,
        poll_max_instances: int | None = None,
    ):
        self.client = client
        self.state = state or SlideshowScheduler(
            interval_seconds=settings.default_slide_interval
        )
        self.on_change = on_change
        self.poll_max_instances = poll_max_instances or settings.display_poll_max_instances
        self._scheduler: AsyncIOScheduler | None = None
        self._server_auto_rotate: bool | None = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    async def start(self) -> None:
        """Connect the client and start both jobs; the first poll runs immediately."""
        if self.running:
            return

        await self.client.connect()

        self._scheduler = AsyncIOScheduler()
        self._scheduler.add_job(
            self.poll,
            "interval",
            seconds=self.state.interval_seconds,
            id=POLL_JOB_ID,
            next_run_time=datetime.now(),
            max_instances=self.poll_max_instances,
        )
        self._scheduler.add_job(
            self.advance,
            "interval",
            seconds=self.state.interval_seconds,
            id=ADVANCE_JOB_ID,
            coalesce=True,
        )
        self._scheduler.start()
        self._sync_advance_job()
        logger.info(f"Slideshow started (interval {self.state.interval_seconds}s)")

    async def close(self) -> None:
        """Stop both timers and release the HTTP client."""
        if self._scheduler is not None:
            if self._scheduler.running:
                self._scheduler.shutdown(wait=False)
            self._scheduler = None
            logger.info("Slideshow timers stopped")
        await self.client.disconnect()

    async def __aenter__(self) -> "SlideshowSession":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def poll(self) -> None:
        """Fetch images and settings; a failed poll keeps the current images."""
        seq = self.state.begin_poll()
        before = self.state.current

        try:
            images, display_settings = await self.client.fetch_feed()
        except DisplayClientError as e:
            if self.state.apply_error(seq, str(e)):
                logger.warning(f"Slideshow poll failed, keeping {len(self.state.images)} images: {e}")
            return

        if not self.state.apply_images(seq, images):
            logger.debug(f"Discarded stale slideshow poll #{seq}")
            return

        self._apply_settings(display_settings)
        self._sync_advance_job()

        if self.state.current != before:
            self._notify()

    def _apply_settings(self, display_settings: DisplaySettingsDTO) -> None:
        # autoRotate only overrides local pause/resume when the server value changes
        if display_settings.auto_rotate != self._server_auto_rotate:
            self._server_auto_rotate = display_settings.auto_rotate
            self.state.paused = not display_settings.auto_rotate
            logger.info(f"Auto rotate {'on' if display_settings.auto_rotate else 'off'}")

        if self.state.set_interval(display_settings.slide_interval):
            self._reschedule()

    def _reschedule(self) -> None:
        if not self.running:
            return
        seconds = self.state.interval_seconds
        self._scheduler.reschedule_job(POLL_JOB_ID, trigger="interval", seconds=seconds)
        self._scheduler.reschedule_job(ADVANCE_JOB_ID, trigger="interval", seconds=seconds)
        logger.info(f"Slide interval changed to {seconds}s")

    def _sync_advance_job(self) -> None:
        """Pause the advance job while nothing should rotate."""
        if not self.running:
            return
        job = self._scheduler.get_job(ADVANCE_JOB_ID)
        if job is None:
            return
        if self.state.advancing and job.next_run_time is None:
            job.resume()
        elif not self.state.advancing and job.next_run_time is not None:
            job.pause()

    async def advance(self) -> None:
        if self.state.tick():
            self._notify()

    def next(self) -> None:
        """Manual forward step; the advance timer keeps its phase."""
        if not self.state.is_empty:
            self.state.next()
            self._notify()

    def previous(self) -> None:
        if not self.state.is_empty:
            self.state.previous()
            self._notify()

    def pause(self) -> None:
        self.state.pause()
        self._sync_advance_job()

    def resume(self) -> None:
        self.state.resume()
        self._sync_advance_job()

    def toggle_pause(self) -> bool:
        paused = self.state.toggle_pause()
        self._sync_advance_job()
        return paused

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self.state)
