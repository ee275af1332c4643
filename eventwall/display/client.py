"""HTTP client for the display wall feed."""

import asyncio

import httpx
from loguru import logger
from pydantic import ValidationError

from eventwall.core.config import get_settings
from eventwall.schemas.display import DisplaySettingsDTO
from eventwall.schemas.photo import DisplayImageDTO

settings = get_settings()


class DisplayClientError(Exception):
    """A poll could not produce a usable response."""


class DisplayClient:
    """
    Reads the ranked image list and display settings from the API.

    Used by the slideshow session; every failure is raised as
    DisplayClientError so callers can treat polls as transient.
    """

    def __init__(
        self,
        base_url: str | None = None,
        event_id: int | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.display_api_url).rstrip("/")
        self.event_id = event_id if event_id is not None else settings.display_event_id
        self.timeout = timeout or settings.display_request_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Open the underlying HTTP connection pool."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
            logger.info(f"Display client connected to {self.base_url}")

    async def disconnect(self) -> None:
        """Close the HTTP connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Display client disconnected")

    def _params(self) -> dict[str, int]:
        return {"eventId": self.event_id} if self.event_id is not None else {}

    async def _get_json(self, path: str):
        if self._client is None:
            raise DisplayClientError("Display client is not connected")
        try:
            response = await self._client.get(path, params=self._params())
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise DisplayClientError(
                f"GET {path} failed with status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise DisplayClientError(f"GET {path} failed: {e}") from e
        except ValueError as e:
            raise DisplayClientError(f"GET {path} returned invalid JSON") from e

    async def fetch_images(self) -> list[DisplayImageDTO]:
        """Ranked approved photos, already in display order."""
        data = await self._get_json("/display/images")
        try:
            return [DisplayImageDTO.model_validate(item) for item in data]
        except (TypeError, ValidationError) as e:
            raise DisplayClientError(f"Unexpected display images payload: {e}") from e

    async def fetch_settings(self) -> DisplaySettingsDTO:
        data = await self._get_json("/display/settings")
        try:
            return DisplaySettingsDTO.model_validate(data)
        except ValidationError as e:
            raise DisplayClientError(f"Unexpected display settings payload: {e}") from e

    async def fetch_feed(self) -> tuple[list[DisplayImageDTO], DisplaySettingsDTO]:
        """Images and settings fetched concurrently.

        Both requests finish before this returns, even when one fails, so no
        request outlives the poll that started it.
        """
        images, display_settings = await asyncio.gather(
            self.fetch_images(),
            self.fetch_settings(),
            return_exceptions=True,
        )
        for outcome in (images, display_settings):
            if isinstance(outcome, BaseException):
                raise outcome
        return images, display_settings
