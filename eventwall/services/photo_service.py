"""Photo store - photo records, ingest and status/order field access."""

import time
import uuid
from pathlib import Path
from typing import NamedTuple

from loguru import logger
from sqlalchemy import and_, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventwall.core.config import get_settings
from eventwall.core.exceptions import InvalidRequest
from eventwall.models.photo import Photo, PhotoStatus
from eventwall.schemas.photo import PhotoDTO
from eventwall.services.analytics_service import AnalyticsService
from eventwall.services.base_service import BaseService

settings = get_settings()

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".heic"}


class ImageUpload(NamedTuple):
    """One uploaded image as received from the client."""

    content: bytes
    filename: str | None
    content_type: str | None


def validate_image(upload: ImageUpload) -> str | None:
    """Problem with an uploaded image, or None when it can be stored."""
    if not upload.content_type or not upload.content_type.startswith("image/"):
        return "Only image files are allowed"
    if not upload.content:
        return "No file uploaded"
    if len(upload.content) > settings.max_upload_bytes:
        return f"File too large (max {settings.max_upload_bytes} bytes)"
    return None


def store_image(upload: ImageUpload) -> tuple[Path, str]:
    """Write an image under the upload directory.

    Returns the file path and the public URL path it is served from.
    """
    ext = Path(upload.filename or "").suffix.lower()
    if ext not in ALLOWED_EXTENSIONS:
        ext = ".jpg"
    stored_name = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}{ext}"

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    path = upload_dir / stored_name
    path.write_bytes(upload.content)
    return path, f"{settings.upload_url_prefix}/{stored_name}"


def discard_images(paths: list[Path]) -> None:
    """Remove files whose records were never committed."""
    for path in paths:
        path.unlink(missing_ok=True)
        logger.warning(f"Removed orphaned upload {path}")


class PhotoService(BaseService[Photo]):
    """Photo store.

    Every mutation a caller makes through this service (or through the
    moderation and ranking services that share its session) is committed
    once, so each call is observed as a single atomic update.
    """

    not_found_message = "Photo not found"

    def __init__(self, db: AsyncSession):
        super().__init__(db, Photo)
        self.analytics = AnalyticsService(db)

    async def get_photo(self, photo_id: int) -> PhotoDTO:
        return PhotoDTO.model_validate(await self.get_or_404(photo_id))

    async def list_photos(
        self,
        status: PhotoStatus | None = None,
        event_id: int | None = None,
    ) -> list[Photo]:
        """Photos filtered by status and/or event, in creation order."""
        filters = []
        if status is not None:
            filters.append(Photo.status == status)
        if event_id is not None:
            filters.append(Photo.event_id == event_id)

        query = select(Photo)
        if filters:
            query = query.where(and_(*filters))
        query = query.order_by(Photo.created_at, Photo.id)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_recent(self, limit: int, event_id: int | None = None) -> list[Photo]:
        """Newest photos first."""
        query = select(Photo)
        if event_id is not None:
            query = query.where(Photo.event_id == event_id)
        query = query.order_by(desc(Photo.created_at), desc(Photo.id)).limit(limit)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    def _validate_batch(uploads: list[ImageUpload], caption: str | None) -> str | None:
        if not uploads:
            return "No file uploaded"
        if len(uploads) > settings.max_files_per_upload:
            return f"Too many files (max {settings.max_files_per_upload} per upload)"
        if caption and len(caption) > settings.caption_max_length:
            return f"Caption too long (max {settings.caption_max_length} characters)"
        for upload in uploads:
            problem = validate_image(upload)
            if problem:
                return problem
        return None

    async def ingest(
        self,
        event_id: int,
        content: bytes,
        filename: str | None,
        content_type: str | None,
        submitter_name: str | None = None,
        caption: str | None = None,
    ) -> Photo:
        """Store one uploaded image and create its pending photo record."""
        photos = await self.ingest_many(
            event_id,
            [ImageUpload(content, filename, content_type)],
            submitter_name=submitter_name,
            caption=caption,
        )
        return photos[0]

    async def ingest_many(
        self,
        event_id: int,
        uploads: list[ImageUpload],
        submitter_name: str | None = None,
        caption: str | None = None,
    ) -> list[Photo]:
        """Store a batch of images as pending photos in one transaction.

        The whole batch is rejected if any image is invalid. Files are
        written as-is; resizing happens outside this service. Files already
        written are removed again when the records cannot be committed.
        """
        problem = self._validate_batch(uploads, caption)
        if problem:
            logger.warning(f"Rejected upload for event {event_id}: {problem}")
            raise InvalidRequest(problem)

        written: list[Path] = []
        photos: list[Photo] = []
        try:
            for upload in uploads:
                path, url = store_image(upload)
                written.append(path)
                photos.append(
                    Photo(
                        event_id=event_id,
                        original_path=url,
                        status=PhotoStatus.PENDING,
                        display_order=None,
                        submitter_name=(submitter_name or "").strip() or None,
                        caption=caption or None,
                    )
                )
            self.db.add_all(photos)
            await self.db.flush()
            await self.analytics.increment(event_id, "uploads", len(photos))
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            discard_images(written)
            raise

        for photo in photos:
            await self.db.refresh(photo)
            logger.info(f"Photo {photo.id} ingested for event {event_id}: {photo.original_path}")
        return photos
