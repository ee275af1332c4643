"""Photo model and moderation status enum."""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from eventwall.core.clock import utc_now
from eventwall.db.base import Base


class PhotoStatus(str, enum.Enum):
    """Moderation status of a submitted photo."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    ARCHIVED = "archived"


class Photo(Base):
    """Photo database model - one attendee submission.

    Attributes:
        id: Unique photo identifier, assigned at creation
        event_id: Owning event
        original_path: Public path of the stored file
        status: Moderation status, starts as pending
        display_order: Curator rank, only meaningful while approved
        submitter_name: Free-form display name
        caption: Free-form caption
        created_at: Creation time (naive UTC), tie-break for ordering
    """

    __tablename__ = "photos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("events.id", ondelete="CASCADE"), index=True
    )
    original_path: Mapped[str] = mapped_column(String(1024))

    status: Mapped[PhotoStatus] = mapped_column(
        Enum(
            PhotoStatus,
            native_enum=False,
            length=16,
            values_callable=lambda e: [m.value for m in e],
        ),
        default=PhotoStatus.PENDING,
        nullable=False,
    )
    display_order: Mapped[int | None] = mapped_column(Integer, nullable=True)

    submitter_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    caption: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now, index=True)

    __table_args__ = (
        Index("ix_photos_event_status", "event_id", "status"),
    )


class ModerationAction(str, enum.Enum):
    """Reviewer action; each maps to exactly one non-pending target status."""

    APPROVE = "approve"
    REJECT = "reject"
    ARCHIVE = "archive"

    @property
    def target_status(self) -> PhotoStatus:
        match self:
            case ModerationAction.APPROVE:
                return PhotoStatus.APPROVED
            case ModerationAction.REJECT:
                return PhotoStatus.REJECTED
            case ModerationAction.ARCHIVE:
                return PhotoStatus.ARCHIVED
