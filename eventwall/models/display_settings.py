"""DisplaySettings model - one row per event."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from eventwall.core.clock import utc_now
from eventwall.db.base import Base


class DisplaySettings(Base):
    """Display wall settings for an event.

    Only ``auto_rotate`` and ``slide_interval`` drive the slideshow; the
    remaining columns are passed through to the presentation layer.
    """

    __tablename__ = "display_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("events.id", ondelete="CASCADE"), unique=True, index=True
    )

    auto_rotate: Mapped[bool] = mapped_column(Boolean, default=True)
    slide_interval: Mapped[int] = mapped_column(Integer, default=8)  # seconds

    # Presentation-only
    display_format: Mapped[str] = mapped_column(String(64), default="16:9-default")
    background_path: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    logo_path: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    show_info: Mapped[bool] = mapped_column(Boolean, default=True)
    show_captions: Mapped[bool] = mapped_column(Boolean, default=True)
    transition_effect: Mapped[str] = mapped_column(String(32), default="slide")
    blacklist_words: Mapped[str | None] = mapped_column(Text, nullable=True)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now, onupdate=utc_now
    )
