"""Daily analytics counters per event."""

from datetime import date as date_type

from sqlalchemy import Date, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from eventwall.db.base import Base

# Column names that may be incremented through AnalyticsService.increment
COUNTER_FIELDS = ("uploads", "views", "qr_scans", "approved", "rejected", "archived")


class DailyAnalytics(Base):
    """Monotonic counters for one event on one server-local day."""

    __tablename__ = "daily_analytics"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("events.id", ondelete="CASCADE"), index=True
    )
    date: Mapped[date_type] = mapped_column(Date, index=True)

    uploads: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    qr_scans: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    approved: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    rejected: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    archived: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    __table_args__ = (
        UniqueConstraint("event_id", "date", name="uq_daily_analytics_event_date"),
    )
