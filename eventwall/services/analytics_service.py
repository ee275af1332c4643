"""Analytics service - daily per-event counters and status aggregation."""

from datetime import date

from loguru import logger
from sqlalchemy import func, select, update
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eventwall.core import clock
from eventwall.core.exceptions import InvalidRequest
from eventwall.models.analytics import COUNTER_FIELDS, DailyAnalytics
from eventwall.models.photo import Photo, PhotoStatus
from eventwall.schemas.statistics import DailyAnalyticsDTO, StatsResponse
from eventwall.services.base_service import BaseService

# Dialects with INSERT ... ON CONFLICT DO NOTHING
CONFLICT_INSERTS = {
    "sqlite": sqlite_insert,
    "postgresql": postgresql_insert,
}


class AnalyticsService(BaseService[DailyAnalytics]):
    """Counters are only ever incremented; rows are never deleted here."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, DailyAnalytics)

    async def _ensure_row(self, event_id: int, day: date) -> None:
        """Insert the day's zeroed row unless another writer already has.

        Two first increments of a day may race; the loser's insert is a
        no-op instead of a unique violation.
        """
        values = {"event_id": event_id, "date": day, **{f: 0 for f in COUNTER_FIELDS}}
        dialect = self.db.get_bind().dialect.name
        insert = CONFLICT_INSERTS.get(dialect)
        if insert is not None:
            await self.db.execute(
                insert(DailyAnalytics)
                .values(**values)
                .on_conflict_do_nothing(index_elements=["event_id", "date"])
            )
            return

        exists = await self.db.execute(
            select(DailyAnalytics.id).where(
                DailyAnalytics.event_id == event_id, DailyAnalytics.date == day
            )
        )
        if exists.scalar_one_or_none() is not None:
            return
        try:
            async with self.db.begin_nested():
                self.db.add(DailyAnalytics(**values))
        except IntegrityError:
            logger.debug(f"Analytics row for event {event_id} on {day} created concurrently")

    async def increment(self, event_id: int, field: str, amount: int = 1) -> None:
        """Add ``amount`` to today's counter without committing.

        Callers commit so the increment lands in the same transaction as the
        mutation that caused it. The addition happens in SQL, so concurrent
        increments are never lost.
        """
        if field not in COUNTER_FIELDS:
            raise InvalidRequest(f"Unknown analytics counter: {field}")
        if amount < 0:
            raise InvalidRequest("Analytics counters cannot be decremented")

        day = clock.today()
        await self._ensure_row(event_id, day)
        column = getattr(DailyAnalytics, field)
        await self.db.execute(
            update(DailyAnalytics)
            .where(DailyAnalytics.event_id == event_id, DailyAnalytics.date == day)
            .values({column: column + amount})
            .execution_options(synchronize_session="fetch")
        )

    async def record(self, event_id: int, field: str) -> None:
        """Increment a counter as a standalone transaction."""
        await self.increment(event_id, field)
        await self.db.commit()
        logger.debug(f"Analytics {field} +1 for event {event_id}")

    async def get_daily(self, event_id: int, day: date | None = None) -> DailyAnalyticsDTO:
        """Counters for one day; zeros when nothing was recorded."""
        day = day or clock.today()
        result = await self.db.execute(
            select(DailyAnalytics)
            .where(DailyAnalytics.event_id == event_id, DailyAnalytics.date == day)
            .execution_options(populate_existing=True)
        )
        row = result.scalar_one_or_none()
        if row is None:
            return DailyAnalyticsDTO(event_id=event_id, date=day)
        return DailyAnalyticsDTO.model_validate(row)

    async def get_range(
        self,
        event_id: int,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[DailyAnalyticsDTO]:
        """Daily rows in [start_date, end_date], oldest first."""
        query = select(DailyAnalytics).where(DailyAnalytics.event_id == event_id)
        if start_date:
            query = query.where(DailyAnalytics.date >= start_date)
        if end_date:
            query = query.where(DailyAnalytics.date <= end_date)
        query = query.order_by(DailyAnalytics.date).execution_options(populate_existing=True)

        result = await self.db.execute(query)
        return [DailyAnalyticsDTO.model_validate(r) for r in result.scalars().all()]

    async def get_status_counts(self, event_id: int | None = None) -> StatsResponse:
        """Photo counts grouped by status, optionally for one event."""
        query = select(Photo.status, func.count()).group_by(Photo.status)
        if event_id is not None:
            query = query.where(Photo.event_id == event_id)

        result = await self.db.execute(query)
        counts = {status: 0 for status in PhotoStatus}
        for status, count in result.all():
            counts[PhotoStatus(status)] = count

        return StatsResponse(
            pending=counts[PhotoStatus.PENDING],
            approved=counts[PhotoStatus.APPROVED],
            rejected=counts[PhotoStatus.REJECTED],
            archived=counts[PhotoStatus.ARCHIVED],
            total_uploads=sum(counts.values()),
        )
