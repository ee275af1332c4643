"""Statistics and analytics schemas."""

from datetime import date as date_type

from pydantic import BaseModel, Field


class StatsResponse(BaseModel):
    """Photo counts by moderation status."""

    pending: int = 0
    approved: int = 0
    rejected: int = 0
    archived: int = 0
    total_uploads: int = Field(0, alias="totalUploads")

    model_config = {"populate_by_name": True}


class DailyAnalyticsDTO(BaseModel):
    """Counters for one event on one day."""

    event_id: int = Field(..., alias="eventId")
    date: date_type
    uploads: int = 0
    views: int = 0
    qr_scans: int = Field(0, alias="qrScans")
    approved: int = 0
    rejected: int = 0
    archived: int = 0

    model_config = {"populate_by_name": True, "from_attributes": True}


class CounterResponse(BaseModel):
    """Acknowledgement for fire-and-forget counter endpoints."""

    success: bool = True
