"""Display settings schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from eventwall.core.config import get_settings

settings = get_settings()

TransitionEffect = Literal["fade", "slide", "zoom", "flip"]


class DisplaySettingsDTO(BaseModel):
    """Display settings response schema."""

    event_id: int = Field(..., alias="eventId")
    auto_rotate: bool = Field(..., alias="autoRotate")
    slide_interval: int = Field(..., alias="slideInterval")
    display_format: str = Field(..., alias="displayFormat")
    background_path: str | None = Field(None, alias="backgroundPath")
    logo_path: str | None = Field(None, alias="logoPath")
    show_info: bool = Field(..., alias="showInfo")
    show_captions: bool = Field(..., alias="showCaptions")
    transition_effect: str = Field(..., alias="transitionEffect")
    blacklist_words: str | None = Field(None, alias="blacklistWords")
    updated_at: datetime | None = Field(None, alias="updatedAt")

    model_config = {"populate_by_name": True, "from_attributes": True}


class DisplaySettingsUpdate(BaseModel):
    """Partial update; only fields present in the payload are applied."""

    auto_rotate: bool | None = Field(None, alias="autoRotate")
    slide_interval: int | None = Field(
        None,
        alias="slideInterval",
        ge=settings.min_slide_interval,
        le=settings.max_slide_interval,
    )
    display_format: str | None = Field(None, alias="displayFormat")
    background_path: str | None = Field(None, alias="backgroundPath")
    logo_path: str | None = Field(None, alias="logoPath")
    show_info: bool | None = Field(None, alias="showInfo")
    show_captions: bool | None = Field(None, alias="showCaptions")
    transition_effect: TransitionEffect | None = Field(None, alias="transitionEffect")
    blacklist_words: str | None = Field(None, alias="blacklistWords")

    model_config = {"populate_by_name": True, "extra": "forbid"}
