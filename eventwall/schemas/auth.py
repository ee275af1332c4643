"""Curator login schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class UserLogin(BaseModel):
    """Curator credentials."""

    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1)


class Token(BaseModel):
    """Bearer token issued on login."""

    token: str
    token_type: str = Field("bearer", alias="tokenType")
    expires_at: datetime = Field(..., alias="expiresAt")

    model_config = {"populate_by_name": True}
