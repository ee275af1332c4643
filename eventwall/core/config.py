"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App Info
    app_name: str = "Event Wall API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Server
    host: str = "0.0.0.0"
    port: int = 8400
    workers: int = 1
    api_prefix: str = "/api/v1"

    # Database
    data_save_folder: str = "./data"
    db_file: str = "eventwall.db"
    database_url_override: str | None = Field(default=None, alias="DATABASE_URL")

    @property
    def database_url(self) -> str:
        """SQLAlchemy async database URL (SQLite unless DATABASE_URL is set)."""
        if self.database_url_override:
            return self.database_url_override
        db_path = Path(self.data_save_folder) / self.db_file
        return f"sqlite+aiosqlite:///{db_path}"

    # Uploads
    upload_dir: str = "./data/uploads"
    upload_url_prefix: str = "/uploads"
    max_upload_bytes: int = 10 * 1024 * 1024  # 10MB
    caption_max_length: int = 200
    max_files_per_upload: int = 5

    # Guest upload page encoded in the QR code
    public_base_url: str | None = Field(default=None, alias="PUBLIC_BASE_URL")
    upload_page_path: str = "/upload"

    # JWT Authentication
    jwt_secret_key: str = Field(
        default="change-me-eventwall-secret",
        alias="JWT_SECRET_KEY",
    )
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60 * 12  # 12 hours
    jwt_issuer: str = "eventwall"
    jwt_audience: str = "eventwall"

    # Bootstrap data
    default_admin_username: str = "admin"
    default_admin_password: str = Field(default="admin", alias="ADMIN_PASSWORD")
    default_event_name: str = "Default Event"
    default_event_slug: str = "default"

    # Display settings defaults
    default_slide_interval: int = 8
    min_slide_interval: int = 1
    max_slide_interval: int = 60

    # Display wall runner (client side)
    display_api_url: str = Field(
        default="http://localhost:8400/api/v1",
        alias="DISPLAY_API_URL",
    )
    display_event_id: int | None = Field(default=None, alias="DISPLAY_EVENT_ID")
    display_request_timeout: float = 10.0
    display_poll_max_instances: int = 3

    # CORS
    cors_origins: list[str] = ["*"]
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    @field_validator("display_api_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Remove trailing slash so paths can be appended."""
        return v.rstrip("/") if isinstance(v, str) else v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
