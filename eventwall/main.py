"""
Event Wall API - FastAPI Application

Main entry point: photo submission, moderation, display ordering and the
display wall feed.
"""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger

from eventwall.api import router as api_router
from eventwall.core.config import get_settings
from eventwall.core.exceptions import EventWallError, Unauthorized
from eventwall.core.log import setup_logging
from eventwall.db import models_registry  # noqa: F401 - Import to register models
from eventwall.db.base import Base
from eventwall.db.session import async_session_maker, engine
from eventwall.services.event_service import EventService
from eventwall.services.user_service import UserService

settings = get_settings()
setup_logging(settings.log_level)


async def init_database() -> None:
    """Initialize database tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized")


async def init_default_data() -> None:
    """Create the admin curator and the default event if missing."""
    async with async_session_maker() as db:
        await UserService(db).ensure_admin()
        await EventService(db).ensure_default_event()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: the store engine lives exactly as long as the app."""
    logger.info("Starting Event Wall API...")

    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)

    await init_database()
    await init_default_data()

    logger.info(f"Event Wall API started on port {settings.port}")

    yield

    logger.info("Shutting down Event Wall API...")
    await engine.dispose()
    logger.info("Event Wall API stopped")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Event Wall API - photo moderation and display wall",
    lifespan=lifespan,
    docs_url="/swagger" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)


def _error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"Code": status_code, "Message": message},
        headers=headers,
    )


@app.exception_handler(EventWallError)
async def eventwall_exception_handler(request: Request, exc: EventWallError) -> JSONResponse:
    """Domain errors map straight to their HTTP status."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    else:
        logger.debug(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return _error_response(exc.status_code, exc.message, headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed payloads are reported as 400 InvalidRequest."""
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    return _error_response(400, f"Invalid request: {details}")


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc}")
    return _error_response(500, str(exc))


@app.get("/health")
async def health() -> dict:
    return {"ok": True}


app.include_router(api_router)


# Uploaded photos are served from the upload folder
upload_path = Path(settings.upload_dir)
upload_path.mkdir(parents=True, exist_ok=True)
app.mount(
    settings.upload_url_prefix,
    StaticFiles(directory=str(upload_path)),
    name="uploads",
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "eventwall.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=settings.workers,
    )
