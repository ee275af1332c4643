"""Pytest configuration and fixtures."""

import hashlib
import os
import tempfile
from datetime import datetime, timedelta
from typing import AsyncGenerator

# Must be set before eventwall reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="eventwall-uploads-"))

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from eventwall.core.deps import get_db
from eventwall.core.security import PLAIN_HASH_PREFIX, create_access_token
from eventwall.db import models_registry  # noqa: F401 - Import to register models
from eventwall.db.base import Base
from eventwall.main import app
from eventwall.models.event import Event
from eventwall.models.photo import Photo, PhotoStatus
from eventwall.models.user import User

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        future=True,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_maker(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture(scope="function")
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client with overridden dependencies."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def admin_user(db_session: AsyncSession) -> User:
    """Create the curator account."""
    # sha256 behind the plain prefix keeps bcrypt out of the test run
    simple_hash = hashlib.sha256(b"admin").hexdigest()
    user = User(
        username="admin",
        hashed_password=f"{PLAIN_HASH_PREFIX}{simple_hash}",
        is_active=True,
        is_superuser=True,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(admin_user: User) -> dict:
    """Create authorization headers."""
    token = create_access_token(subject=str(admin_user.id))
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture(scope="function")
async def default_event(db_session: AsyncSession) -> Event:
    """Create the default event (slug "default")."""
    event = Event(name="Default Event", slug="default", is_active=True)
    db_session.add(event)
    await db_session.commit()
    await db_session.refresh(event)
    return event


@pytest_asyncio.fixture(scope="function")
async def other_event(db_session: AsyncSession) -> Event:
    event = Event(name="Other Event", slug="other", is_active=True)
    db_session.add(event)
    await db_session.commit()
    await db_session.refresh(event)
    return event


def make_photo(
    event: Event,
    status: PhotoStatus = PhotoStatus.PENDING,
    display_order: int | None = None,
    created_at: datetime | None = None,
    submitter_name: str | None = "Guest",
) -> Photo:
    return Photo(
        event_id=event.id,
        original_path="/uploads/test.jpg",
        status=status,
        display_order=display_order,
        submitter_name=submitter_name,
        created_at=created_at or datetime(2024, 6, 1, 12, 0, 0),
    )


@pytest.fixture
def photo_factory(db_session: AsyncSession):
    """Insert a single photo with explicit status/order/created_at."""

    async def _create(event: Event, **kwargs) -> Photo:
        photo = make_photo(event, **kwargs)
        db_session.add(photo)
        await db_session.commit()
        await db_session.refresh(photo)
        return photo

    return _create


@pytest_asyncio.fixture(scope="function")
async def sample_photos(db_session: AsyncSession, default_event: Event) -> list[Photo]:
    """
    Create sample photos, one minute apart:

    0: pending, 1: approved order 1, 2: approved order 0,
    3: approved without order, 4: rejected, 5: archived order 5
    """
    base = datetime(2024, 6, 1, 12, 0, 0)
    specs = [
        (PhotoStatus.PENDING, None),
        (PhotoStatus.APPROVED, 1),
        (PhotoStatus.APPROVED, 0),
        (PhotoStatus.APPROVED, None),
        (PhotoStatus.REJECTED, None),
        (PhotoStatus.ARCHIVED, 5),
    ]

    photos = []
    for i, (status, order) in enumerate(specs):
        photo = make_photo(
            default_event,
            status=status,
            display_order=order,
            created_at=base + timedelta(minutes=i),
            submitter_name=f"Guest {i}",
        )
        photos.append(photo)
        db_session.add(photo)

    await db_session.commit()
    for photo in photos:
        await db_session.refresh(photo)
    return photos
