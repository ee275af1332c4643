"""Tests for authentication endpoints."""

from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from eventwall.core.config import get_settings
from eventwall.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from eventwall.models.user import User
from eventwall.services.user_service import UserService


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, admin_user: User):
    """Test successful login."""
    response = await client.post(
        "/api/v1/auth",
        json={"username": "admin", "password": "admin"},
    )

    assert response.status_code == 200
    token = response.json()["token"]
    payload = decode_access_token(token)
    assert payload["sub"] == str(admin_user.id)
    assert payload["username"] == "admin"
    assert response.json()["tokenType"] == "bearer"
    assert "expiresAt" in response.json()


@pytest.mark.asyncio
async def test_login_invalid_password(client: AsyncClient, admin_user: User):
    response = await client.post(
        "/api/v1/auth",
        json={"username": "admin", "password": "wrongpassword"},
    )

    assert response.status_code == 401
    assert response.json()["Message"] == "Incorrect username or password"


@pytest.mark.asyncio
async def test_login_nonexistent_user(client: AsyncClient):
    response = await client.post(
        "/api/v1/auth",
        json={"username": "nobody", "password": "password"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_inactive_user(
    client: AsyncClient, admin_user: User, db_session: AsyncSession
):
    admin_user.is_active = False
    await db_session.commit()

    response = await client.post(
        "/api/v1/auth",
        json={"username": "admin", "password": "admin"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_missing_fields(client: AsyncClient):
    """Malformed payloads are reported as 400."""
    response = await client.post("/api/v1/auth", json={"username": "admin"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_protected_route_rejects_bad_token(client: AsyncClient, admin_user: User):
    response = await client.post(
        "/api/v1/events",
        json={"name": "Gala"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_protected_route_rejects_expired_token(client: AsyncClient, admin_user: User):
    token = create_access_token(
        subject=str(admin_user.id), expires_delta=timedelta(seconds=-1)
    )

    response = await client.post(
        "/api/v1/events",
        json={"name": "Gala"},
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_protected_route_rejects_unknown_subject(client: AsyncClient, admin_user: User):
    token = create_access_token(subject="9999")

    response = await client.post(
        "/api/v1/events",
        json={"name": "Gala"},
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 401


def test_password_hash_roundtrip():
    hashed = get_password_hash("s3cret")

    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)


@pytest.mark.asyncio
async def test_login_stamps_last_login(
    client: AsyncClient, admin_user: User, db_session: AsyncSession
):
    assert admin_user.last_login_at is None

    await client.post("/api/v1/auth", json={"username": "admin", "password": "admin"})

    await db_session.refresh(admin_user)
    assert admin_user.last_login_at is not None


@pytest.mark.asyncio
async def test_ensure_admin_is_idempotent(db_session: AsyncSession):
    service = UserService(db_session)

    first = await service.ensure_admin()
    second = await service.ensure_admin()

    assert first.id == second.id
    assert first.is_superuser
    assert await service.authenticate(first.username, get_settings().default_admin_password) is not None
