"""FastAPI dependencies: database session and curator resolution."""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from eventwall.core.exceptions import Unauthorized
from eventwall.core.security import decode_access_token
from eventwall.db.session import async_session_maker
from eventwall.models.user import User
from eventwall.services.user_service import UserService

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request."""
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


def _user_id_from_token(token: str) -> int | None:
    payload = decode_access_token(token)
    subject = payload.get("sub") if payload else None
    if subject is None or not str(subject).isdigit():
        return None
    return int(subject)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User | None:
    """Curator behind the bearer token; None for anonymous or invalid tokens."""
    if credentials is None:
        return None

    user_id = _user_id_from_token(credentials.credentials)
    if user_id is None:
        return None
    return await UserService(db).get_active(user_id)


async def get_current_user_required(
    user: Annotated[User | None, Depends(get_current_user)],
) -> User:
    if user is None:
        raise Unauthorized("Not authenticated")
    return user


DBSession = Annotated[AsyncSession, Depends(get_db)]
CurrentUserRequired = Annotated[User, Depends(get_current_user_required)]
