"""Curator login."""

from datetime import timedelta

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from eventwall.core.clock import utc_now
from eventwall.core.config import get_settings
from eventwall.core.exceptions import Unauthorized
from eventwall.core.security import create_access_token
from eventwall.schemas.auth import Token, UserLogin
from eventwall.services.user_service import UserService

settings = get_settings()


class AuthService:
    """Exchanges curator credentials for a bearer token."""

    def __init__(self, db: AsyncSession):
        self.users = UserService(db)

    async def login(self, credentials: UserLogin) -> Token:
        user = await self.users.authenticate(credentials.username, credentials.password)
        if user is None:
            logger.info(f"Rejected login for {credentials.username!r}")
            raise Unauthorized("Incorrect username or password")

        lifetime = timedelta(minutes=settings.jwt_access_token_expire_minutes)
        token = create_access_token(
            subject=str(user.id),
            extra={"username": user.username},
            expires_delta=lifetime,
        )
        logger.info(f"Curator {user.username} logged in")
        return Token(token=token, expires_at=utc_now() + lifetime)
