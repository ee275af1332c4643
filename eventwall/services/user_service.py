"""Curator account lookup and bootstrap."""

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventwall.core.clock import utc_now
from eventwall.core.config import get_settings
from eventwall.core.security import get_password_hash, verify_password
from eventwall.models.user import User
from eventwall.services.base_service import BaseService

settings = get_settings()


class UserService(BaseService[User]):
    not_found_message = "User not found"

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_by_username(self, username: str) -> User | None:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_active(self, user_id: int) -> User | None:
        """Curator by id, or None when missing or disabled."""
        user = await self.get_by_id(user_id)
        if user is None or not user.is_active:
            return None
        return user

    async def authenticate(self, username: str, password: str) -> User | None:
        """Check credentials and stamp the login time on success."""
        user = await self.get_by_username(username)
        if user is None or not user.is_active:
            return None
        if not verify_password(password, user.hashed_password):
            return None

        user.last_login_at = utc_now()
        return await self.update(user)

    async def create_user(
        self,
        username: str,
        password: str,
        is_superuser: bool = False,
    ) -> User:
        user = User(
            username=username,
            hashed_password=get_password_hash(password),
            is_active=True,
            is_superuser=is_superuser,
        )
        return await self.create(user)

    async def ensure_admin(self) -> User:
        """Create the configured admin curator on first start."""
        user = await self.get_by_username(settings.default_admin_username)
        if user is not None:
            return user

        user = await self.create_user(
            username=settings.default_admin_username,
            password=settings.default_admin_password,
            is_superuser=True,
        )
        logger.info(f"Default admin curator created: {user.username}")
        return user
