"""Shared persistence helpers for the service layer."""

from typing import Any, Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from eventwall.core.exceptions import NotFound
from eventwall.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseService(Generic[ModelType]):
    """Single-model CRUD bound to one request session.

    ``create``, ``update`` and ``delete`` each commit, so a service method
    that calls one of them last is observed as a single atomic update.
    """

    not_found_message = "Not found"

    def __init__(self, db: AsyncSession, model: type[ModelType]):
        self.db = db
        self.model = model

    async def get_by_id(self, id: Any) -> ModelType | None:
        return await self.db.get(self.model, id)

    async def get_or_404(self, id: Any, for_update: bool = False) -> ModelType:
        """Row by primary key, or NotFound.

        ``for_update`` locks the row until the transaction ends; SQLite
        ignores it and serializes writers instead.
        """
        obj = await self.db.get(self.model, id, with_for_update=for_update)
        if obj is None:
            raise NotFound(self.not_found_message)
        return obj

    async def create(self, obj: ModelType) -> ModelType:
        self.db.add(obj)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        """Commit pending attribute changes on ``obj``."""
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        await self.db.delete(obj)
        await self.db.commit()
