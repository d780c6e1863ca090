"""Base service class with common database operations."""

from typing import Any, Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from meetapp.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseService(Generic[ModelType]):
    """Base service bound to one model and one session."""

    def __init__(self, db: AsyncSession, model: type[ModelType]):
        self.db = db
        self.model = model

    async def get_by_id(self, id: Any) -> ModelType | None:
        """Get entity by primary key."""
        return await self.db.get(self.model, id)

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new entity and reload its server-side values."""
        self.db.add(obj)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj
