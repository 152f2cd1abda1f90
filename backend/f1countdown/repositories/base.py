"""Base repository with the operations shared by every table."""

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from f1countdown.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Repository keyed by a natural string id."""

    def __init__(self, model: type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session

    async def get(self, id: str) -> ModelType | None:
        """Get a record by primary key."""
        return await self.session.get(self.model, id)

    async def count(self, filters: dict[str, Any] | None = None) -> int:
        """Count records, optionally matching column values."""
        query = select(func.count()).select_from(self.model)
        for key, value in (filters or {}).items():
            if hasattr(self.model, key) and value is not None:
                query = query.where(getattr(self.model, key) == value)

        result = await self.session.execute(query)
        return result.scalar_one()

    async def create(self, data: dict[str, Any]) -> ModelType:
        """Insert a record and load its server defaults."""
        instance = self.model(**data)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete_all(self) -> int:
        """Delete every record of this model."""
        result = await self.session.execute(delete(self.model))
        await self.session.flush()
        return result.rowcount or 0
