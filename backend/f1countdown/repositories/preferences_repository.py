"""User preferences repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from f1countdown.models import PREFERENCES_ID, UserPreferences
from f1countdown.repositories.base import BaseRepository


class PreferencesRepository(BaseRepository[UserPreferences]):
    """Repository for the single UserPreferences row."""

    def __init__(self, session: AsyncSession):
        super().__init__(UserPreferences, session)

    async def get_or_create(self) -> tuple[UserPreferences, bool]:
        """Get the preferences row, creating it with defaults on first use."""
        preferences = await self.get(PREFERENCES_ID)
        if preferences is not None:
            return preferences, False

        preferences = await self.create({"id": PREFERENCES_ID})
        return preferences, True
