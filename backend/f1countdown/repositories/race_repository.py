"""Race repository."""

from sqlalchemy import Integer, cast, select
from sqlalchemy.ext.asyncio import AsyncSession

from f1countdown.models import CircuitRecord, RaceRecord
from f1countdown.repositories.base import BaseRepository
from f1countdown.schemas.race import Race


class RaceRepository(BaseRepository[RaceRecord]):
    """Repository for RaceRecord model."""

    def __init__(self, session: AsyncSession):
        super().__init__(RaceRecord, session)

    async def upsert(self, race: Race, circuit: CircuitRecord) -> tuple[RaceRecord, bool]:
        """Insert or overwrite a race by "{season}-{round}". Returns (record, created)."""
        existing = await self.get(race.id)
        if existing is not None:
            existing.update_from(race, circuit)
            await self.session.flush()
            return existing, False

        record = RaceRecord.from_race(race, circuit)
        self.session.add(record)
        await self.session.flush()
        return record, True

    async def get_by_season(self, season: str) -> list[RaceRecord]:
        """Races of one season ordered by round."""
        query = (
            select(RaceRecord)
            .where(RaceRecord.season == season)
            .order_by(cast(RaceRecord.round, Integer))
        )
        result = await self.session.execute(query)
        return list(result.scalars().unique().all())

    async def get_all_ordered(self) -> list[RaceRecord]:
        """All races, newest season first, then by round."""
        query = select(RaceRecord).order_by(
            cast(RaceRecord.season, Integer).desc(),
            cast(RaceRecord.round, Integer),
        )
        result = await self.session.execute(query)
        return list(result.scalars().unique().all())
