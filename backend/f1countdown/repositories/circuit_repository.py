"""Circuit repository."""

from sqlalchemy import Integer, cast, select
from sqlalchemy.ext.asyncio import AsyncSession

from f1countdown.models import CircuitRecord, RaceRecord
from f1countdown.repositories.base import BaseRepository
from f1countdown.schemas.race import Circuit


class CircuitRepository(BaseRepository[CircuitRecord]):
    """Repository for CircuitRecord model."""

    def __init__(self, session: AsyncSession):
        super().__init__(CircuitRecord, session)

    async def upsert(self, circuit: Circuit) -> tuple[CircuitRecord, bool]:
        """Insert or overwrite a circuit. Returns (record, created)."""
        existing = await self.get(circuit.circuit_id)
        if existing is not None:
            existing.update_from(circuit)
            await self.session.flush()
            return existing, False

        record = CircuitRecord.from_circuit(circuit)
        self.session.add(record)
        await self.session.flush()
        return record, True

    async def get_races(self, circuit_id: str) -> list[RaceRecord]:
        """Races hosted by a circuit, newest season first."""
        query = (
            select(RaceRecord)
            .where(RaceRecord.circuit_id == circuit_id)
            .order_by(
                cast(RaceRecord.season, Integer).desc(),
                cast(RaceRecord.round, Integer),
            )
        )
        result = await self.session.execute(query)
        return list(result.scalars().unique().all())
