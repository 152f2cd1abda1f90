"""Transactional local store for circuits and races."""

from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from f1countdown.api_logging import get_logger
from f1countdown.exceptions import CacheError, InvalidDataError
from f1countdown.models import RaceRecord
from f1countdown.repositories.circuit_repository import CircuitRepository
from f1countdown.repositories.race_repository import RaceRepository
from f1countdown.schemas.race import Circuit, Race

logger = get_logger("store")


def _to_races(records: Iterable[RaceRecord]) -> list[Race]:
    # Races whose circuit cannot be resolved are left out
    races = []
    for record in records:
        race = record.to_race()
        if race is None:
            logger.warning("Skipping race %s without a resolvable circuit", record.id)
            continue
        races.append(race)
    return races


class RaceStore:
    """Durable upsert and query of circuits and races.

    Every public operation runs in its own transaction: it either commits in
    full before returning or leaves the store untouched. Storage failures are
    raised as CacheError.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    yield session
        except SQLAlchemyError as exc:
            raise CacheError(exc) from exc

    async def upsert_circuit(self, circuit: Circuit) -> None:
        async with self._transaction() as session:
            await CircuitRepository(session).upsert(circuit)

    async def upsert_race(self, race: Race, circuit_id: str | None = None) -> None:
        """Upsert a race linked to an already stored circuit."""
        circuit_id = circuit_id or race.circuit.circuit_id
        async with self._transaction() as session:
            circuit = await CircuitRepository(session).get(circuit_id)
            if circuit is None:
                raise InvalidDataError()
            await RaceRepository(session).upsert(race, circuit)

    async def upsert_races(self, races: Iterable[Race]) -> int:
        """Upsert races and their circuits as one batch."""
        count = 0
        async with self._transaction() as session:
            circuit_repo = CircuitRepository(session)
            race_repo = RaceRepository(session)
            for race in races:
                circuit, _ = await circuit_repo.upsert(race.circuit)
                await race_repo.upsert(race, circuit)
                count += 1
        return count

    async def get_race(self, race_id: str) -> Race | None:
        async with self._transaction() as session:
            record = await RaceRepository(session).get(race_id)
            return record.to_race() if record is not None else None

    async def list_races(self, season: str | None = None) -> list[Race]:
        """Races of a season by round, or all races newest season first."""
        async with self._transaction() as session:
            repo = RaceRepository(session)
            if season is not None:
                records = await repo.get_by_season(season)
            else:
                records = await repo.get_all_ordered()
            return _to_races(records)

    async def get_circuit(self, circuit_id: str) -> Circuit | None:
        async with self._transaction() as session:
            record = await CircuitRepository(session).get(circuit_id)
            return record.to_circuit() if record is not None else None

    async def races_for_circuit(self, circuit_id: str) -> list[Race]:
        async with self._transaction() as session:
            records = await CircuitRepository(session).get_races(circuit_id)
            return _to_races(records)

    async def mark_completed(self, race_id: str) -> bool:
        async with self._transaction() as session:
            record = await RaceRepository(session).get(race_id)
            if record is None:
                return False
            record.mark_completed()
            return True

    async def count_races(self) -> int:
        async with self._transaction() as session:
            return await RaceRepository(session).count()

    async def clear(self) -> None:
        """Delete every race and circuit in one transaction."""
        async with self._transaction() as session:
            await RaceRepository(session).delete_all()
            await CircuitRepository(session).delete_all()
        logger.info("Local store cleared")
