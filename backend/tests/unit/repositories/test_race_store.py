"""Tests for the local race store."""

import pytest

from f1countdown.exceptions import InvalidDataError
from f1countdown.repositories import RaceRepository
from f1countdown.schemas import SessionType

from tests.fixtures.factories import create_circuit_data, create_race, create_season


class TestUpsertRaces:
    """Tests for batch upsert."""

    @pytest.mark.asyncio
    async def test_stores_races_and_circuits(self, store, season_2024):
        count = await store.upsert_races(season_2024)

        assert count == 3
        assert await store.count_races() == 3
        circuit = await store.get_circuit("jeddah")
        assert circuit is not None
        assert circuit.location.country == "Saudi Arabia"

    @pytest.mark.asyncio
    async def test_is_idempotent(self, store, season_2024):
        await store.upsert_races(season_2024)
        await store.upsert_races(season_2024)

        assert await store.count_races() == 3

    @pytest.mark.asyncio
    async def test_overwrites_by_id(self, store):
        await store.upsert_races([create_race(race_name="Bahrain GP", time="12:00:00Z")])
        await store.upsert_races([create_race(race_name="Bahrain Grand Prix")])

        race = await store.get_race("2024-1")
        assert race is not None
        assert race.race_name == "Bahrain Grand Prix"
        assert race.time == "15:00:00Z"
        assert await store.count_races() == 1

    @pytest.mark.asyncio
    async def test_round_trip_keeps_sessions(self, store, bahrain):
        await store.upsert_races([bahrain])

        stored = await store.get_race(bahrain.id)

        assert stored == bahrain
        assert [s.type for s in stored.sessions][0] == SessionType.FP1

    @pytest.mark.asyncio
    async def test_circuit_shared_across_seasons(self, store):
        await store.upsert_races(create_season("2023") + create_season("2024"))

        races = await store.races_for_circuit("bahrain")

        assert [r.id for r in races] == ["2024-1", "2023-1"]


class TestUpsertSingle:
    """Tests for single upserts."""

    @pytest.mark.asyncio
    async def test_race_requires_stored_circuit(self, store, bahrain):
        with pytest.raises(InvalidDataError):
            await store.upsert_race(bahrain)

        assert await store.count_races() == 0

    @pytest.mark.asyncio
    async def test_race_after_circuit(self, store, bahrain):
        await store.upsert_circuit(bahrain.circuit)
        await store.upsert_race(bahrain)

        assert await store.get_race("2024-1") == bahrain

    @pytest.mark.asyncio
    async def test_circuit_overwrite(self, store, bahrain):
        await store.upsert_circuit(bahrain.circuit)
        renamed = create_race(
            circuit=create_circuit_data(circuit_name="Bahrain International Circuit (Sakhir)")
        )
        await store.upsert_circuit(renamed.circuit)

        circuit = await store.get_circuit("bahrain")
        assert circuit.circuit_name == "Bahrain International Circuit (Sakhir)"


class TestQueries:
    """Tests for listing and lookups."""

    @pytest.mark.asyncio
    async def test_list_by_season_in_round_order(self, store):
        races = create_season("2024")
        tenth = create_race(round="10", date="2024-06-09")
        await store.upsert_races([tenth, *reversed(races)])

        listed = await store.list_races("2024")

        assert [r.round for r in listed] == ["1", "2", "3", "10"]

    @pytest.mark.asyncio
    async def test_list_scoped_to_season(self, store):
        await store.upsert_races(create_season("2023") + create_season("2024"))

        assert {r.season for r in await store.list_races("2023")} == {"2023"}
        assert await store.list_races("2019") == []

    @pytest.mark.asyncio
    async def test_list_all_newest_season_first(self, store):
        await store.upsert_races(create_season("2023") + create_season("2024"))

        listed = await store.list_races()

        assert [r.id for r in listed][:2] == ["2024-1", "2024-2"]
        assert listed[-1].id == "2023-3"

    @pytest.mark.asyncio
    async def test_missing_race(self, store):
        assert await store.get_race("2024-99") is None
        assert await store.get_circuit("monza") is None

    @pytest.mark.asyncio
    async def test_mark_completed(self, store, session_factory, bahrain):
        await store.upsert_races([bahrain])

        assert await store.mark_completed("2024-1") is True
        assert await store.mark_completed("2024-99") is False

        async with session_factory() as session:
            record = await RaceRepository(session).get("2024-1")
            assert record.is_completed is True


class TestClear:
    """Tests for clearing the store."""

    @pytest.mark.asyncio
    async def test_clear_removes_everything(self, store, season_2024):
        await store.upsert_races(season_2024)

        await store.clear()

        assert await store.count_races() == 0
        assert await store.list_races() == []
        assert await store.get_circuit("bahrain") is None
