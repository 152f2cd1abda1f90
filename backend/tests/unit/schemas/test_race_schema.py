"""Tests for race and session schemas."""

from datetime import datetime, timezone

from f1countdown.schemas import APIResponse, Race, RaceResponse, SessionType
from f1countdown.schemas.session import parse_event_datetime

from tests.fixtures.factories import (
    FIXED_NOW,
    create_bahrain_2024_data,
    create_envelope,
    create_race,
    create_race_data,
)


class TestParseEventDatetime:
    """Tests for date/time combination."""

    def test_date_and_time(self):
        assert parse_event_datetime("2024-03-02", "15:00:00Z") == datetime(
            2024, 3, 2, 15, 0, tzinfo=timezone.utc
        )

    def test_date_only_is_midnight_utc(self):
        assert parse_event_datetime("2024-03-02") == datetime(
            2024, 3, 2, tzinfo=timezone.utc
        )

    def test_offset_is_normalised(self):
        assert parse_event_datetime("2024-03-02", "18:00:00+03:00") == datetime(
            2024, 3, 2, 15, 0, tzinfo=timezone.utc
        )

    def test_garbage(self):
        assert parse_event_datetime("not-a-date", "15:00:00Z") is None
        assert parse_event_datetime("2024-03-02", "quarter past") is None


class TestRace:
    """Tests for Race decoding and derived values."""

    def test_id_from_season_and_round(self):
        assert create_race(season="2023", round="22").id == "2023-22"

    def test_wire_aliases(self):
        race = Race.model_validate(create_bahrain_2024_data())

        assert race.race_name == "Bahrain Grand Prix"
        assert race.circuit.location.locality == "Sakhir"
        assert race.qualifying is not None
        assert race.sprint is None

    def test_sessions_are_chronological(self):
        race = Race.model_validate(create_bahrain_2024_data())

        assert [s.type for s in race.sessions] == [
            SessionType.FP1,
            SessionType.FP2,
            SessionType.FP3,
            SessionType.QUALIFYING,
            SessionType.RACE,
        ]

    def test_race_session_always_present(self):
        race = create_race()

        assert [s.type for s in race.sessions] == [SessionType.RACE]

    def test_sprint_weekend_ordering(self):
        race = create_race(
            FirstPractice={"date": "2024-04-19", "time": "03:30:00Z"},
            Qualifying={"date": "2024-04-19", "time": "07:00:00Z"},
            Sprint={"date": "2024-04-20", "time": "03:00:00Z"},
            date="2024-04-21",
            time="07:00:00Z",
        )

        assert [s.type for s in race.sessions] == [
            SessionType.FP1,
            SessionType.QUALIFYING,
            SessionType.SPRINT,
            SessionType.RACE,
        ]

    def test_session_without_time_sorts_by_midnight(self):
        race = create_race(Qualifying={"date": "2024-03-01"})

        qualifying = race.session(SessionType.QUALIFYING)
        assert qualifying is not None
        assert qualifying.date_time == datetime(2024, 3, 1, tzinfo=timezone.utc)

    def test_unparseable_session_sorts_last(self):
        race = create_race(FirstPractice={"date": "TBC"})

        assert race.sessions[-1].type == SessionType.FP1

    def test_is_upcoming_at(self):
        race = create_race()

        assert race.is_upcoming_at(FIXED_NOW)
        assert not race.is_upcoming_at(datetime(2024, 3, 2, 15, 0, tzinfo=timezone.utc))

    def test_round_number(self):
        assert create_race(round="7").round_number == 7
        assert create_race(round="x").round_number == 0

    def test_session_ids_are_unique(self):
        race = Race.model_validate(create_bahrain_2024_data())

        ids = [s.id for s in race.sessions]
        assert len(ids) == len(set(ids))


class TestAPIResponse:
    """Tests for the response envelope."""

    def test_races(self):
        envelope = APIResponse.model_validate(
            create_envelope([create_race_data(), create_race_data(round="2")])
        )

        assert [r.id for r in envelope.races] == ["2024-1", "2024-2"]

    def test_missing_race_table(self):
        envelope = APIResponse.model_validate(create_envelope(include_race_table=False))

        assert envelope.races == []


class TestRaceResponse:
    """Tests for the presentation schema."""

    def test_from_race(self):
        race = Race.model_validate(create_bahrain_2024_data())

        response = RaceResponse.from_race(race, FIXED_NOW)

        assert response.id == "2024-1"
        assert response.circuit.country == "Bahrain"
        assert response.is_upcoming is True
        assert response.sessions[0].display_name == "Free Practice 1"
        assert response.sessions[-1].type == SessionType.RACE
