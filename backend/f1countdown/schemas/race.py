"""Race and circuit schemas as decoded from the schedule API."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from f1countdown.schemas.session import (
    Session,
    SessionData,
    SessionType,
    parse_event_datetime,
)

# Sessions without a resolvable timestamp sort after everything else
_FAR_FUTURE = datetime.max.replace(tzinfo=timezone.utc)


class CircuitLocation(BaseModel):
    """Location details for a circuit."""

    model_config = ConfigDict(frozen=True)

    locality: str
    country: str


class Circuit(BaseModel):
    """A racing venue."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    circuit_id: str = Field(..., alias="circuitId")
    circuit_name: str = Field(..., alias="circuitName")
    location: CircuitLocation = Field(..., alias="Location")

    @property
    def id(self) -> str:
        return self.circuit_id


class Race(BaseModel):
    """A race weekend, identified by season and round."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    season: str
    round: str
    race_name: str = Field(..., alias="raceName")
    circuit: Circuit = Field(..., alias="Circuit")
    date: str
    time: str | None = None

    first_practice: SessionData | None = Field(None, alias="FirstPractice")
    second_practice: SessionData | None = Field(None, alias="SecondPractice")
    third_practice: SessionData | None = Field(None, alias="ThirdPractice")
    qualifying: SessionData | None = Field(None, alias="Qualifying")
    sprint: SessionData | None = Field(None, alias="Sprint")

    @property
    def id(self) -> str:
        return f"{self.season}-{self.round}"

    @property
    def session_blocks(self) -> dict[SessionType, SessionData]:
        """Optional session blocks that are present, keyed by type."""
        blocks = {
            SessionType.FP1: self.first_practice,
            SessionType.FP2: self.second_practice,
            SessionType.FP3: self.third_practice,
            SessionType.SPRINT: self.sprint,
            SessionType.QUALIFYING: self.qualifying,
        }
        return {kind: block for kind, block in blocks.items() if block is not None}

    @property
    def sessions(self) -> list[Session]:
        """All sessions of the weekend in chronological order."""
        sessions = [
            Session(type=kind, date=block.date, time=block.time)
            for kind, block in self.session_blocks.items()
        ]
        # Main race is always present
        sessions.append(Session(type=SessionType.RACE, date=self.date, time=self.time))
        return sorted(sessions, key=lambda s: s.date_time or _FAR_FUTURE)

    @property
    def race_date_time(self) -> datetime | None:
        return parse_event_datetime(self.date, self.time)

    def is_upcoming_at(self, now: datetime) -> bool:
        race_time = self.race_date_time
        if race_time is None:
            return False
        return race_time > now

    @property
    def is_upcoming(self) -> bool:
        return self.is_upcoming_at(datetime.now(timezone.utc))

    def session(self, session_type: SessionType) -> Session | None:
        for session in self.sessions:
            if session.type == session_type:
                return session
        return None

    @property
    def round_number(self) -> int:
        try:
            return int(self.round)
        except ValueError:
            return 0


# ── Presentation schemas ───────────────────────────────────────


class SessionResponse(BaseModel):
    type: SessionType
    display_name: str
    date: str
    time: str | None = None
    date_time: datetime | None = None

    @classmethod
    def from_session(cls, session: Session) -> "SessionResponse":
        return cls(
            type=session.type,
            display_name=session.type.display_name,
            date=session.date,
            time=session.time,
            date_time=session.date_time,
        )


class CircuitResponse(BaseModel):
    circuit_id: str
    circuit_name: str
    locality: str
    country: str


class RaceResponse(BaseModel):
    """Race with derived values resolved."""

    id: str
    season: str
    round: str
    race_name: str
    circuit: CircuitResponse
    date: str
    time: str | None = None
    race_date_time: datetime | None = None
    is_upcoming: bool
    sessions: list[SessionResponse] = Field(default_factory=list)

    @classmethod
    def from_race(cls, race: Race, now: datetime) -> "RaceResponse":
        return cls(
            id=race.id,
            season=race.season,
            round=race.round,
            race_name=race.race_name,
            circuit=CircuitResponse(
                circuit_id=race.circuit.circuit_id,
                circuit_name=race.circuit.circuit_name,
                locality=race.circuit.location.locality,
                country=race.circuit.location.country,
            ),
            date=race.date,
            time=race.time,
            race_date_time=race.race_date_time,
            is_upcoming=race.is_upcoming_at(now),
            sessions=[SessionResponse.from_session(s) for s in race.sessions],
        )


class RaceListResponse(BaseModel):
    """Race list response, optionally flagged as stale."""

    items: list[RaceResponse]
    total: int
    last_sync_date: datetime | None = None
    error: str | None = None
    retry_after: int | None = None
