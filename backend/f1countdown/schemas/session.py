"""Session schemas and timestamp parsing."""

from datetime import date, datetime, time, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict


class SessionType(str, Enum):
    """Timed event within a race weekend."""

    FP1 = "FirstPractice"
    FP2 = "SecondPractice"
    FP3 = "ThirdPractice"
    QUALIFYING = "Qualifying"
    SPRINT = "Sprint"
    RACE = "Race"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def short_name(self) -> str:
        return _SHORT_NAMES[self]

    @property
    def is_practice(self) -> bool:
        return self in (SessionType.FP1, SessionType.FP2, SessionType.FP3)


_DISPLAY_NAMES = {
    SessionType.FP1: "Free Practice 1",
    SessionType.FP2: "Free Practice 2",
    SessionType.FP3: "Free Practice 3",
    SessionType.QUALIFYING: "Qualifying",
    SessionType.SPRINT: "Sprint",
    SessionType.RACE: "Race",
}

_SHORT_NAMES = {
    SessionType.FP1: "FP1",
    SessionType.FP2: "FP2",
    SessionType.FP3: "FP3",
    SessionType.QUALIFYING: "Q",
    SessionType.SPRINT: "Sprint",
    SessionType.RACE: "Race",
}


def parse_event_datetime(date_str: str, time_str: str | None = None) -> datetime | None:
    """Combine an API date and optional time into an aware UTC datetime.

    ``date_str`` is ``YYYY-MM-DD`` and ``time_str`` is ``HH:MM:SSZ``. Without
    a time the result is midnight UTC. Unparseable input returns ``None``.
    """
    try:
        day = date.fromisoformat(date_str)
    except (TypeError, ValueError):
        return None

    if not time_str:
        return datetime.combine(day, time.min, tzinfo=timezone.utc)

    raw = time_str.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        clock = time.fromisoformat(raw)
    except ValueError:
        return None

    combined = datetime.combine(day, clock.replace(tzinfo=None))
    if clock.tzinfo is None:
        return combined.replace(tzinfo=timezone.utc)
    return combined.replace(tzinfo=clock.tzinfo).astimezone(timezone.utc)


class SessionData(BaseModel):
    """Date and optional time block as sent by the API."""

    model_config = ConfigDict(frozen=True)

    date: str
    time: str | None = None


class Session(BaseModel):
    """One session of a race weekend, derived from a Race."""

    model_config = ConfigDict(frozen=True)

    type: SessionType
    date: str
    time: str | None = None

    @property
    def id(self) -> str:
        return f"{self.type.value}-{self.date}-{self.time or ''}"

    @property
    def date_time(self) -> datetime | None:
        return parse_event_datetime(self.date, self.time)
