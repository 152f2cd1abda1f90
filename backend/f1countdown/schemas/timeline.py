"""Timeline snapshots handed to the widget host."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from f1countdown.schemas.race import Race

_COUNTRY_FLAGS = {
    "Abu Dhabi": "🇦🇪",
    "Australia": "🇦🇺",
    "Austria": "🇦🇹",
    "Azerbaijan": "🇦🇿",
    "Bahrain": "🇧🇭",
    "Belgium": "🇧🇪",
    "Brazil": "🇧🇷",
    "Canada": "🇨🇦",
    "China": "🇨🇳",
    "France": "🇫🇷",
    "Germany": "🇩🇪",
    "Hungary": "🇭🇺",
    "Italy": "🇮🇹",
    "Japan": "🇯🇵",
    "Mexico": "🇲🇽",
    "Monaco": "🇲🇨",
    "Netherlands": "🇳🇱",
    "Portugal": "🇵🇹",
    "Qatar": "🇶🇦",
    "Russia": "🇷🇺",
    "Saudi Arabia": "🇸🇦",
    "Singapore": "🇸🇬",
    "Spain": "🇪🇸",
    "Turkey": "🇹🇷",
    "UAE": "🇦🇪",
    "UK": "🇬🇧",
    "United Kingdom": "🇬🇧",
    "United States": "🇺🇸",
    "USA": "🇺🇸",
    "Vietnam": "🇻🇳",
}

DEFAULT_FLAG = "🏁"


def country_flag(country: str) -> str:
    """Flag emoji for a country as named by the API."""
    return _COUNTRY_FLAGS.get(country, DEFAULT_FLAG)


class EventStatus(str, Enum):
    """Display classification of an event relative to now."""

    UPCOMING = "upcoming"
    LIVE = "live"
    FINISHED = "finished"


class CountdownSnapshot(BaseModel):
    """Remaining time at one instant."""

    model_config = ConfigDict(frozen=True)

    total_seconds: int
    days: int
    hours: int
    minutes: int
    seconds: int
    status: EventStatus
    display: str
    short_display: str


class WidgetRaceData(BaseModel):
    """Lightweight race data for widget display."""

    model_config = ConfigDict(frozen=True)

    id: str
    race_name: str
    circuit_id: str
    circuit_name: str
    locality: str
    country: str
    country_flag: str
    race_date_time: datetime
    round: int

    @classmethod
    def from_race(cls, race: Race) -> "WidgetRaceData | None":
        """Widget payload for a race, or None if its start time is unknown."""
        race_time = race.race_date_time
        if race_time is None:
            return None
        return cls(
            id=race.id,
            race_name=race.race_name,
            circuit_id=race.circuit.circuit_id,
            circuit_name=race.circuit.circuit_name,
            locality=race.circuit.location.locality,
            country=race.circuit.location.country,
            country_flag=country_flag(race.circuit.location.country),
            race_date_time=race_time,
            round=race.round_number,
        )


class TimelineEntry(BaseModel):
    """Display snapshot valid from ``date`` on."""

    model_config = ConfigDict(frozen=True)

    date: datetime
    next_race: WidgetRaceData | None = None
    upcoming_races: list[WidgetRaceData] = Field(default_factory=list)
    countdown: CountdownSnapshot | None = None


class Timeline(BaseModel):
    """Snapshots plus the earliest time the host should ask again."""

    entries: list[TimelineEntry]
    next_update_date: datetime
