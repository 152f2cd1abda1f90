"""Race list loading, filtering and search."""

from collections.abc import Collection
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from f1countdown.api_logging import get_logger
from f1countdown.exceptions import DataServiceError, SyncFailedError
from f1countdown.schemas.race import Race
from f1countdown.services import countdown
from f1countdown.services.data_service import DataService
from f1countdown.timeutils import Clock, utcnow

logger = get_logger("services.race_list")

SEASON_HISTORY = 5


class RaceFilterMode(str, Enum):
    ALL = "all"
    UPCOMING = "upcoming"
    COMPLETED = "completed"
    FAVORITES = "favorites"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


@dataclass
class RaceListState:
    """Races for one season plus any error from the last refresh.

    ``error_message`` is set only when there is nothing to show; ``warning``
    accompanies cached races that could not be refreshed.
    """

    races: list[Race] = field(default_factory=list)
    filtered: list[Race] = field(default_factory=list)
    error_message: str | None = None
    warning: str | None = None
    retry_after: int | None = None

    @property
    def stale(self) -> bool:
        return self.warning is not None


def _matches(race: Race, query: str) -> bool:
    fields = (
        race.race_name,
        race.circuit.circuit_name,
        race.circuit.location.locality,
        race.circuit.location.country,
    )
    return any(query in value.lower() for value in fields)


def apply_filter(
    races: list[Race],
    mode: RaceFilterMode = RaceFilterMode.ALL,
    query: str = "",
    favorite_circuit_ids: Collection[str] = (),
    now: datetime | None = None,
) -> list[Race]:
    """Filter by mode, then by a case-insensitive search query."""
    now = now or utcnow()
    result = list(races)

    if mode is RaceFilterMode.UPCOMING:
        result = [r for r in result if r.is_upcoming_at(now)]
    elif mode is RaceFilterMode.COMPLETED:
        result = [r for r in result if not r.is_upcoming_at(now)]
    elif mode is RaceFilterMode.FAVORITES:
        result = [r for r in result if r.circuit.circuit_id in favorite_circuit_ids]

    query = query.strip().lower()
    if query:
        result = [r for r in result if _matches(r, query)]
    return result


def available_seasons(now: datetime | None = None) -> list[int]:
    """Current season and the five before it, newest first."""
    year = (now or utcnow()).year
    return list(range(year, year - SEASON_HISTORY - 1, -1))


def countdown_string(race: Race, now: datetime | None = None) -> str:
    return countdown.race_countdown_string(race.race_date_time, now or utcnow())


class RaceListService:
    """Cache-first loading of a season's races."""

    def __init__(self, data_service: DataService, clock: Clock = utcnow):
        self.data_service = data_service
        self._clock = clock

    async def load(
        self,
        season: int | None = None,
        mode: RaceFilterMode = RaceFilterMode.ALL,
        query: str = "",
        favorite_circuit_ids: Collection[str] = (),
    ) -> RaceListState:
        """Show cached races, then replace them with a network refresh if it succeeds."""
        now = self._clock()
        season = season or now.year
        state = RaceListState()

        state.races = await self.data_service.get_cached_races(str(season))
        try:
            state.races = await self.data_service.fetch_and_cache_races(season)
        except DataServiceError as exc:
            logger.warning("Refresh of season %s failed: %s", season, exc)
            if state.races:
                state.warning = str(exc)
            else:
                state.error_message = str(exc)
            if isinstance(exc, SyncFailedError):
                state.retry_after = exc.retry_after

        state.filtered = apply_filter(state.races, mode, query, favorite_circuit_ids, now)
        return state
