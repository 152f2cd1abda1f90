"""Synchronization of the remote schedule with the local store."""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta

from f1countdown.api_logging import get_logger, log_service_call
from f1countdown.config import Settings, get_settings
from f1countdown.exceptions import (
    APIError,
    CacheError,
    DataServiceError,
    NetworkError,
    NetworkUnavailableError,
    SyncFailedError,
)
from f1countdown.fetchers.base import DataFetcher
from f1countdown.repositories.store import RaceStore
from f1countdown.schemas.race import Race
from f1countdown.timeutils import Clock, utcnow

logger = get_logger("services.data")

CURRENT_SCOPE = "current"


@dataclass(frozen=True)
class BackgroundRefreshResult:
    success: bool
    next_refresh_at: datetime


class DataService:
    """
    The single source of races for every app surface.

    Reads come from the local store and an in-memory copy of the last loaded
    list. Network refreshes are serialized per season scope; a caller that
    queued behind an in-flight refresh of the same scope gets that refresh's
    result instead of spending another request.
    """

    def __init__(
        self,
        store: RaceStore,
        fetcher: DataFetcher,
        settings: Settings | None = None,
        clock: Clock = utcnow,
    ):
        self.store = store
        self.fetcher = fetcher
        self.settings = settings or get_settings()
        self._clock = clock

        self.cached_races: list[Race] = []
        self.last_sync_date: datetime | None = None
        self.last_error: DataServiceError | None = None
        self.is_network_available = True

        self._in_flight = 0
        self._scope_locks: dict[str, asyncio.Lock] = {}
        self._scope_generation: dict[str, int] = {}
        self._scope_results: dict[str, list[Race]] = {}
        self._scope_synced_at: dict[str, datetime] = {}

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    @property
    def minimum_refresh_interval(self) -> timedelta:
        return timedelta(seconds=self.settings.minimum_refresh_interval_seconds)

    @staticmethod
    def _scope_of(year: int | None) -> str:
        return str(year) if year is not None else CURRENT_SCOPE

    def _lock_for(self, scope: str) -> asyncio.Lock:
        lock = self._scope_locks.get(scope)
        if lock is None:
            lock = self._scope_locks[scope] = asyncio.Lock()
        return lock

    # ── Network refresh ────────────────────────────────────────

    @log_service_call
    async def fetch_and_cache_races(self, year: int | None = None) -> list[Race]:
        """
        Fetch a season (current when ``year`` is None) and persist it.

        Raises:
            NetworkUnavailableError: the upstream API could not be reached
            SyncFailedError: any other fetch or persistence failure
        """
        scope = self._scope_of(year)
        generation = self._scope_generation.get(scope, 0)

        async with self._lock_for(scope):
            shared = self._scope_results.get(scope)
            if self._scope_generation.get(scope, 0) != generation and shared is not None:
                # Another caller refreshed this scope while we waited
                return list(shared)

            self._in_flight += 1
            self.last_error = None
            try:
                races = await self._fetch_and_store(year)
            except DataServiceError as exc:
                self.last_error = exc
                raise
            finally:
                self._in_flight -= 1

            self._scope_generation[scope] = generation + 1
            self._scope_results[scope] = races
            self.cached_races = races
            self.last_sync_date = self._scope_synced_at[scope] = self._clock()
            logger.info("Synced %d races for %s", len(races), scope)
            return list(races)

    async def _fetch_and_store(self, year: int | None) -> list[Race]:
        try:
            if year is not None:
                races = await self.fetcher.fetch_season(year)
            else:
                races = await self.fetcher.fetch_current_season()
        except NetworkError as exc:
            self.is_network_available = False
            logger.warning("Network unavailable, serving cached races: %s", exc.cause)
            raise NetworkUnavailableError(exc) from exc
        except APIError as exc:
            raise SyncFailedError(exc) from exc

        self.is_network_available = True
        try:
            await self.store.upsert_races(races)
        except CacheError as exc:
            raise SyncFailedError(exc) from exc
        return races

    def should_refresh(self, year: int | None = None, now: datetime | None = None) -> bool:
        """True unless the season scope of ``year`` was synced within the interval."""
        synced_at = self._scope_synced_at.get(self._scope_of(year))
        if synced_at is None:
            return True
        now = now or self._clock()
        return now - synced_at >= self.minimum_refresh_interval

    async def refresh_if_needed(self) -> list[Race] | None:
        """Refresh the current season unless the last sync is recent."""
        if not self.should_refresh():
            return None
        return await self.fetch_and_cache_races()

    async def handle_background_refresh(self) -> BackgroundRefreshResult:
        """Run a full refresh on behalf of a background scheduler."""
        next_refresh_at = self._clock() + self.minimum_refresh_interval
        try:
            await self.fetch_and_cache_races()
        except DataServiceError as exc:
            logger.warning("Background refresh failed: %s", exc)
            return BackgroundRefreshResult(success=False, next_refresh_at=next_refresh_at)
        return BackgroundRefreshResult(success=True, next_refresh_at=next_refresh_at)

    # ── Local reads ────────────────────────────────────────────

    async def get_cached_races(self, season: str | None = None) -> list[Race]:
        races = await self.store.list_races(season)
        self.cached_races = races
        return list(races)

    async def get_cached_race(self, race_id: str) -> Race | None:
        return await self.store.get_race(race_id)

    async def load_cached_races(self) -> list[Race]:
        """Warm the in-memory copy from the store at startup."""
        return await self.get_cached_races()

    @log_service_call
    async def clear_cache(self) -> None:
        await self.store.clear()
        self.cached_races = []
        self.last_sync_date = None
        self._scope_results.clear()
        self._scope_synced_at.clear()

    # ── In-memory views ────────────────────────────────────────

    def get_upcoming_races(self, now: datetime | None = None) -> list[Race]:
        now = now or self._clock()
        return [race for race in self.cached_races if race.is_upcoming_at(now)]

    def get_completed_races(self, now: datetime | None = None) -> list[Race]:
        now = now or self._clock()
        return [race for race in self.cached_races if not race.is_upcoming_at(now)]

    def get_next_race(self, now: datetime | None = None) -> Race | None:
        """Earliest upcoming race; races without a parseable date never qualify."""
        upcoming = self.get_upcoming_races(now)
        if not upcoming:
            return None
        return min(upcoming, key=lambda race: race.race_date_time)
