"""Single race detail: sessions, countdowns, sharing and reminders."""

from datetime import datetime

from f1countdown.schemas.race import Race
from f1countdown.schemas.session import Session
from f1countdown.services import countdown
from f1countdown.services.data_service import DataService
from f1countdown.services.notification_service import NotificationService
from f1countdown.services.preferences_service import PreferencesService
from f1countdown.timeutils import Clock, utcnow


def _season_of(race_id: str) -> int | None:
    season, _, _ = race_id.partition("-")
    return int(season) if season.isdigit() else None


def share_text(race: Race) -> str:
    start = race.race_date_time
    when = f"{start:%B} {start.day}, {start:%Y} at {start:%H:%M} UTC" if start else "TBA"
    return (
        f"🏎️ {race.race_name}\n"
        f"📍 {race.circuit.circuit_name}, {race.circuit.location.locality}\n"
        f"📅 {when}\n"
        "Download F1 Countdown to never miss a race!"
    )


class RaceDetailService:
    """Service for the race detail screen."""

    def __init__(
        self,
        data_service: DataService,
        preferences: PreferencesService,
        notifications: NotificationService,
        clock: Clock = utcnow,
    ):
        self.data_service = data_service
        self.preferences = preferences
        self.notifications = notifications
        self._clock = clock

    async def load_race(self, race_id: str) -> Race | None:
        """Load a race from the cache, fetching its season if it is missing."""
        race = await self.data_service.get_cached_race(race_id)
        if race is not None:
            return race

        season = _season_of(race_id)
        if season is None:
            return None
        if not self.data_service.should_refresh(season):
            # Season synced recently; the round does not exist
            return None
        await self.data_service.fetch_and_cache_races(season)
        return await self.data_service.get_cached_race(race_id)

    def next_session(self, race: Race, now: datetime | None = None) -> Session | None:
        now = now or self._clock()
        for session in race.sessions:
            if session.date_time is not None and session.date_time > now:
                return session
        return None

    def session_countdown(self, session: Session, now: datetime | None = None) -> str:
        return countdown.session_countdown_string(session.date_time, now or self._clock())

    def is_session_completed(self, session: Session, now: datetime | None = None) -> bool:
        if session.date_time is None:
            return False
        return session.date_time < (now or self._clock())

    async def schedule_notifications(self, race: Race) -> list[str]:
        preferences = await self.preferences.get_response()
        return await self.notifications.schedule_for_preferences(
            race, preferences, self._clock()
        )

    async def cancel_notifications(self, race: Race) -> list[str]:
        return await self.notifications.cancel_notifications_for_race(race.id)

    async def toggle_favorite(self, race: Race) -> bool:
        return await self.preferences.toggle_favorite_circuit(race.circuit.circuit_id)
