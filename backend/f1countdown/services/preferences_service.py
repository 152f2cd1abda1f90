"""User preferences service."""

from collections.abc import Iterable
from datetime import datetime
from enum import Enum
from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from f1countdown.api_logging import get_logger
from f1countdown.models import UserPreferences
from f1countdown.repositories import PreferencesRepository
from f1countdown.schemas.preferences import (
    AppTheme,
    NotificationTiming,
    PreferencesResponse,
    PreferencesUpdate,
    SessionNotificationType,
    TimeZoneMode,
)
from f1countdown.schemas.session import SessionType
from f1countdown.timeutils import Clock, ensure_utc, utcnow

logger = get_logger("services.preferences")

E = TypeVar("E", bound=Enum)


def _parse_enums(enum_type: type[E], values: Iterable[str]) -> list[E]:
    # Unknown stored values are dropped
    parsed = []
    for value in values or []:
        try:
            parsed.append(enum_type(value))
        except ValueError:
            logger.warning("Ignoring unknown %s value %r", enum_type.__name__, value)
    return parsed


def _parse_enum(enum_type: type[E], value: str, default: E) -> E:
    try:
        return enum_type(value)
    except ValueError:
        return default


def _toggle(values: list[str], item: str) -> tuple[list[str], bool]:
    if item in values:
        return [v for v in values if v != item], False
    return [*values, item], True


class PreferencesService:
    """Service for the single-row user preferences."""

    def __init__(self, session: AsyncSession, clock: Clock = utcnow):
        self.session = session
        self.repo = PreferencesRepository(session)
        self._clock = clock

    async def get(self) -> UserPreferences:
        """Load the preferences row, creating it with defaults on first use."""
        preferences, created = await self.repo.get_or_create()
        if created:
            logger.info("Created default user preferences")
        return preferences

    async def get_response(self) -> PreferencesResponse:
        return self.to_response(await self.get())

    @staticmethod
    def to_response(preferences: UserPreferences) -> PreferencesResponse:
        return PreferencesResponse(
            notifications_enabled=preferences.notifications_enabled,
            notification_timings=_parse_enums(
                NotificationTiming, preferences.notification_timings
            ),
            session_notification_types=_parse_enums(
                SessionNotificationType, preferences.session_notification_types
            ),
            notify_before_session=preferences.notify_before_session,
            sound_enabled=preferences.sound_enabled,
            theme=_parse_enum(AppTheme, preferences.theme, AppTheme.SYSTEM),
            show_completed_races=preferences.show_completed_races,
            show_session_times=preferences.show_session_times,
            time_zone_mode=_parse_enum(
                TimeZoneMode, preferences.time_zone_mode, TimeZoneMode.LOCAL
            ),
            auto_refresh_enabled=preferences.auto_refresh_enabled,
            refresh_interval_minutes=preferences.refresh_interval_minutes,
            last_refresh_date=(
                ensure_utc(preferences.last_refresh_date)
                if preferences.last_refresh_date is not None
                else None
            ),
            favorite_circuit_ids=list(preferences.favorite_circuit_ids or []),
            favorite_seasons=list(preferences.favorite_seasons or []),
            created_at=ensure_utc(preferences.created_at),
            updated_at=ensure_utc(preferences.updated_at),
        )

    async def _save(self, preferences: UserPreferences) -> UserPreferences:
        preferences.updated_at = self._clock()
        await self.session.flush()
        await self.session.refresh(preferences)
        return preferences

    # ── Mutations ──────────────────────────────────────────────

    async def update(self, data: PreferencesUpdate) -> UserPreferences:
        """Apply a partial update."""
        preferences = await self.get()
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is None:
                continue
            if isinstance(value, list):
                value = [v.value if isinstance(v, Enum) else v for v in value]
            elif isinstance(value, Enum):
                value = value.value
            setattr(preferences, key, value)
        return await self._save(preferences)

    async def toggle_notifications(self) -> bool:
        preferences = await self.get()
        preferences.notifications_enabled = not preferences.notifications_enabled
        await self._save(preferences)
        return preferences.notifications_enabled

    async def update_notification_timings(
        self, timings: Iterable[NotificationTiming]
    ) -> UserPreferences:
        preferences = await self.get()
        preferences.notification_timings = [t.value for t in timings]
        return await self._save(preferences)

    async def update_session_notification_types(
        self, types: Iterable[SessionNotificationType]
    ) -> UserPreferences:
        preferences = await self.get()
        preferences.session_notification_types = [t.value for t in types]
        return await self._save(preferences)

    async def update_theme(self, theme: AppTheme) -> UserPreferences:
        preferences = await self.get()
        preferences.theme = theme.value
        return await self._save(preferences)

    async def toggle_show_completed_races(self) -> bool:
        preferences = await self.get()
        preferences.show_completed_races = not preferences.show_completed_races
        await self._save(preferences)
        return preferences.show_completed_races

    async def toggle_favorite_circuit(self, circuit_id: str) -> bool:
        """Toggle a circuit favorite. Returns whether it is now a favorite."""
        preferences = await self.get()
        preferences.favorite_circuit_ids, added = _toggle(
            list(preferences.favorite_circuit_ids or []), circuit_id
        )
        await self._save(preferences)
        return added

    async def toggle_favorite_season(self, season: str) -> bool:
        preferences = await self.get()
        preferences.favorite_seasons, added = _toggle(
            list(preferences.favorite_seasons or []), season
        )
        await self._save(preferences)
        return added

    async def update_last_refresh(self, when: datetime | None = None) -> UserPreferences:
        preferences = await self.get()
        preferences.last_refresh_date = when or self._clock()
        return await self._save(preferences)

    # ── Queries ────────────────────────────────────────────────

    async def should_notify(self, session_type: SessionType) -> bool:
        return (await self.get_response()).should_notify(session_type)

    async def is_favorite_circuit(self, circuit_id: str) -> bool:
        return (await self.get_response()).is_favorite_circuit(circuit_id)

    async def is_refresh_due(self, now: datetime | None = None) -> bool:
        return (await self.get_response()).is_refresh_due(now or self._clock())
