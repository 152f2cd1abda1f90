"""User preference enums and schemas."""

from datetime import datetime, timedelta
from enum import Enum

from pydantic import Field

from f1countdown.schemas.common import BaseSchema, TimestampSchema
from f1countdown.schemas.session import SessionType
from f1countdown.timeutils import ensure_utc


class NotificationTiming(str, Enum):
    """How long before a session to notify."""

    AT_RACE_TIME = "at_race_time"
    ONE_HOUR_BEFORE = "one_hour"
    TWO_HOURS_BEFORE = "two_hours"
    ONE_DAY_BEFORE = "one_day"

    @property
    def display_name(self) -> str:
        return {
            NotificationTiming.AT_RACE_TIME: "At race time",
            NotificationTiming.ONE_HOUR_BEFORE: "1 hour before",
            NotificationTiming.TWO_HOURS_BEFORE: "2 hours before",
            NotificationTiming.ONE_DAY_BEFORE: "1 day before",
        }[self]

    @property
    def seconds_before(self) -> int:
        return {
            NotificationTiming.AT_RACE_TIME: 0,
            NotificationTiming.ONE_HOUR_BEFORE: 3600,
            NotificationTiming.TWO_HOURS_BEFORE: 7200,
            NotificationTiming.ONE_DAY_BEFORE: 86400,
        }[self]

    @classmethod
    def from_advance_minutes(cls, minutes: int) -> "NotificationTiming":
        return {
            0: cls.AT_RACE_TIME,
            60: cls.ONE_HOUR_BEFORE,
            120: cls.TWO_HOURS_BEFORE,
            1440: cls.ONE_DAY_BEFORE,
        }.get(minutes, cls.ONE_HOUR_BEFORE)


class SessionNotificationType(str, Enum):
    """Session groups a user can opt into notifications for."""

    RACE = "race"
    QUALIFYING = "qualifying"
    SPRINT = "sprint"
    PRACTICE = "practice"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def for_session(cls, session_type: SessionType) -> "SessionNotificationType":
        if session_type.is_practice:
            return cls.PRACTICE
        return {
            SessionType.RACE: cls.RACE,
            SessionType.QUALIFYING: cls.QUALIFYING,
            SessionType.SPRINT: cls.SPRINT,
        }[session_type]


class AppTheme(str, Enum):
    SYSTEM = "system"
    LIGHT = "light"
    DARK = "dark"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class TimeZoneMode(str, Enum):
    LOCAL = "local"
    CIRCUIT = "circuit"


class PreferencesResponse(TimestampSchema):
    """Preferences as exposed to the presentation layer."""

    notifications_enabled: bool
    notification_timings: list[NotificationTiming]
    session_notification_types: list[SessionNotificationType]
    notify_before_session: bool
    sound_enabled: bool
    theme: AppTheme
    show_completed_races: bool
    show_session_times: bool
    time_zone_mode: TimeZoneMode
    auto_refresh_enabled: bool
    refresh_interval_minutes: int
    last_refresh_date: datetime | None = None
    favorite_circuit_ids: list[str] = Field(default_factory=list)
    favorite_seasons: list[str] = Field(default_factory=list)

    def should_notify(self, session_type: SessionType) -> bool:
        """Whether the user wants notifications for this kind of session."""
        if not self.notifications_enabled:
            return False
        return SessionNotificationType.for_session(session_type) in self.session_notification_types

    def is_favorite_circuit(self, circuit_id: str) -> bool:
        return circuit_id in self.favorite_circuit_ids

    def is_favorite_season(self, season: str) -> bool:
        return season in self.favorite_seasons

    def is_refresh_due(self, now: datetime) -> bool:
        if not self.auto_refresh_enabled:
            return False
        if self.last_refresh_date is None:
            return True
        elapsed = now - ensure_utc(self.last_refresh_date)
        return elapsed >= timedelta(minutes=self.refresh_interval_minutes)


class PreferencesUpdate(BaseSchema):
    """Partial preferences update."""

    notifications_enabled: bool | None = None
    notification_timings: list[NotificationTiming] | None = None
    session_notification_types: list[SessionNotificationType] | None = None
    notify_before_session: bool | None = None
    sound_enabled: bool | None = None
    theme: AppTheme | None = None
    show_completed_races: bool | None = None
    show_session_times: bool | None = None
    time_zone_mode: TimeZoneMode | None = None
    auto_refresh_enabled: bool | None = None
    refresh_interval_minutes: int | None = Field(None, ge=1, le=1440)
