"""User preferences model."""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from f1countdown.database import Base
from f1countdown.models.base import TimestampMixin
from f1countdown.schemas.preferences import (
    AppTheme,
    NotificationTiming,
    SessionNotificationType,
    TimeZoneMode,
)

PREFERENCES_ID = "user_preferences"


def default_notification_timings() -> list[str]:
    return [NotificationTiming.ONE_HOUR_BEFORE.value]


def default_session_types() -> list[str]:
    return [SessionNotificationType.RACE.value, SessionNotificationType.QUALIFYING.value]


class UserPreferences(Base, TimestampMixin):
    """Single-row preferences table."""

    __tablename__ = "user_preferences"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=PREFERENCES_ID)

    # Notification settings
    notifications_enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    notification_timings: Mapped[list[str]] = mapped_column(
        JSON, default=default_notification_timings
    )
    session_notification_types: Mapped[list[str]] = mapped_column(
        JSON, default=default_session_types
    )
    notify_before_session: Mapped[bool] = mapped_column(Boolean, default=True)
    sound_enabled: Mapped[bool] = mapped_column(Boolean, default=True)

    # Display settings
    theme: Mapped[str] = mapped_column(String(16), default=AppTheme.SYSTEM.value)
    show_completed_races: Mapped[bool] = mapped_column(Boolean, default=True)
    show_session_times: Mapped[bool] = mapped_column(Boolean, default=True)
    time_zone_mode: Mapped[str] = mapped_column(String(16), default=TimeZoneMode.LOCAL.value)

    # Data settings
    auto_refresh_enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    refresh_interval_minutes: Mapped[int] = mapped_column(Integer, default=60)
    last_refresh_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Favorites
    favorite_circuit_ids: Mapped[list[str]] = mapped_column(JSON, default=list)
    favorite_seasons: Mapped[list[str]] = mapped_column(JSON, default=list)

    def __repr__(self) -> str:
        return f"<UserPreferences(id='{self.id}', theme='{self.theme}')>"
