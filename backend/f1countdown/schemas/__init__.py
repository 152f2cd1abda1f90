"""Pydantic schemas."""

from f1countdown.schemas.api_response import APIResponse, MRData, RaceTable
from f1countdown.schemas.common import BaseSchema, TimestampSchema
from f1countdown.schemas.preferences import (
    AppTheme,
    NotificationTiming,
    PreferencesResponse,
    PreferencesUpdate,
    SessionNotificationType,
    TimeZoneMode,
)
from f1countdown.schemas.race import (
    Circuit,
    CircuitLocation,
    CircuitResponse,
    Race,
    RaceListResponse,
    RaceResponse,
    SessionResponse,
)
from f1countdown.schemas.session import (
    Session,
    SessionData,
    SessionType,
    parse_event_datetime,
)
from f1countdown.schemas.timeline import (
    CountdownSnapshot,
    EventStatus,
    Timeline,
    TimelineEntry,
    WidgetRaceData,
    country_flag,
)

__all__ = [
    # Common
    "BaseSchema",
    "TimestampSchema",
    # Wire envelope
    "APIResponse",
    "MRData",
    "RaceTable",
    # Race
    "Circuit",
    "CircuitLocation",
    "Race",
    "CircuitResponse",
    "RaceResponse",
    "RaceListResponse",
    "SessionResponse",
    # Session
    "Session",
    "SessionData",
    "SessionType",
    "parse_event_datetime",
    # Preferences
    "AppTheme",
    "NotificationTiming",
    "PreferencesResponse",
    "PreferencesUpdate",
    "SessionNotificationType",
    "TimeZoneMode",
    # Timeline
    "CountdownSnapshot",
    "EventStatus",
    "Timeline",
    "TimelineEntry",
    "WidgetRaceData",
    "country_flag",
]
