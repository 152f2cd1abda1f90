"""Notification planning for race sessions."""

import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol

from f1countdown.api_logging import get_logger
from f1countdown.exceptions import (
    InvalidNotificationDateError,
    NotificationsDisabledError,
    SchedulingFailedError,
)
from f1countdown.schemas.preferences import NotificationTiming, PreferencesResponse
from f1countdown.schemas.race import Race
from f1countdown.schemas.session import SessionType
from f1countdown.timeutils import Clock, utcnow

logger = get_logger("services.notifications")

REMIND_LATER_SECONDS = 900


class NotificationSink(Protocol):
    """Delivers local notifications; owned by the host platform."""

    async def schedule(self, identifier: str, fire_at: datetime, title: str, body: str) -> None: ...

    async def cancel(self, identifier: str) -> None: ...


@dataclass(frozen=True)
class PendingNotification:
    identifier: str
    fire_at: datetime
    title: str
    body: str


class InMemoryNotificationSink:
    """Keeps pending notifications in process memory."""

    def __init__(self):
        self.pending: dict[str, PendingNotification] = {}

    async def schedule(self, identifier: str, fire_at: datetime, title: str, body: str) -> None:
        self.pending[identifier] = PendingNotification(identifier, fire_at, title, body)

    async def cancel(self, identifier: str) -> None:
        self.pending.pop(identifier, None)


@dataclass(frozen=True)
class NotificationIdentifier:
    """Structured notification id: ``race-{race}-{session}-{timing}``."""

    race_id: str
    timing: NotificationTiming
    session_type: SessionType | None = None

    @property
    def identifier(self) -> str:
        if self.session_type is not None:
            return f"race-{self.race_id}-{self.session_type.value}-{self.timing.value}"
        return f"race-{self.race_id}-{self.timing.value}"

    def __str__(self) -> str:
        return self.identifier

    @classmethod
    def parse(cls, value: str) -> "NotificationIdentifier | None":
        """Parse an identifier, or return None if it is malformed.

        Race ids contain a hyphen themselves, so the timing and optional
        session type are read from the end.
        """
        prefix = "race-"
        if not value.startswith(prefix):
            return None
        head, sep, timing_token = value[len(prefix):].rpartition("-")
        if not sep or not head:
            return None
        try:
            timing = NotificationTiming(timing_token)
        except ValueError:
            return None

        session_type = None
        race_id = head
        rest, sep, session_token = head.rpartition("-")
        if sep and rest:
            try:
                session_type = SessionType(session_token)
                race_id = rest
            except ValueError:
                pass
        return cls(race_id=race_id, timing=timing, session_type=session_type)


def notification_body(session_type: SessionType, circuit_name: str, advance_minutes: int) -> str:
    if advance_minutes == 0:
        return f"{session_type.display_name} is starting now at {circuit_name}!"
    return f"{session_type.display_name} starts in {advance_minutes} minutes at {circuit_name}."


class NotificationService:
    """Computes fire times from sessions and preferences and hands them to a sink."""

    def __init__(self, sink: NotificationSink, clock: Clock = utcnow):
        self.sink = sink
        self._clock = clock
        self.scheduled_identifiers: set[str] = set()

    async def _deliver(self, identifier: str, fire_at: datetime, title: str, body: str) -> None:
        try:
            await self.sink.schedule(identifier, fire_at, title, body)
        except Exception as exc:
            raise SchedulingFailedError(exc) from exc
        self.scheduled_identifiers.add(identifier)
        logger.info("Scheduled %s at %s", identifier, fire_at.isoformat())

    async def schedule_race_notification(
        self,
        race: Race,
        advance_minutes: int,
        session_type: SessionType = SessionType.RACE,
        now: datetime | None = None,
    ) -> str:
        """
        Schedule one notification ahead of a session.

        Returns:
            The notification identifier

        Raises:
            InvalidNotificationDateError: the session is missing or the fire
                time is not in the future
        """
        now = now or self._clock()
        session = race.session(session_type)
        session_time = session.date_time if session is not None else None
        if session_time is None:
            raise InvalidNotificationDateError()

        fire_at = session_time - timedelta(minutes=advance_minutes)
        if fire_at <= now:
            raise InvalidNotificationDateError()

        identifier = NotificationIdentifier(
            race_id=race.id,
            timing=NotificationTiming.from_advance_minutes(advance_minutes),
            session_type=session_type,
        ).identifier
        await self._deliver(
            identifier,
            fire_at,
            f"🏎️ {race.race_name}",
            notification_body(session_type, race.circuit.circuit_name, advance_minutes),
        )
        return identifier

    async def schedule_race_notifications(
        self,
        race: Race,
        timings: Iterable[NotificationTiming],
        session_types: Iterable[SessionType] = (SessionType.RACE,),
        now: datetime | None = None,
    ) -> list[str]:
        """Schedule every timing for every session type, skipping past dates."""
        session_types = list(session_types)
        identifiers = []
        for timing in timings:
            advance_minutes = timing.seconds_before // 60
            for session_type in session_types:
                try:
                    identifiers.append(
                        await self.schedule_race_notification(
                            race, advance_minutes, session_type, now
                        )
                    )
                except InvalidNotificationDateError:
                    continue
        return identifiers

    async def schedule_for_preferences(
        self,
        race: Race,
        preferences: PreferencesResponse,
        now: datetime | None = None,
    ) -> list[str]:
        if not preferences.notifications_enabled:
            raise NotificationsDisabledError()
        session_types = [
            session.type for session in race.sessions if preferences.should_notify(session.type)
        ]
        return await self.schedule_race_notifications(
            race, preferences.notification_timings, session_types, now
        )

    async def schedule_remind_later(
        self,
        race_id: str,
        session_type: SessionType,
        session_time: datetime,
        now: datetime | None = None,
    ) -> str:
        """Remind again in 15 minutes, as long as the session has not started by then."""
        now = now or self._clock()
        fire_at = now + timedelta(seconds=REMIND_LATER_SECONDS)
        if fire_at >= session_time:
            raise InvalidNotificationDateError()

        identifier = f"remind-{race_id}-{session_type.value}-{uuid.uuid4()}"
        await self._deliver(
            identifier, fire_at, "🏎️ Reminder", "Your F1 session is starting soon!"
        )
        return identifier

    async def cancel_notification(self, identifier: str) -> None:
        await self.sink.cancel(identifier)
        self.scheduled_identifiers.discard(identifier)

    def notifications_for_race(self, race_id: str) -> list[str]:
        matches = []
        for identifier in self.scheduled_identifiers:
            parsed = NotificationIdentifier.parse(identifier)
            if parsed is not None and parsed.race_id == race_id:
                matches.append(identifier)
        return sorted(matches)

    async def cancel_notifications_for_race(self, race_id: str) -> list[str]:
        identifiers = self.notifications_for_race(race_id)
        for identifier in identifiers:
            await self.cancel_notification(identifier)
        return identifiers

    async def cancel_all(self) -> None:
        for identifier in sorted(self.scheduled_identifiers):
            await self.sink.cancel(identifier)
        self.scheduled_identifiers.clear()
