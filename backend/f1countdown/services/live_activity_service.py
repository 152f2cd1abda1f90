"""Live activity state for a race weekend in progress."""

from datetime import datetime, timedelta
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from f1countdown.api_logging import get_logger
from f1countdown.schemas.race import Race
from f1countdown.schemas.timeline import EventStatus
from f1countdown.services.entitlements import (
    EntitlementService,
    ProFeature,
    require_feature,
)
from f1countdown.services.timeline_service import TimelineService
from f1countdown.timeutils import Clock, utcnow

logger = get_logger("services.live_activity")


class LiveActivityState(BaseModel):
    """Payload pushed to the activity sink."""

    model_config = ConfigDict(frozen=True)

    race_id: str
    race_name: str
    circuit_name: str
    country_flag: str
    seconds_remaining: int
    status: EventStatus
    countdown: str
    current_session: str | None = None


class ActivitySink(Protocol):
    async def update(self, state: LiveActivityState) -> None: ...


class InMemoryActivitySink:
    """Keeps the last pushed state in process memory."""

    def __init__(self):
        self.states: list[LiveActivityState] = []

    async def update(self, state: LiveActivityState) -> None:
        self.states.append(state)


class LiveActivityService:
    """Pushes timeline state for the current race to an activity sink."""

    def __init__(
        self,
        timeline: TimelineService,
        entitlements: EntitlementService,
        sink: ActivitySink,
        clock: Clock = utcnow,
    ):
        self.timeline = timeline
        self.entitlements = entitlements
        self.sink = sink
        self._clock = clock
        self.current_state: LiveActivityState | None = None

    def current_session_name(self, race: Race, now: datetime) -> str | None:
        """The session in progress at ``now``, else the next one to start."""
        window = timedelta(seconds=self.timeline.settings.live_window_seconds)
        for session in race.sessions:
            start = session.date_time
            if start is not None and now < start + window:
                return session.type.display_name
        return None

    async def update(self, now: datetime | None = None) -> LiveActivityState | None:
        """Push the current race's state; None when no race is upcoming or live."""
        require_feature(self.entitlements, ProFeature.LIVE_ACTIVITIES)
        now = now or self._clock()

        race = self.timeline.current_race(now)
        entry = self.timeline.get_timeline(now).entries[0]
        if race is None or entry.next_race is None or entry.countdown is None:
            return None

        state = LiveActivityState(
            race_id=entry.next_race.id,
            race_name=entry.next_race.race_name,
            circuit_name=entry.next_race.circuit_name,
            country_flag=entry.next_race.country_flag,
            seconds_remaining=entry.countdown.total_seconds,
            status=entry.countdown.status,
            countdown=entry.countdown.display,
            current_session=self.current_session_name(race, now),
        )
        await self.sink.update(state)
        self.current_state = state
        return state

    async def end(self) -> LiveActivityState | None:
        """Push a finished state for the last reported race."""
        if self.current_state is None:
            return None
        state = self.current_state.model_copy(
            update={
                "seconds_remaining": 0,
                "status": EventStatus.FINISHED,
                "countdown": "Finished",
                "current_session": None,
            }
        )
        await self.sink.update(state)
        self.current_state = None
        logger.info("Live activity ended for %s", state.race_id)
        return state
