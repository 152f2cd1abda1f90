"""Widget timeline scheduling."""

from datetime import datetime, timedelta

from f1countdown.config import Settings, get_settings
from f1countdown.schemas.race import Race
from f1countdown.schemas.timeline import (
    EventStatus,
    Timeline,
    TimelineEntry,
    WidgetRaceData,
)
from f1countdown.services import countdown
from f1countdown.services.data_service import DataService
from f1countdown.timeutils import Clock, utcnow

UPCOMING_RACES_LIMIT = 3


class TimelineService:
    """
    Builds display snapshots for a host that only re-renders on its own cadence.

    Reads the data service's in-memory races only; it never triggers a fetch.
    """

    def __init__(
        self,
        data_service: DataService,
        settings: Settings | None = None,
        clock: Clock = utcnow,
    ):
        self.data_service = data_service
        self.settings = settings or get_settings()
        self._clock = clock

    def current_race(self, now: datetime) -> Race | None:
        """The race that is live at ``now``, else the next upcoming one."""
        candidates = []
        for race in self.data_service.cached_races:
            start = race.race_date_time
            if start is None:
                continue
            status = countdown.classify(now, start, self.settings.live_window_seconds)
            if status is not EventStatus.FINISHED:
                candidates.append(race)
        if not candidates:
            return None
        return min(candidates, key=lambda race: race.race_date_time)

    def upcoming_races(self, now: datetime) -> list[WidgetRaceData]:
        races = sorted(
            self.data_service.get_upcoming_races(now),
            key=lambda race: race.race_date_time,
        )
        widgets = [WidgetRaceData.from_race(race) for race in races]
        return [w for w in widgets if w is not None][:UPCOMING_RACES_LIMIT]

    def get_timeline(self, now: datetime | None = None) -> Timeline:
        now = now or self._clock()
        race = self.current_race(now)
        next_race = WidgetRaceData.from_race(race) if race is not None else None
        upcoming = self.upcoming_races(now)

        target = next_race.race_date_time if next_race is not None else None
        next_update_date = countdown.next_check_in(now, target)

        entries = [self._entry(now, next_race, upcoming)]

        if target is not None:
            horizon = self.settings.minute_snapshot_horizon_seconds
            if countdown.seconds_until(now, target) < horizon:
                step = timedelta(seconds=self.settings.snapshot_interval_seconds)
                entry_date = now + step
                while entry_date < next_update_date:
                    entries.append(self._entry(entry_date, next_race, upcoming))
                    entry_date += step

        return Timeline(entries=entries, next_update_date=next_update_date)

    def _entry(
        self,
        date: datetime,
        next_race: WidgetRaceData | None,
        upcoming: list[WidgetRaceData],
    ) -> TimelineEntry:
        snapshot = None
        if next_race is not None:
            snapshot = countdown.snapshot(
                date, next_race.race_date_time, self.settings.live_window_seconds
            )
        return TimelineEntry(
            date=date,
            next_race=next_race,
            upcoming_races=upcoming,
            countdown=snapshot,
        )
