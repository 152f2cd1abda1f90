"""Tests for the live activity service."""

from datetime import datetime, timezone

import pytest

from f1countdown.exceptions import ProFeatureLockedError
from f1countdown.schemas import EventStatus
from f1countdown.services import (
    LiveActivityService,
    StaticEntitlements,
    TimelineService,
)


class RecordingSink:
    def __init__(self):
        self.states = []

    async def update(self, state):
        self.states.append(state)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def timeline(data_service, season_2024, settings, clock):
    data_service.cached_races = season_2024
    return TimelineService(data_service, settings, clock)


@pytest.fixture
def service(timeline, sink, clock):
    return LiveActivityService(timeline, StaticEntitlements(is_pro_user=True), sink, clock)


class TestLiveActivityService:
    @pytest.mark.asyncio
    async def test_requires_pro(self, timeline, sink, clock):
        service = LiveActivityService(timeline, StaticEntitlements(), sink, clock)

        with pytest.raises(ProFeatureLockedError):
            await service.update()

        assert sink.states == []

    @pytest.mark.asyncio
    async def test_update_before_race(self, service, sink):
        state = await service.update()

        assert state.race_id == "2024-1"
        assert state.country_flag == "🇧🇭"
        assert state.seconds_remaining == 7200
        assert state.status is EventStatus.UPCOMING
        assert state.countdown == "2h 0m"
        assert state.current_session == "Race"
        assert sink.states == [state]

    @pytest.mark.asyncio
    async def test_update_during_race(self, service):
        state = await service.update(datetime(2024, 3, 2, 15, 30, tzinfo=timezone.utc))

        assert state.status is EventStatus.LIVE
        assert state.countdown == "LIVE"
        assert state.seconds_remaining == 0

    @pytest.mark.asyncio
    async def test_current_session_during_weekend(self, service, bahrain):
        friday = datetime(2024, 2, 29, 12, 0, tzinfo=timezone.utc)

        assert service.current_session_name(bahrain, friday) == "Free Practice 1"

    @pytest.mark.asyncio
    async def test_nothing_after_season(self, service, sink):
        assert await service.update(datetime(2025, 1, 1, tzinfo=timezone.utc)) is None
        assert sink.states == []

    @pytest.mark.asyncio
    async def test_end(self, service, sink):
        await service.update()

        ended = await service.end()

        assert ended.status is EventStatus.FINISHED
        assert ended.countdown == "Finished"
        assert service.current_state is None
        assert await service.end() is None
        assert len(sink.states) == 2
