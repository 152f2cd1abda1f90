"""Tests for countdown math, live classification and polling urgency."""

from datetime import datetime, timedelta, timezone

import pytest

from f1countdown.schemas import EventStatus
from f1countdown.services import countdown
from f1countdown.services.countdown import (
    DAY,
    HOUR,
    MINUTE,
    WEEK,
    Countdown,
    classify,
    recommended_delay,
)

TARGET = datetime(2024, 3, 2, 15, 0, tzinfo=timezone.utc)


def at(**kwargs: float) -> datetime:
    """Instant relative to the target; negative offsets are before it."""
    return TARGET + timedelta(**kwargs)


class TestCountdown:
    """Tests for the remaining-time breakdown."""

    def test_two_hours_before(self):
        c = Countdown.between(datetime(2024, 3, 2, 13, 0, tzinfo=timezone.utc), TARGET)

        assert (c.days, c.hours, c.minutes, c.seconds) == (0, 2, 0, 0)

    def test_one_second_short_of_two_hours(self):
        c = Countdown.between(at(hours=-2, seconds=1), TARGET)

        assert (c.days, c.hours, c.minutes, c.seconds) == (0, 1, 59, 59)

    def test_days(self):
        c = Countdown.between(at(days=-3, hours=-4, minutes=-5, seconds=-6), TARGET)

        assert (c.days, c.hours, c.minutes, c.seconds) == (3, 4, 5, 6)
        assert c.total_seconds == 3 * DAY + 4 * HOUR + 5 * MINUTE + 6

    @pytest.mark.parametrize("offset", [-10 * DAY, -1, 0, 1, 3 * HOUR, 90 * DAY])
    def test_never_negative(self, offset):
        c = Countdown.between(at(seconds=offset), TARGET)

        assert min(c.days, c.hours, c.minutes, c.seconds, c.total_seconds) >= 0
        assert c.days * DAY + c.hours * HOUR + c.minutes * MINUTE + c.seconds <= c.total_seconds

    def test_after_target_is_zero(self):
        assert Countdown.between(at(minutes=30), TARGET).total_seconds == 0


class TestClassify:
    """Tests for the live window."""

    def test_upcoming_before_target(self):
        assert classify(at(hours=-2), TARGET) is EventStatus.UPCOMING
        assert classify(at(seconds=-1), TARGET) is EventStatus.UPCOMING

    def test_live_from_target(self):
        assert classify(TARGET, TARGET) is EventStatus.LIVE
        assert classify(at(minutes=30), TARGET) is EventStatus.LIVE
        assert classify(at(hours=2, seconds=-1), TARGET) is EventStatus.LIVE

    def test_finished_after_window(self):
        assert classify(at(hours=2), TARGET) is EventStatus.FINISHED
        assert classify(at(hours=3), TARGET) is EventStatus.FINISHED

    def test_custom_window(self):
        assert classify(at(minutes=45), TARGET, live_window_seconds=1800) is EventStatus.FINISHED


class TestRecommendedDelay:
    """Tests for the urgency table."""

    @pytest.mark.parametrize(
        "offset, expected",
        [
            (-30 * DAY, 6 * HOUR),
            (-WEEK, 6 * HOUR),
            (-WEEK + 1, HOUR),
            (-DAY, HOUR),
            (-DAY + 1, 15 * MINUTE),
            (-2 * HOUR, 15 * MINUTE),
            (-HOUR, 15 * MINUTE),
            (-HOUR + 1, MINUTE),
            (-1, MINUTE),
            (0, MINUTE),
            (HOUR, MINUTE),
        ],
    )
    def test_table(self, offset, expected):
        assert recommended_delay(at(seconds=offset), TARGET) == expected

    def test_no_target(self):
        assert recommended_delay(TARGET, None) == HOUR

    def test_monotonic_as_target_nears(self):
        offsets = range(-10 * DAY, 0, 600)
        delays = [recommended_delay(at(seconds=o), TARGET) for o in offsets]

        assert all(a >= b for a, b in zip(delays, delays[1:]))

    def test_next_check_in(self):
        now = at(hours=-2)

        assert countdown.next_check_in(now, TARGET) == now + timedelta(minutes=15)


class TestScenarios:
    """Bahrain 2024 at different points of race day."""

    def test_two_hours_before(self):
        now = datetime(2024, 3, 2, 13, 0, tzinfo=timezone.utc)

        assert classify(now, TARGET) is EventStatus.UPCOMING
        assert recommended_delay(now, TARGET) == 15 * MINUTE

    def test_half_an_hour_in(self):
        assert classify(datetime(2024, 3, 2, 15, 30, tzinfo=timezone.utc), TARGET) is (
            EventStatus.LIVE
        )

    def test_three_hours_after(self):
        assert classify(datetime(2024, 3, 2, 18, 0, tzinfo=timezone.utc), TARGET) is (
            EventStatus.FINISHED
        )


class TestDisplayStrings:
    """Tests for the countdown labels."""

    @pytest.mark.parametrize(
        "remaining, expected",
        [
            (0, "LIVE"),
            (-5, "LIVE"),
            (45, "45s"),
            (4 * MINUTE + 30, "4m 30s"),
            (2 * HOUR + 10 * MINUTE, "2h 10m"),
            (3 * DAY + 5 * HOUR + 59 * MINUTE, "3d 5h"),
        ],
    )
    def test_countdown_string(self, remaining, expected):
        assert countdown.countdown_string(remaining) == expected

    def test_short_countdown(self):
        assert countdown.short_countdown(3 * DAY + HOUR) == "3d"
        assert countdown.short_countdown(2 * HOUR + 10 * MINUTE) == "2h 10m"
        assert countdown.short_countdown(0) == "LIVE"

    def test_race_countdown_string(self):
        assert countdown.race_countdown_string(None, TARGET) == "Date TBA"
        assert countdown.race_countdown_string(TARGET, at(minutes=1)) == "Completed"
        assert countdown.race_countdown_string(TARGET, at(minutes=-42)) == "42m"
        assert countdown.race_countdown_string(TARGET, at(days=-2, hours=-3)) == "2d 3h"

    def test_session_countdown_string(self):
        assert countdown.session_countdown_string(None, TARGET) == "TBA"
        assert countdown.session_countdown_string(TARGET, TARGET) == "Completed"
        assert (
            countdown.session_countdown_string(TARGET, at(days=-1, hours=-2, minutes=-3))
            == "1d 2h 3m"
        )


class TestSnapshot:
    """Tests for countdown snapshots."""

    def test_upcoming(self):
        snap = countdown.snapshot(at(hours=-2), TARGET)

        assert snap.status is EventStatus.UPCOMING
        assert snap.total_seconds == 2 * HOUR
        assert snap.display == "2h 0m"

    def test_live(self):
        snap = countdown.snapshot(at(minutes=30), TARGET)

        assert snap.status is EventStatus.LIVE
        assert snap.total_seconds == 0
        assert snap.display == "LIVE"

    def test_finished(self):
        snap = countdown.snapshot(at(hours=3), TARGET)

        assert snap.status is EventStatus.FINISHED
        assert snap.display == snap.short_display == "Finished"
