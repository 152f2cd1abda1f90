"""Countdown breakdown, live classification and urgency-based polling."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from f1countdown.schemas.timeline import CountdownSnapshot, EventStatus

MINUTE = 60
HOUR = 3600
DAY = 86400
WEEK = 7 * DAY

LIVE_WINDOW_SECONDS = 2 * HOUR

# (time to target below, delay) checked in order
URGENCY_TABLE: tuple[tuple[int, int], ...] = (
    (HOUR, MINUTE),
    (DAY, 15 * MINUTE),
    (WEEK, HOUR),
)
STARTED_DELAY = MINUTE
DISTANT_DELAY = 6 * HOUR
NO_TARGET_DELAY = HOUR


@dataclass(frozen=True)
class Countdown:
    """Non-negative breakdown of the time left until a target."""

    total_seconds: int
    days: int
    hours: int
    minutes: int
    seconds: int

    @classmethod
    def from_seconds(cls, remaining: float) -> "Countdown":
        total = max(0, int(remaining))
        return cls(
            total_seconds=total,
            days=total // DAY,
            hours=(total % DAY) // HOUR,
            minutes=(total % HOUR) // MINUTE,
            seconds=total % MINUTE,
        )

    @classmethod
    def between(cls, now: datetime, target: datetime) -> "Countdown":
        return cls.from_seconds(seconds_until(now, target))


def seconds_until(now: datetime, target: datetime) -> float:
    """Signed seconds from ``now`` to ``target``; negative once passed."""
    return (target - now).total_seconds()


def classify(
    now: datetime,
    target: datetime,
    live_window_seconds: int = LIVE_WINDOW_SECONDS,
) -> EventStatus:
    """Upcoming before the target, live for the window after it, then finished."""
    if now < target:
        return EventStatus.UPCOMING
    if now < target + timedelta(seconds=live_window_seconds):
        return EventStatus.LIVE
    return EventStatus.FINISHED


def recommended_delay(now: datetime, target: datetime | None) -> int:
    """Seconds to wait before checking again, finer as the target nears."""
    if target is None:
        return NO_TARGET_DELAY

    remaining = seconds_until(now, target)
    if remaining <= 0:
        return STARTED_DELAY
    for below, delay in URGENCY_TABLE:
        if remaining < below:
            return delay
    return DISTANT_DELAY


def next_check_in(now: datetime, target: datetime | None) -> datetime:
    return now + timedelta(seconds=recommended_delay(now, target))


# ── Display strings ────────────────────────────────────────────


def countdown_string(remaining: float) -> str:
    """Widget countdown such as ``3d 5h``, ``2h 10m``, ``4m 30s`` or ``LIVE``."""
    if remaining <= 0:
        return "LIVE"
    c = Countdown.from_seconds(remaining)
    if c.days > 0:
        return f"{c.days}d {c.hours}h"
    if c.hours > 0:
        return f"{c.hours}h {c.minutes}m"
    if c.minutes > 0:
        return f"{c.minutes}m {c.seconds}s"
    return f"{c.seconds}s"


def short_countdown(remaining: float) -> str:
    """Lock screen countdown: ``3d``, ``2h 10m`` or ``LIVE``."""
    if remaining <= 0:
        return "LIVE"
    c = Countdown.from_seconds(remaining)
    if c.days > 0:
        return f"{c.days}d"
    return f"{c.hours}h {c.minutes}m"


def race_countdown_string(target: datetime | None, now: datetime) -> str:
    """Race list label."""
    if target is None:
        return "Date TBA"
    remaining = seconds_until(now, target)
    if remaining <= 0:
        return "Completed"
    c = Countdown.from_seconds(remaining)
    if c.days > 0:
        return f"{c.days}d {c.hours}h"
    if c.hours > 0:
        return f"{c.hours}h {c.minutes}m"
    return f"{c.minutes}m"


def session_countdown_string(target: datetime | None, now: datetime) -> str:
    """Session row label in the race detail."""
    if target is None:
        return "TBA"
    remaining = seconds_until(now, target)
    if remaining <= 0:
        return "Completed"
    c = Countdown.from_seconds(remaining)
    if c.days > 0:
        return f"{c.days}d {c.hours}h {c.minutes}m"
    if c.hours > 0:
        return f"{c.hours}h {c.minutes}m"
    return f"{c.minutes}m"


def snapshot(
    now: datetime,
    target: datetime,
    live_window_seconds: int = LIVE_WINDOW_SECONDS,
) -> CountdownSnapshot:
    """Countdown state at ``now`` as shown by widgets and live activities."""
    remaining = seconds_until(now, target)
    status = classify(now, target, live_window_seconds)
    c = Countdown.from_seconds(remaining)

    if status is EventStatus.FINISHED:
        display = short = "Finished"
    else:
        display = countdown_string(remaining)
        short = short_countdown(remaining)

    return CountdownSnapshot(
        total_seconds=c.total_seconds,
        days=c.days,
        hours=c.hours,
        minutes=c.minutes,
        seconds=c.seconds,
        status=status,
        display=display,
        short_display=short,
    )
