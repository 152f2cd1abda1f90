"""Client-side request budget for the schedule API."""

from datetime import datetime, timedelta

from f1countdown.exceptions import RateLimitExceededError
from f1countdown.timeutils import Clock, utcnow


class RateBudget:
    """Approximate hourly request cap.

    The counter resets once the last recorded request is older than the
    window, so it may overcount slightly compared with a sliding window.
    """

    def __init__(
        self,
        max_requests: int = 500,
        window_seconds: int = 3600,
        clock: Clock = utcnow,
    ):
        self.max_requests = max_requests
        self.window = timedelta(seconds=window_seconds)
        self._clock = clock
        self._count = 0
        self._last_request: datetime | None = None

    @property
    def count(self) -> int:
        """Requests recorded in the current window."""
        return self._count

    @property
    def last_request(self) -> datetime | None:
        return self._last_request

    def check(self) -> None:
        """Raise RateLimitExceededError if no request may be made now."""
        if self._last_request is not None:
            if self._clock() - self._last_request > self.window:
                self._count = 0
        if self._count >= self.max_requests:
            raise RateLimitExceededError()

    def record(self) -> None:
        self._count += 1
        self._last_request = self._clock()

    def reset(self) -> None:
        self._count = 0
        self._last_request = None
