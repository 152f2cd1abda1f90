"""Error taxonomy for the schedule client, the local cache and the services."""

from __future__ import annotations


# ── Upstream API ───────────────────────────────────────────────


class APIError(Exception):
    """Base exception for all schedule API errors."""


class NetworkError(APIError):
    """Transport-level failure: no connectivity, DNS, timeout."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Network error: {cause}")


class DecodingError(APIError):
    """Response body does not match the expected envelope."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Failed to decode response: {cause}")


class RateLimitExceededError(APIError):
    """Client-side budget exhausted, or the server answered 429."""

    def __init__(self, retry_after: int | None = None) -> None:
        self.retry_after = retry_after
        if retry_after is not None:
            message = f"Rate limit exceeded. Try again in {retry_after} seconds."
        else:
            message = "Rate limit exceeded. Please wait before making more requests."
        super().__init__(message)


class InvalidResponseError(APIError):
    """The transport returned something that is not an HTTP response."""

    def __init__(self) -> None:
        super().__init__("Invalid response from server")


class InvalidURLError(APIError):
    """A request URL could not be constructed."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Invalid URL: {url}")


class NoDataError(APIError):
    """The server answered without a body."""

    def __init__(self) -> None:
        super().__init__("No data received from server")


class ServerError(APIError):
    """Any non-2xx status other than 429."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Server error with status code: {status_code}")


# ── Data service / cache ───────────────────────────────────────


class DataServiceError(Exception):
    """Base exception for synchronization and cache errors."""


class NoCachedDataError(DataServiceError):
    def __init__(self) -> None:
        super().__init__("No cached data available")


class NetworkUnavailableError(DataServiceError):
    """The network could not be reached; cached data is still valid."""

    def __init__(self, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__("Network unavailable")


class SyncFailedError(DataServiceError):
    """A fetch failed for a reason other than connectivity."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Sync failed: {cause}")

    @property
    def retry_after(self) -> int | None:
        """Retry hint carried by a wrapped rate-limit error, if any."""
        if isinstance(self.cause, RateLimitExceededError):
            return self.cause.retry_after
        return None


class CacheError(DataServiceError):
    """Local store read or write failure."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Cache error: {cause}")


class InvalidDataError(DataServiceError):
    def __init__(self) -> None:
        super().__init__("Invalid data")


# ── Notifications ──────────────────────────────────────────────


class NotificationError(Exception):
    """Base exception for notification planning errors."""


class InvalidNotificationDateError(NotificationError):
    def __init__(self) -> None:
        super().__init__("The notification date is invalid or in the past.")


class NotificationsDisabledError(NotificationError):
    def __init__(self) -> None:
        super().__init__("Notifications are disabled")


class SchedulingFailedError(NotificationError):
    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Failed to schedule notification: {cause}")


# ── Entitlements ───────────────────────────────────────────────


class EntitlementError(Exception):
    """Base exception for Pro tier errors."""


class ProFeatureLockedError(EntitlementError):
    def __init__(self, feature: str) -> None:
        self.feature = feature
        super().__init__(f"'{feature}' requires F1 Countdown Pro")
