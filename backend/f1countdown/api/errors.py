"""Mapping of domain errors to HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from f1countdown.api_logging import get_logger
from f1countdown.exceptions import (
    CacheError,
    InvalidNotificationDateError,
    NetworkUnavailableError,
    NotificationsDisabledError,
    ProFeatureLockedError,
    RateLimitExceededError,
    SyncFailedError,
)

logger = get_logger("api")


def _error(status_code: int, exc: Exception, headers: dict[str, str] | None = None):
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
        headers=headers,
    )


async def network_unavailable_handler(request: Request, exc: NetworkUnavailableError):
    return _error(503, exc)


async def sync_failed_handler(request: Request, exc: SyncFailedError):
    if isinstance(exc.cause, RateLimitExceededError):
        headers = None
        if exc.retry_after is not None:
            headers = {"Retry-After": str(exc.retry_after)}
        return _error(429, exc, headers)
    return _error(502, exc)


async def cache_error_handler(request: Request, exc: CacheError):
    logger.error("Cache failure on %s: %s", request.url.path, exc)
    return _error(500, exc)


async def pro_feature_locked_handler(request: Request, exc: ProFeatureLockedError):
    return _error(403, exc)


async def notifications_disabled_handler(request: Request, exc: NotificationsDisabledError):
    return _error(409, exc)


async def invalid_notification_date_handler(
    request: Request, exc: InvalidNotificationDateError
):
    return _error(422, exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NetworkUnavailableError, network_unavailable_handler)
    app.add_exception_handler(SyncFailedError, sync_failed_handler)
    app.add_exception_handler(CacheError, cache_error_handler)
    app.add_exception_handler(ProFeatureLockedError, pro_feature_locked_handler)
    app.add_exception_handler(NotificationsDisabledError, notifications_disabled_handler)
    app.add_exception_handler(
        InvalidNotificationDateError, invalid_notification_date_handler
    )
