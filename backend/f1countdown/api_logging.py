"""Call logging for the schedule client and the service layer."""

from __future__ import annotations

import functools
import logging
import threading
import time
from typing import Any, Callable, TypeVar

from f1countdown.config import Settings

F = TypeVar("F", bound=Callable[..., Any])

ROOT_LOGGER_NAME = "f1countdown"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_FILE_NAME = "f1countdown.log"

_configured = False
_configure_lock = threading.Lock()


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger."""
    if name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(settings: Settings) -> logging.Logger:
    """Attach handlers to the package logger once per process."""
    global _configured
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if _configured:
        return root

    with _configure_lock:
        if _configured:
            return root

        root.setLevel(settings.log_level.upper())
        formatter = logging.Formatter(LOG_FORMAT)

        stream = logging.StreamHandler()
        stream.setFormatter(formatter)
        root.addHandler(stream)

        if settings.log_dir is not None:
            settings.log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(
                settings.log_dir / LOG_FILE_NAME, encoding="utf-8"
            )
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

        _configured = True

    return root


def _describe_args(args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    # Skip 'self'
    parts = [repr(a) for a in args[1:]]
    parts += [f"{k}={v!r}" for k, v in kwargs.items()]
    return ", ".join(parts)


def _count(result: Any) -> int:
    if result is None:
        return 0
    return len(result) if isinstance(result, list) else 1


def log_fetch_call(fn: F) -> F:
    """Decorator that logs async upstream fetches."""
    logger = get_logger("fetch")

    @functools.wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        arg_str = _describe_args(args, kwargs)
        logger.info("CALL: %s(%s)", fn.__qualname__, arg_str)

        start = time.monotonic()
        try:
            result = await fn(*args, **kwargs)
        except Exception as exc:
            elapsed = time.monotonic() - start
            logger.error(
                "FAIL: %s(%s) -> %s: %s (%.3fs)",
                fn.__qualname__, arg_str, type(exc).__name__, exc, elapsed,
            )
            raise
        elapsed = time.monotonic() - start
        logger.info(
            "OK: %s(%s) -> %d items (%.3fs)",
            fn.__qualname__, arg_str, _count(result), elapsed,
        )
        return result

    return wrapper  # type: ignore[return-value]


def log_service_call(fn: F) -> F:
    """Decorator that logs async service-layer operations."""
    logger = get_logger("service")

    @functools.wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        arg_str = _describe_args(args, kwargs)
        logger.info("SERVICE CALL: %s(%s)", fn.__qualname__, arg_str)

        start = time.monotonic()
        try:
            result = await fn(*args, **kwargs)
        except Exception as exc:
            elapsed = time.monotonic() - start
            logger.error(
                "SERVICE FAIL: %s -> %s: %s (%.3fs)",
                fn.__qualname__, type(exc).__name__, exc, elapsed,
            )
            raise
        elapsed = time.monotonic() - start
        logger.info("SERVICE OK: %s -> %.3fs", fn.__qualname__, elapsed)
        return result

    return wrapper  # type: ignore[return-value]
