"""
Structured logging for the replay search proxy.

structlog renders through the standard library so uvicorn and application
events share one stream. `configure_logging()` may run more than once (every
`create_app()` calls it); the latest level and renderer always apply.
"""

import logging
import sys
import time
import uuid

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

APP_NAME = "replay_search_proxy"


def _add_app_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("app", APP_NAME)
    return event_dict


def build_processors(development: bool) -> list[Processor]:
    """Processor chain ending in a console renderer or JSON lines."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        _add_app_name,
    ]
    if development:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    else:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return processors


def configure_logging(level: str = "INFO", development: bool = True) -> None:
    """
    Route structlog events to stdout at the given level.

    Args:
        level: Standard library level name, e.g. "DEBUG"
        development: Console output instead of JSON lines
    """
    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))

    structlog.configure(
        processors=build_processors(development),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)  # type: ignore[no-any-return]


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware:
    """ASGI middleware that tags each request with a short id and logs its outcome."""

    def __init__(self, app):
        self.app = app
        self.logger = get_logger("http")

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        status_code = 500
        started = time.perf_counter()

        async def capture_status(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        with structlog.contextvars.bound_contextvars(
            request_id=uuid.uuid4().hex[:8],
            method=scope.get("method", ""),
            path=scope.get("path", ""),
        ):
            self.logger.debug("request_started")
            try:
                await self.app(scope, receive, capture_status)
            finally:
                self.logger.log(
                    _level_for(status_code),
                    "request_complete",
                    status_code=status_code,
                    duration_ms=round((time.perf_counter() - started) * 1000, 1),
                )


__all__ = [
    "configure_logging",
    "get_logger",
    "RequestLoggingMiddleware",
]
