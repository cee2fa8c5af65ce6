"""
Custom exception handlers for FastAPI.

Routing errors become a plain-text 400 naming the path. Backend transport
failures become a 502. Unexpected errors get a generic 500 and are logged
server-side with full details.
"""

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from proxy_core.constants import RESPONSE_HEADERS
from proxy_core.exceptions import InvalidPathError, ProxyError
from proxy_core.logging import get_logger

from .responses import invalid_path_response

logger = get_logger("api.errors")


def _get_request_id() -> str:
    """
    Get the current request ID from context.

    Used for server-side logging only - NOT exposed to clients.
    """
    return structlog.contextvars.get_contextvars().get("request_id", "-")


def _response_payload(detail: str, status_code: int) -> dict:
    return {
        "detail": detail,
        "status_code": status_code,
    }


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            logger.info("invalid_path", path=request.url.path, request_id=_get_request_id())
            return invalid_path_response(request.url.path)

        logger.warning(
            "http_exception",
            detail=exc.detail,
            status_code=exc.status_code,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_response_payload(str(exc.detail), exc.status_code),
            headers=dict(RESPONSE_HEADERS),
        )

    @app.exception_handler(InvalidPathError)
    async def invalid_path_handler(request: Request, exc: InvalidPathError):
        logger.info("invalid_path", path=exc.path, request_id=_get_request_id())
        return invalid_path_response(exc.path)

    @app.exception_handler(ProxyError)
    async def proxy_error_handler(request: Request, exc: ProxyError):
        logger.warning(
            "proxy_error",
            detail=exc.detail,
            status_code=exc.status_code,
            error_type=type(exc).__name__,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_response_payload(exc.detail, exc.status_code),
            headers=dict(RESPONSE_HEADERS),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_response_payload("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR),
            headers=dict(RESPONSE_HEADERS),
        )
