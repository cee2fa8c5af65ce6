"""Exception types raised by the proxy pipeline."""

from fastapi import status


class ProxyError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidPathError(ProxyError):
    """Request path does not map to any pipe."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, path: str):
        super().__init__(f"invalid path: {path}")
        self.path = path


class BackendUnavailableError(ProxyError):
    """The analytics API could not be reached or returned an unreadable body."""

    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, pipe: str, reason: str):
        super().__init__(f"analytics backend unavailable for {pipe}: {reason}")
        self.pipe = pipe
        self.reason = reason


__all__ = ["ProxyError", "InvalidPathError", "BackendUnavailableError"]
