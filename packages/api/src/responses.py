"""Response builders shared by the route handlers and error handlers."""

from fastapi import Response, status
from fastapi.responses import PlainTextResponse

from proxy_core.constants import RESPONSE_HEADERS


def json_response(body: str, status_code: int = status.HTTP_200_OK) -> Response:
    """Pre-serialized JSON body with the proxy's standard headers."""
    return Response(content=body, status_code=status_code, headers=dict(RESPONSE_HEADERS))


def invalid_path_response(path: str) -> PlainTextResponse:
    return PlainTextResponse(
        f"invalid path: {path}",
        status_code=status.HTTP_400_BAD_REQUEST,
        headers={"Access-Control-Allow-Origin": RESPONSE_HEADERS["Access-Control-Allow-Origin"]},
    )
