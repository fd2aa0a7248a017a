"""Render a core ClientResponse as a Starlette response."""

from fastapi.responses import JSONResponse, Response

from tripgate.core.upstream import ClientResponse


def to_http_response(resp: ClientResponse) -> Response:
    if resp.raw is not None:
        return Response(
            content=resp.raw, status_code=resp.status_code, media_type=resp.media_type,
        )
    return JSONResponse(status_code=resp.status_code, content=resp.body)
