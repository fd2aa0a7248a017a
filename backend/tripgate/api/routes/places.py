"""Places Routes: GET /api/places/search pass-through."""

from fastapi import APIRouter, Depends, Request

from tripgate.api.dependencies import get_api_client
from tripgate.api.responses import to_http_response
from tripgate.config import Settings, get_settings
from tripgate.core.errors import ErrorContext
from tripgate.infrastructure.disconnect_guard import run_until_disconnected
from tripgate.infrastructure.upstream_client import UpstreamClient
from tripgate.services.places_search import search_places

router = APIRouter(prefix="/api/places", tags=["places"])


@router.get("/search")
async def places_search(
    request: Request,
    client: UpstreamClient = Depends(get_api_client),
    settings: Settings = Depends(get_settings),
):
    """Forward all query parameters to the places API, return its answer as-is."""
    result = await run_until_disconnected(
        request,
        search_places(client, settings, request.query_params.multi_items()),
        poll_interval=settings.disconnect_poll_interval_seconds,
        context=ErrorContext(path=request.url.path),
    )
    return to_http_response(result)
