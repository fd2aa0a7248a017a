"""Open Graph Routes: GET /api/og-image?url=..."""

from fastapi import APIRouter, Depends, Query, Request

from tripgate.api.dependencies import get_og_image_extractor, get_page_client
from tripgate.config import Settings, get_settings
from tripgate.core.og_image import OgImageExtractor
from tripgate.infrastructure.disconnect_guard import run_until_disconnected
from tripgate.infrastructure.upstream_client import UpstreamClient
from tripgate.schemas.og_image import OgImageResponse
from tripgate.services.og_image import (
    fetch_og_image,
    og_image_context,
    validate_page_url,
)

router = APIRouter(prefix="/api", tags=["og-image"])


@router.get("/og-image", response_model=OgImageResponse)
async def og_image(
    request: Request,
    url: str | None = Query(None),
    client: UpstreamClient = Depends(get_page_client),
    extractor: OgImageExtractor = Depends(get_og_image_extractor),
    settings: Settings = Depends(get_settings),
):
    """Preview image of a page; {"ogImage": null} when it has none."""
    # validated here, not by Query(...), so the 400 body carries ogImage: null
    page_url = validate_page_url(url)
    context = og_image_context()
    context.path = request.url.path
    return await run_until_disconnected(
        request,
        fetch_og_image(client, extractor, page_url),
        poll_interval=settings.disconnect_poll_interval_seconds,
        context=context,
    )
