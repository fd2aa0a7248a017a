"""Request Dependencies: settings, pooled clients and the og:image extractor.

Invariants:
    - Clients live on app.state (created in the lifespan), handlers get them injected
    - Tests swap any of these through app.dependency_overrides
"""

from fastapi import Depends, Request

from tripgate.config import Settings, get_settings
from tripgate.core.og_image import OgImageExtractor, RegexOgImageExtractor
from tripgate.infrastructure.upstream_client import UpstreamClient


def get_api_client(request: Request) -> UpstreamClient:
    """Client for JSON APIs (places, chat, Gemini)."""
    return UpstreamClient(request.app.state.api_http_client)


def get_page_client(
    request: Request, settings: Settings = Depends(get_settings),
) -> UpstreamClient:
    """Client for fetching web pages (og:image), reading at most og_max_page_bytes."""
    return UpstreamClient(
        request.app.state.page_http_client, max_body_bytes=settings.og_max_page_bytes,
    )


_default_extractor = RegexOgImageExtractor()


def get_og_image_extractor() -> OgImageExtractor:
    return _default_extractor
