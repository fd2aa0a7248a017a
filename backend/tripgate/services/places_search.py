"""Places Search: pass-through proxy to the Foursquare Places API.

Invariants:
    - Query parameters forwarded verbatim (repeated keys preserved, no validation)
    - Success: upstream status and body bytes returned unchanged
    - Credential and API version injected as headers, never taken from the caller
"""

from collections.abc import Sequence

from tripgate.config import Settings
from tripgate.core.errors import UpstreamNotConfigured
from tripgate.core.response_policy import passthrough
from tripgate.core.upstream import ClientResponse, UpstreamRequest
from tripgate.infrastructure.upstream_client import UpstreamClient

PLACES_UPSTREAM = "Foursquare Places API"


def build_places_request(
    settings: Settings, params: Sequence[tuple[str, str]],
) -> UpstreamRequest:
    if not settings.fsq_api_key:
        raise UpstreamNotConfigured(PLACES_UPSTREAM, "fsq_api_key")
    return UpstreamRequest(
        upstream=PLACES_UPSTREAM,
        method="GET",
        url=settings.fsq_base_url,
        params=list(params),
        headers={
            "Authorization": f"Bearer {settings.fsq_api_key}",
            "Accept": "application/json",
            "X-Places-Api-Version": settings.fsq_api_version,
        },
    )


async def search_places(
    client: UpstreamClient,
    settings: Settings,
    params: Sequence[tuple[str, str]],
) -> ClientResponse:
    """Forward a places search and return the upstream answer as-is."""
    request = build_places_request(settings, params)
    result = await client.send(request)
    return passthrough(result, PLACES_UPSTREAM)
