"""Open Graph Image: fetch a page and extract its preview image URL.

Invariants:
    - Only absolute http(s) URLs are fetched (ValidationFault otherwise)
    - No matching tag -> {"ogImage": None} with 200
    - Every error body for this route carries "ogImage": null; a rejected page
      never has its own body echoed back
"""

import logging
from urllib.parse import urlsplit

from tripgate.core.errors import ErrorContext, ValidationFault
from tripgate.core.og_image import OgImageExtractor
from tripgate.core.response_policy import expect_success
from tripgate.core.upstream import UpstreamRequest
from tripgate.infrastructure.upstream_client import UpstreamClient

logger = logging.getLogger(__name__)

PAGE_UPSTREAM = "target page"


def og_image_context() -> ErrorContext:
    return ErrorContext(
        upstream=PAGE_UPSTREAM,
        response_fields={"ogImage": None},
        forward_upstream_body=False,
    )


def validate_page_url(url: str | None) -> str:
    context = og_image_context()
    if url is None or not url.strip():
        raise ValidationFault(
            "Missing required query parameter: url",
            details=[{"field": "query.url", "message": "Field required", "type": "missing"}],
            context=context,
        )
    url = url.strip()
    parts = urlsplit(url)
    if parts.scheme.lower() not in ("http", "https") or not parts.netloc:
        raise ValidationFault(
            "url must be an absolute http(s) URL",
            details=[{"field": "query.url", "message": "Invalid URL", "type": "url_parsing"}],
            context=context,
        )
    return url


async def fetch_og_image(
    client: UpstreamClient, extractor: OgImageExtractor, url: str,
) -> dict:
    """Fetch `url` and return {"ogImage": <url or None>}."""
    request = UpstreamRequest(upstream=PAGE_UPSTREAM, method="GET", url=url)
    success = expect_success(
        await client.send(request), PAGE_UPSTREAM, og_image_context(),
    )
    image = extractor.extract(success.text, base_url=success.url or url)
    if image is None:
        logger.info("No og:image found", extra={"upstream": PAGE_UPSTREAM})
    return {"ogImage": image}
