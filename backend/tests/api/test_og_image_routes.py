"""Open Graph route tests: extraction, null result, validation and error bodies.

Tests cover:
    - og:image found -> 200 {"ogImage": url}
    - No tag -> 200 {"ogImage": null}, not an error
    - Missing / non-http url -> 400 exactly, never 500, no outbound call
    - Fetch failures keep the upstream status, never echo the page body, carry "ogImage": null
    - Only the head of a large page is read
    - Same page fetched twice gives the same answer
"""

import httpx
import pytest
from respx import MockRouter

from tripgate.api.dependencies import get_og_image_extractor, get_page_client
from tripgate.infrastructure.upstream_client import UpstreamClient
from tripgate.main import app

PAGE = "https://blog.example.com/post/lisbon"


async def test_extracts_og_image(client, respx_mock: MockRouter):
    respx_mock.get(PAGE).mock(return_value=httpx.Response(
        200, html='<html><head><meta property="og:image" content="https://x/a.png"></head></html>',
    ))

    res = await client.get("/api/og-image", params={"url": PAGE})

    assert res.status_code == 200
    assert res.json() == {"ogImage": "https://x/a.png"}


async def test_no_tag_returns_null(client, respx_mock: MockRouter):
    respx_mock.get(PAGE).mock(return_value=httpx.Response(
        200, html="<html><head><title>No preview</title></head></html>",
    ))

    res = await client.get("/api/og-image", params={"url": PAGE})

    assert res.status_code == 200
    assert res.json() == {"ogImage": None}


async def test_relative_image_resolved(client, respx_mock: MockRouter):
    respx_mock.get(PAGE).mock(return_value=httpx.Response(
        200, html='<meta name="twitter:image" content="/media/cover.jpg">',
    ))

    res = await client.get("/api/og-image", params={"url": PAGE})

    assert res.json() == {"ogImage": "https://blog.example.com/media/cover.jpg"}


async def test_repeat_request_is_idempotent(client, respx_mock: MockRouter):
    respx_mock.get(PAGE).mock(return_value=httpx.Response(
        200, html='<meta property="og:image" content="https://x/a.png">',
    ))

    first = await client.get("/api/og-image", params={"url": PAGE})
    second = await client.get("/api/og-image", params={"url": PAGE})

    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()


async def test_missing_url_is_400(client, respx_mock: MockRouter):
    res = await client.get("/api/og-image")

    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "validation_error"
    assert body["ogImage"] is None
    assert not respx_mock.calls


@pytest.mark.parametrize("url", ["", "   ", "ftp://x.test/file", "not a url", "/relative"])
async def test_invalid_url_is_400(client, respx_mock: MockRouter, url):
    res = await client.get("/api/og-image", params={"url": url})

    assert res.status_code == 400
    assert not respx_mock.calls


async def test_unreachable_page_is_bad_gateway_with_null_image(client, respx_mock: MockRouter):
    respx_mock.get(PAGE).mock(side_effect=httpx.ConnectError("dns failure"))

    res = await client.get("/api/og-image", params={"url": PAGE})

    assert res.status_code == 502
    assert res.json()["error"] == "bad_gateway"
    assert res.json()["ogImage"] is None


async def test_page_error_keeps_status_with_fallback_body(client, respx_mock: MockRouter):
    respx_mock.get(PAGE).mock(return_value=httpx.Response(404, html="<h1>Not Found</h1>"))

    res = await client.get("/api/og-image", params={"url": PAGE})

    assert res.status_code == 404
    assert res.json() == {"error": "Upstream error", "ogImage": None}


async def test_extractor_is_swappable(client, respx_mock: MockRouter):
    class _FixedExtractor:
        def extract(self, html_text, base_url=None):
            return "https://fixed/img.png"

    app.dependency_overrides[get_og_image_extractor] = lambda: _FixedExtractor()
    respx_mock.get(PAGE).mock(return_value=httpx.Response(200, html="<html></html>"))

    res = await client.get("/api/og-image", params={"url": PAGE})

    assert res.json() == {"ogImage": "https://fixed/img.png"}


async def test_page_json_error_is_not_echoed(client, respx_mock: MockRouter):
    respx_mock.get(PAGE).mock(return_value=httpx.Response(403, json={"detail": "forbidden"}))

    res = await client.get("/api/og-image", params={"url": PAGE})

    assert res.status_code == 403
    assert res.json() == {"error": "Upstream error", "ogImage": None}


async def test_only_page_head_is_read(client, respx_mock: MockRouter, http_clients):
    _, page = http_clients
    head = '<html><head><meta property="og:image" content="https://x/a.png"></head>'
    late = '<meta name="twitter:image" content="https://x/late.png">'
    app.dependency_overrides[get_page_client] = lambda: UpstreamClient(
        page, max_body_bytes=len(head),
    )
    respx_mock.get(PAGE).mock(return_value=httpx.Response(
        200, html=head.replace("og:image", "og:title") + late,
    ))

    res = await client.get("/api/og-image", params={"url": PAGE})

    assert res.status_code == 200
    assert res.json() == {"ogImage": None}
