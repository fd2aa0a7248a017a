"""Upstream Client: wraps httpx.AsyncClient and turns every outcome into an UpstreamResult.

Invariants:
    - send() never raises for HTTP, network or local failures; it returns a result
    - Timeouts are NetworkFailure(timed_out=True); other transport errors are NetworkFailure
    - Non-2xx responses are UpstreamError with the raw body kept
    - CancelledError (BaseException) passes through so disconnects can abort the call
    - No retries

Design Decisions:
    - Two pooled clients: one for JSON APIs (upstream_timeout_seconds) and one for
      page fetches (og timeout, bounded redirects, browser User-Agent, bounded body)
    - Clients are created in the FastAPI lifespan and closed on shutdown
"""

import logging
import time

import httpx

from tripgate.config import Settings
from tripgate.core.upstream import (
    LocalFailure,
    NetworkFailure,
    Success,
    UpstreamError,
    UpstreamRequest,
    UpstreamResult,
)

logger = logging.getLogger(__name__)


def create_api_http_client(settings: Settings) -> httpx.AsyncClient:
    """Pooled client for the places / chat / generative APIs."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.upstream_timeout_seconds),
        follow_redirects=False,
    )


def create_page_http_client(settings: Settings) -> httpx.AsyncClient:
    """Pooled client for fetching arbitrary web pages."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.og_fetch_timeout_seconds),
        follow_redirects=True,
        max_redirects=settings.og_max_redirects,
        headers={
            "User-Agent": settings.og_user_agent,
            "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
        },
    )


class UpstreamClient:
    """Issues exactly one outbound request per send() call.

    With max_body_bytes set the response is streamed and only its first
    max_body_bytes are kept; the rest is never read.
    """

    def __init__(self, http: httpx.AsyncClient, max_body_bytes: int | None = None):
        self.http = http
        self.max_body_bytes = max_body_bytes

    async def send(self, request: UpstreamRequest) -> UpstreamResult:
        started = time.perf_counter()
        try:
            response, content = await self._fetch(request)
        except httpx.TimeoutException as e:
            self._log_failure(request, started, f"timeout: {type(e).__name__}")
            return NetworkFailure(f"Timed out: {type(e).__name__}", timed_out=True)
        except httpx.RequestError as e:
            self._log_failure(request, started, f"{type(e).__name__}: {e}")
            return NetworkFailure(f"{type(e).__name__}: {e}")
        except Exception as e:
            logger.error(
                f"Unexpected error calling {request.upstream}: {e}",
                exc_info=True,
                extra={"upstream": request.upstream, "method": request.method},
            )
            return LocalFailure(f"{type(e).__name__}: {e}")

        duration_ms = int((time.perf_counter() - started) * 1000)
        content_type = response.headers.get("content-type")
        extra = {
            "upstream": request.upstream,
            "method": request.method,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        }
        if response.is_success:
            logger.info(f"{request.upstream} call succeeded", extra=extra)
            return Success(
                response.status_code, content, content_type,
                url=str(response.url),
            )
        logger.warning(f"{request.upstream} rejected the call", extra=extra)
        return UpstreamError(response.status_code, content, content_type)

    async def _fetch(self, request: UpstreamRequest) -> tuple[httpx.Response, bytes]:
        outbound = self.http.build_request(
            request.method,
            request.url,
            params=request.params,
            json=request.json_body,
            headers=request.headers,
        )
        if self.max_body_bytes is None:
            response = await self.http.send(outbound)
            return response, response.content

        response = await self.http.send(outbound, stream=True)
        try:
            content = await _read_head(response, self.max_body_bytes)
        finally:
            await response.aclose()
        if len(content) >= self.max_body_bytes:
            logger.debug(
                f"{request.upstream} body truncated to {self.max_body_bytes} bytes",
                extra={"upstream": request.upstream, "method": request.method},
            )
        return response, content

    def _log_failure(self, request: UpstreamRequest, started: float, reason: str) -> None:
        logger.warning(
            f"No response from {request.upstream} ({reason})",
            extra={
                "upstream": request.upstream,
                "method": request.method,
                "duration_ms": int((time.perf_counter() - started) * 1000),
            },
        )


async def _read_head(response: httpx.Response, limit: int) -> bytes:
    buffer = bytearray()
    async for chunk in response.aiter_bytes():
        buffer.extend(chunk)
        if len(buffer) >= limit:
            break
    return bytes(buffer[:limit])
