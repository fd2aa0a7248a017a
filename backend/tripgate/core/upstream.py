"""Upstream Types: per-request values exchanged with third-party APIs.

Invariants:
    - UpstreamRequest is built fresh per inbound request and never shared
    - UpstreamResult is exactly one of Success, UpstreamError, NetworkFailure, LocalFailure
    - ClientResponse carries either a JSON body or raw bytes, never both

Design Decisions:
    - Frozen dataclasses: results are consumed once and never mutated
    - Bodies kept as bytes: pass-through routes must not re-encode upstream JSON
"""

import json
from dataclasses import dataclass, field
from typing import Any, Union

JSON_MEDIA_TYPE = "application/json"


@dataclass(frozen=True)
class UpstreamRequest:
    """One outbound call. `upstream` is a human label used in logs and messages."""
    upstream: str
    method: str
    url: str
    params: Any = None
    json_body: Any = None
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Success:
    status_code: int
    content: bytes
    content_type: str | None = None
    url: str | None = None  # final URL after redirects

    def json(self) -> Any:
        """Decode the body. Raises ValueError on malformed JSON."""
        return json.loads(self.content)

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class UpstreamError:
    status_code: int
    content: bytes = b""
    content_type: str | None = None


@dataclass(frozen=True)
class NetworkFailure:
    reason: str
    timed_out: bool = False


@dataclass(frozen=True)
class LocalFailure:
    reason: str


UpstreamResult = Union[Success, UpstreamError, NetworkFailure, LocalFailure]


@dataclass(frozen=True)
class ClientResponse:
    """Status + body the gateway sends back to its caller."""
    status_code: int
    body: Any = None
    raw: bytes | None = None
    media_type: str = JSON_MEDIA_TYPE
