"""Error Hierarchy: typed, categorized exceptions for every gateway failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error renders to exactly one ClientResponse via to_client_response()
    - Error bodies are flat: {"error": <code>, "message": <text>, ...}
    - No stack traces or credentials in user-facing messages

Design Decisions:
    - Single hierarchy with GatewayError base: the FastAPI global handler catches all
    - ErrorContext.response_fields lets a route add fields (e.g. ogImage: null)
      to every body the gateway generates for it
    - ErrorContext.forward_upstream_body=False makes a route render its own
      fallback body instead of echoing a rejected upstream body
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from tripgate.core.upstream import ClientResponse


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories."""
    VALIDATION = "validation"
    UPSTREAM_REJECTED = "upstream_rejected"
    NETWORK = "network"
    MODEL_OUTPUT = "model_output"
    CONFIGURATION = "configuration"
    CLIENT = "client"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Observability context attached to an error."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    upstream: str | None = None
    path: str | None = None
    response_fields: dict[str, Any] = field(default_factory=dict)
    forward_upstream_body: bool = True


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_body(self) -> dict:
        """Flat JSON error body."""
        body: dict[str, Any] = {"error": self.code, "message": self.message}
        body.update(self.context.response_fields)
        return body

    def to_client_response(self) -> ClientResponse:
        return ClientResponse(status_code=self.http_status, body=self.to_body())


# ─── Client-side errors (4xx) ───────────────────────────────────

class ValidationFault(GatewayError):
    """Required input missing or malformed."""
    def __init__(
        self,
        message: str,
        details: list[dict] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "validation_error", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.details = details or []

    def to_body(self) -> dict:
        body = super().to_body()
        if self.details:
            body["details"] = self.details
        return body


class ClientDisconnected(GatewayError):
    """Inbound connection closed before the outbound call finished."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Client closed the connection before the upstream answered",
            "client_closed_request", ErrorCategory.CLIENT,
            ErrorSeverity.INFO, context, 499,
        )


# ─── Upstream errors ────────────────────────────────────────────

UPSTREAM_ERROR_FALLBACK = "Upstream error"
RAW_MEDIA_TYPE = "application/octet-stream"


class UpstreamRejected(GatewayError):
    """Upstream answered with a non-2xx status.

    The client sees the upstream status. A non-empty upstream body is passed
    through byte-for-byte with its content type; an empty body is replaced by
    {"error": "Upstream error"}. Routes that set forward_upstream_body=False
    always get the fallback body with their response_fields.
    """
    def __init__(
        self,
        status_code: int,
        content: bytes = b"",
        content_type: str | None = None,
        context: ErrorContext | None = None,
    ):
        upstream = (context.upstream if context else None) or "upstream"
        super().__init__(
            f"{upstream} responded with HTTP {status_code}",
            "upstream_error", ErrorCategory.UPSTREAM_REJECTED,
            ErrorSeverity.WARNING, context, status_code,
        )
        self.content = content
        self.content_type = content_type

    def has_body(self) -> bool:
        return bool(self.content.strip())

    def to_body(self) -> dict:
        body: dict[str, Any] = {"error": UPSTREAM_ERROR_FALLBACK}
        body.update(self.context.response_fields)
        return body

    def to_client_response(self) -> ClientResponse:
        if self.context.forward_upstream_body and self.has_body():
            return ClientResponse(
                status_code=self.http_status,
                raw=self.content,
                media_type=self.content_type or RAW_MEDIA_TYPE,
            )
        return ClientResponse(status_code=self.http_status, body=self.to_body())


class NetworkUnreachable(GatewayError):
    """No response received: connect failure, DNS, timeout, redirect loop."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "bad_gateway", ErrorCategory.NETWORK,
            ErrorSeverity.ERROR, context, 502,
        )


class ModelOutputMalformed(GatewayError):
    """Model answered, but its text is not the JSON it was asked for."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "model_output_malformed", ErrorCategory.MODEL_OUTPUT,
            ErrorSeverity.ERROR, context, 502,
        )


# ─── Local errors (500) ─────────────────────────────────────────

class LocalFault(GatewayError):
    """Unexpected failure inside the gateway."""
    def __init__(
        self,
        message: str = "Unexpected server error.",
        category: ErrorCategory = ErrorCategory.INTERNAL,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "internal_error", category,
            ErrorSeverity.CRITICAL, context, 500,
        )


class UpstreamNotConfigured(LocalFault):
    """Credential for an upstream is missing from the settings."""
    def __init__(self, upstream: str, setting: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.upstream = upstream
        super().__init__(
            f"{upstream} is not configured ({setting.upper()} is empty).",
            ErrorCategory.CONFIGURATION, ctx,
        )
        self.setting = setting
