"""Response Policy: the single mapping from UpstreamResult to ClientResponse.

Invariants:
    - Success -> caller decides (pass-through or reshape)
    - UpstreamError -> UpstreamRejected (upstream status, non-empty body kept, else fallback)
    - NetworkFailure -> NetworkUnreachable (502 bad_gateway), timeouts included
    - LocalFailure -> LocalFault (500 internal_error)
    - The same policy applies to every route; routes only add response_fields
"""

from tripgate.core.errors import (
    ErrorContext,
    GatewayError,
    LocalFault,
    NetworkUnreachable,
    UpstreamRejected,
)
from tripgate.core.upstream import (
    ClientResponse,
    LocalFailure,
    NetworkFailure,
    Success,
    UpstreamError,
    UpstreamResult,
    JSON_MEDIA_TYPE,
)


def error_for(
    result: UpstreamResult, upstream: str, context: ErrorContext | None = None,
) -> GatewayError | None:
    """Return the gateway error a failed result maps to, or None on Success."""
    if isinstance(result, Success):
        return None
    return _failure_error(result, upstream, context)


def _failure_error(
    result: UpstreamError | NetworkFailure | LocalFailure,
    upstream: str,
    context: ErrorContext | None,
) -> GatewayError:
    ctx = context or ErrorContext()
    ctx.upstream = upstream
    if isinstance(result, UpstreamError):
        return UpstreamRejected(
            result.status_code, result.content, result.content_type, context=ctx,
        )
    if isinstance(result, NetworkFailure):
        if result.timed_out:
            return NetworkUnreachable(f"{upstream} did not respond in time.", ctx)
        return NetworkUnreachable(f"No response from {upstream}.", ctx)
    if isinstance(result, LocalFailure):
        return LocalFault(context=ctx)
    raise TypeError(f"Unknown upstream result: {result!r}")


def expect_success(
    result: UpstreamResult, upstream: str, context: ErrorContext | None = None,
) -> Success:
    """Unwrap a Success or raise the mapped GatewayError."""
    if isinstance(result, Success):
        return result
    raise _failure_error(result, upstream, context)


def passthrough(
    result: UpstreamResult, upstream: str, context: ErrorContext | None = None,
) -> ClientResponse:
    """Identity mapping on success: upstream status and bytes unchanged."""
    success = expect_success(result, upstream, context)
    return ClientResponse(
        status_code=success.status_code,
        raw=success.content,
        media_type=success.content_type or JSON_MEDIA_TYPE,
    )
