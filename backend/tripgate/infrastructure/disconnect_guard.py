"""Disconnect Guard: cancel the outbound call when the inbound client goes away.

Invariants:
    - The outbound call runs as a task; the handler polls the connection between waits
    - If the call finishes first its result (or exception) is returned unchanged
    - If the client disconnects first the call is cancelled and ClientDisconnected raised
    - The poller is never cancelled mid-poll: it stops by checking call_task.done()
    - The call task is settled before returning: nothing keeps running after the request

Design Decisions:
    - Polling happens in the handler's own task instead of a second watcher task.
      Starlette's Request.is_disconnected() receives inside an already-cancelled
      anyio CancelScope, which absorbs an outside cancel() and keeps a watcher alive.
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import Protocol, TypeVar

from tripgate.core.errors import ClientDisconnected, ErrorContext

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DisconnectAware(Protocol):
    """The slice of starlette.requests.Request the guard needs."""

    async def is_disconnected(self) -> bool:
        ...


async def _client_left(request: DisconnectAware) -> bool | None:
    """True/False from the request, None when the connection state is unreadable."""
    try:
        return await request.is_disconnected()
    except Exception as e:
        logger.warning(f"Disconnect check failed, waiting for the call: {e!r}")
        return None


async def run_until_disconnected(
    request: DisconnectAware,
    call: Awaitable[T],
    poll_interval: float = 0.25,
    context: ErrorContext | None = None,
) -> T:
    """Await `call` unless the client disconnects first."""
    call_task = asyncio.ensure_future(call)
    try:
        while not call_task.done():
            left = await _client_left(request)
            if left is None:
                break
            if left:
                call_task.cancel()
                await asyncio.gather(call_task, return_exceptions=True)
                logger.info(
                    "Client disconnected, outbound call cancelled",
                    extra={"path": context.path if context else None},
                )
                raise ClientDisconnected(context)
            await asyncio.wait({call_task}, timeout=poll_interval)
        return await call_task
    finally:
        if not call_task.done():
            call_task.cancel()
