"""Chat Routes: JSON-only LLM chat and grounded (Gemini) chat.

Invariants:
    - POST /chat and POST /api/deepseek/chat are the same operation
    - POST /api/gemini/chat and POST /gemini_chat are the same operation
    - Missing/blank userMessage is rejected with 400 before any outbound call
"""

from fastapi import APIRouter, Depends, Request

from tripgate.api.dependencies import get_api_client
from tripgate.config import Settings, get_settings
from tripgate.core.errors import ErrorContext
from tripgate.infrastructure.disconnect_guard import run_until_disconnected
from tripgate.infrastructure.upstream_client import UpstreamClient
from tripgate.schemas.chat import ChatRequest, GroundedChatRequest
from tripgate.services.chat_completion import complete_chat
from tripgate.services.grounded_chat import complete_grounded_chat

router = APIRouter(tags=["chat"])


@router.post("/chat")
@router.post("/api/deepseek/chat")
async def chat(
    body: ChatRequest,
    request: Request,
    client: UpstreamClient = Depends(get_api_client),
    settings: Settings = Depends(get_settings),
):
    """Chat completion whose reply is parsed JSON."""
    return await run_until_disconnected(
        request,
        complete_chat(client, settings, body),
        poll_interval=settings.disconnect_poll_interval_seconds,
        context=ErrorContext(path=request.url.path),
    )


@router.post("/api/gemini/chat")
@router.post("/gemini_chat")
async def gemini_chat(
    body: GroundedChatRequest,
    request: Request,
    client: UpstreamClient = Depends(get_api_client),
    settings: Settings = Depends(get_settings),
):
    """Grounded chat; optional lat/lng bias the grounding to a location."""
    return await run_until_disconnected(
        request,
        complete_grounded_chat(client, settings, body),
        poll_interval=settings.disconnect_poll_interval_seconds,
        context=ErrorContext(path=request.url.path),
    )
