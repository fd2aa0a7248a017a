"""Grounded Chat: JSON-only chat through Gemini generateContent with a grounding tool.

Invariants:
    - Same prompt contract and reply normalization as chat_completion
    - groundingChunks always present in the output (empty list when absent upstream)
    - lat/lng, when given, are sent as toolConfig.retrievalConfig.latLng
    - Credential sent as x-goog-api-key header, never in the URL
"""

import logging
from typing import Any

from tripgate.config import Settings
from tripgate.core.errors import ErrorContext, ModelOutputMalformed, UpstreamNotConfigured
from tripgate.core.prompts import build_system_prompt, build_user_prompt
from tripgate.core.response_policy import expect_success
from tripgate.core.upstream import UpstreamRequest
from tripgate.infrastructure.upstream_client import UpstreamClient
from tripgate.schemas.chat import GroundedChatRequest
from tripgate.services.chat_completion import normalize_reply

logger = logging.getLogger(__name__)

GEMINI_UPSTREAM = "Gemini API"


def build_grounded_request(
    settings: Settings, body: GroundedChatRequest,
) -> UpstreamRequest:
    if not settings.gemini_api_key:
        raise UpstreamNotConfigured(GEMINI_UPSTREAM, "gemini_api_key")
    payload: dict[str, Any] = {
        "systemInstruction": {
            "parts": [{"text": build_system_prompt(body.system_message)}],
        },
        "contents": [
            {"role": "user", "parts": [{"text": build_user_prompt(body.user_message)}]},
        ],
        "tools": [{settings.gemini_grounding_tool: {}}],
    }
    if body.has_location:
        payload["toolConfig"] = {
            "retrievalConfig": {
                "latLng": {"latitude": body.lat, "longitude": body.lng},
            },
        }
    return UpstreamRequest(
        upstream=GEMINI_UPSTREAM,
        method="POST",
        url=f"{settings.gemini_base_url}/models/{settings.gemini_model}:generateContent",
        json_body=payload,
        headers={
            "x-goog-api-key": settings.gemini_api_key,
            "Content-Type": "application/json",
        },
    )


def extract_candidate(
    payload: Any, context: ErrorContext | None = None,
) -> tuple[str, list]:
    """Return (joined text parts, grounding chunks) of the first candidate."""
    try:
        candidate = payload["candidates"][0]
    except (KeyError, IndexError, TypeError):
        reason = None
        if isinstance(payload, dict):
            reason = (payload.get("promptFeedback") or {}).get("blockReason")
        raise ModelOutputMalformed(
            f"Gemini returned no candidates (blockReason: {reason})"
            if reason else "Gemini returned no candidates",
            context,
        )
    if not isinstance(candidate, dict):
        raise ModelOutputMalformed("Gemini candidate is not an object", context)
    parts = ((candidate.get("content") or {}).get("parts")) or []
    text = "".join(
        part["text"] for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    )
    if not text:
        raise ModelOutputMalformed("Gemini candidate has no text parts", context)
    metadata = candidate.get("groundingMetadata") or {}
    chunks = metadata.get("groundingChunks") or []
    return text, chunks


async def complete_grounded_chat(
    client: UpstreamClient, settings: Settings, body: GroundedChatRequest,
) -> dict:
    """Run one grounded generation: {<reply_field>: ..., "groundingChunks": [...]}."""
    request = build_grounded_request(settings, body)
    context = ErrorContext(upstream=GEMINI_UPSTREAM)
    success = expect_success(await client.send(request), GEMINI_UPSTREAM, context)
    try:
        payload = success.json()
    except ValueError:
        raise ModelOutputMalformed("Gemini response is not JSON", context)
    text, chunks = extract_candidate(payload, context)
    logger.info(
        f"Grounded reply received with {len(chunks)} grounding chunk(s)",
        extra={"upstream": GEMINI_UPSTREAM, "status_code": success.status_code},
    )
    return {
        settings.chat_reply_field: normalize_reply(text, settings, context),
        "groundingChunks": chunks,
    }
