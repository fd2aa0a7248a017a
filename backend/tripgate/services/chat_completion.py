"""Chat Completion: JSON-only chat through an OpenAI-compatible endpoint (OpenRouter).

Invariants:
    - Prompt always instructs the model to answer with a raw JSON object
    - Reply is fence-stripped and parsed; parse failure -> ModelOutputMalformed
      (or raw text when chat_strict_json is off)
    - Output field name comes from settings.chat_reply_field
    - Upstream failures follow core.response_policy, same as every route
"""

import logging
from typing import Any

from tripgate.config import Settings
from tripgate.core.errors import ErrorContext, ModelOutputMalformed, UpstreamNotConfigured
from tripgate.core.model_output import parse_model_json
from tripgate.core.prompts import build_chat_messages
from tripgate.core.response_policy import expect_success
from tripgate.core.upstream import UpstreamRequest
from tripgate.infrastructure.upstream_client import UpstreamClient
from tripgate.schemas.chat import ChatRequest

logger = logging.getLogger(__name__)

CHAT_UPSTREAM = "OpenRouter chat API"


def build_chat_request(settings: Settings, body: ChatRequest) -> UpstreamRequest:
    if not settings.openrouter_api_key:
        raise UpstreamNotConfigured(CHAT_UPSTREAM, "openrouter_api_key")
    headers = {
        "Authorization": f"Bearer {settings.openrouter_api_key}",
        "Content-Type": "application/json",
    }
    # OpenRouter app attribution, optional
    if settings.openrouter_referer:
        headers["HTTP-Referer"] = settings.openrouter_referer
    if settings.openrouter_title:
        headers["X-Title"] = settings.openrouter_title
    return UpstreamRequest(
        upstream=CHAT_UPSTREAM,
        method="POST",
        url=f"{settings.openrouter_base_url}/chat/completions",
        json_body={
            "model": settings.chat_model,
            "response_format": {"type": "json_object"},
            "messages": build_chat_messages(body.user_message, body.system_message),
        },
        headers=headers,
    )


def extract_completion_text(payload: Any, context: ErrorContext | None = None) -> str:
    """Pull choices[0].message.content out of an OpenAI-style completion."""
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        raise ModelOutputMalformed(
            "Completion response has no choices[0].message.content", context,
        )
    if not isinstance(content, str):
        raise ModelOutputMalformed("Completion content is not text", context)
    return content


def normalize_reply(
    text: str, settings: Settings, context: ErrorContext | None = None,
) -> Any:
    """Fence-strip and parse model text according to settings."""
    return parse_model_json(
        text,
        strip_fences=settings.chat_strip_code_fences,
        strict=settings.chat_strict_json,
        context=context,
    )


async def complete_chat(
    client: UpstreamClient, settings: Settings, body: ChatRequest,
) -> dict:
    """Run one chat completion and return {<reply_field>: <parsed reply>}."""
    request = build_chat_request(settings, body)
    context = ErrorContext(upstream=CHAT_UPSTREAM)
    success = expect_success(await client.send(request), CHAT_UPSTREAM, context)
    try:
        payload = success.json()
    except ValueError:
        raise ModelOutputMalformed("Completion response is not JSON", context)
    text = extract_completion_text(payload, context)
    logger.info(
        "Chat completion received",
        extra={"upstream": CHAT_UPSTREAM, "status_code": success.status_code},
    )
    return {settings.chat_reply_field: normalize_reply(text, settings, context)}
