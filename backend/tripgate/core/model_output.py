"""Model Output Normalization: fence stripping and JSON parsing of LLM text.

Invariants:
    - Model text is untrusted: parse failure raises ModelOutputMalformed, never ValueError
    - strip_code_fences only removes a fence at the very start and very end
    - Unfenced text is returned unchanged (modulo surrounding whitespace)
"""

import json
import re
from typing import Any

from tripgate.core.errors import ErrorContext, ModelOutputMalformed

# ```json / ```JSON / ``` opening fence, optional language tag, to end of line
_OPENING_FENCE = re.compile(r"^```[\w-]*[ \t]*\r?\n?")
_CLOSING_FENCE = re.compile(r"\r?\n?```$")


def strip_code_fences(text: str) -> str:
    """Remove a leading ```lang line and a trailing ``` from model text."""
    stripped = text.strip()
    stripped = _OPENING_FENCE.sub("", stripped, count=1)
    stripped = _CLOSING_FENCE.sub("", stripped, count=1)
    return stripped.strip()


def parse_model_json(
    text: str,
    *,
    strip_fences: bool = True,
    strict: bool = True,
    context: ErrorContext | None = None,
) -> Any:
    """Parse model text as JSON.

    With strict=False a parse failure returns the raw text instead of raising.
    """
    candidate = strip_code_fences(text) if strip_fences else text
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        if not strict:
            return text
        raise ModelOutputMalformed(
            f"Model reply is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})",
            context,
        )
