"""Prompt Construction: JSON-only instructions wrapped around the caller's messages."""

JSON_ONLY_SYSTEM_PROMPT = (
    "You are a helpful assistant that ONLY responds with a raw JSON object. "
    "Do not include any explanations, markdown, or additional text outside "
    "the JSON structure."
)

JSON_ONLY_USER_SUFFIX = (
    ". Respond with ONLY a raw JSON object, no additional text, explanations, "
    "markdown. Do not format the reply."
)


def build_system_prompt(system_message: str | None) -> str:
    """Caller's system message (if any) followed by the JSON-only instruction."""
    if system_message and system_message.strip():
        return f"{system_message.strip()}\n\n{JSON_ONLY_SYSTEM_PROMPT}"
    return JSON_ONLY_SYSTEM_PROMPT


def build_user_prompt(user_message: str) -> str:
    return f"{user_message.strip()}{JSON_ONLY_USER_SUFFIX}"


def build_chat_messages(user_message: str, system_message: str | None) -> list[dict]:
    """OpenAI-style message list."""
    return [
        {"role": "system", "content": build_system_prompt(system_message)},
        {"role": "user", "content": build_user_prompt(user_message)},
    ]
