"""Prompt construction tests."""

from tripgate.core.prompts import (
    JSON_ONLY_SYSTEM_PROMPT,
    JSON_ONLY_USER_SUFFIX,
    build_chat_messages,
    build_system_prompt,
)


def test_default_system_prompt_is_json_only():
    assert build_system_prompt(None) == JSON_ONLY_SYSTEM_PROMPT


def test_blank_system_message_ignored():
    assert build_system_prompt("   ") == JSON_ONLY_SYSTEM_PROMPT


def test_custom_system_message_keeps_json_instruction():
    prompt = build_system_prompt("You plan weekend trips.")
    assert prompt.startswith("You plan weekend trips.")
    assert prompt.endswith(JSON_ONLY_SYSTEM_PROMPT)


def test_chat_messages_shape():
    messages = build_chat_messages("Suggest 3 cafes in Porto", None)
    assert [m["role"] for m in messages] == ["system", "user"]
    assert messages[1]["content"] == "Suggest 3 cafes in Porto" + JSON_ONLY_USER_SUFFIX
