"""Chat Schemas: request bodies for the LLM and grounded chat routes.

Invariants:
    - userMessage is required and non-blank (400 otherwise, never forwarded as empty)
    - lat/lng are optional, range-checked, and must be given together
    - Wire names are camelCase (userMessage, systemMessage); Python names are snake_case
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ChatRequest(BaseModel):
    """Body of POST /chat and /api/deepseek/chat."""
    model_config = ConfigDict(populate_by_name=True)

    user_message: str = Field(alias="userMessage", min_length=1, max_length=20_000)
    system_message: str | None = Field(None, alias="systemMessage", max_length=20_000)

    @field_validator("user_message")
    @classmethod
    def user_message_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("userMessage cannot be empty or whitespace")
        return v


class GroundedChatRequest(ChatRequest):
    """Body of POST /api/gemini/chat and /gemini_chat."""
    lat: float | None = Field(None, ge=-90, le=90)
    lng: float | None = Field(None, ge=-180, le=180)

    @model_validator(mode="after")
    def coordinates_together(self) -> "GroundedChatRequest":
        if (self.lat is None) != (self.lng is None):
            raise ValueError("lat and lng must be provided together")
        return self

    @property
    def has_location(self) -> bool:
        return self.lat is not None and self.lng is not None
