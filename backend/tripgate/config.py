"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - Request logic receives Settings through FastAPI dependencies, never reads os.environ

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Missing API keys do not block start-up; the affected route reports
      UpstreamNotConfigured instead
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Places search (Foursquare)
    fsq_api_key: str = ""
    fsq_api_version: str = "2025-06-17"
    fsq_base_url: str = "https://places-api.foursquare.com/places/search"

    # LLM chat (OpenRouter, OpenAI-compatible)
    openrouter_api_key: str = ""
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    chat_model: str = "deepseek/deepseek-r1-0528:free"
    openrouter_referer: str | None = None
    openrouter_title: str | None = None

    # Grounded generative AI (Gemini)
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-2.5-flash"
    gemini_grounding_tool: Literal["googleMaps", "googleSearch"] = "googleMaps"

    # Outbound calls
    upstream_timeout_seconds: float = Field(30.0, gt=0)
    og_fetch_timeout_seconds: float = Field(8.0, gt=0)
    og_max_redirects: int = Field(5, ge=0)
    og_max_page_bytes: int = Field(512_000, gt=0)
    og_user_agent: str = DEFAULT_USER_AGENT
    disconnect_poll_interval_seconds: float = Field(0.25, gt=0)

    # Chat response shape
    chat_reply_field: str = "reply"
    chat_strip_code_fences: bool = True
    chat_strict_json: bool = True

    # API
    cors_origins: list[str] = ["*"]
    host: str = "0.0.0.0"  # nosec B104
    port: int = 3000

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("openrouter_base_url", "gemini_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("chat_reply_field")
    @classmethod
    def reply_field_not_reserved(cls, v: str) -> str:
        v = v.strip()
        if not v or v == "groundingChunks":
            raise ValueError("chat_reply_field must be a non-empty name other than groundingChunks")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
