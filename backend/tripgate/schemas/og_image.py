"""Open Graph image response schema."""

from pydantic import BaseModel, ConfigDict, Field


class OgImageResponse(BaseModel):
    """{"ogImage": <url or null>}. null means no matching tag, not an error."""
    model_config = ConfigDict(populate_by_name=True)

    og_image: str | None = Field(None, alias="ogImage")
