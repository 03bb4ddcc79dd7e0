"""Pydantic configuration model for httpwire clients."""

from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


class ClientConfig(BaseModel):
    """Configuration for AsyncHttpClient."""

    host: str = Field(..., description="Base host or URL, e.g. 'api.example.com' or 'https://api.example.com/v1'")
    port: Optional[int] = Field(None, ge=1, le=65535, description="Port override (takes precedence over the host's)")
    default_headers: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_HEADERS),
        description="Headers sent with every request; per-request headers win",
    )
    timeout: float = Field(60.0, gt=0, description="Total request timeout in seconds")

    model_config = {"extra": "forbid"}
