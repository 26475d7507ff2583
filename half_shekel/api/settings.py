"""
HTTP service settings for the half shekel API.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class APISettings(BaseSettings):
    """Bind address, logging and public URL of the API."""

    api_host: str = Field(default="0.0.0.0", description="API host address")
    api_port: int = Field(default=8000, description="API port number")
    log_level: str = Field(default="INFO", description="Uvicorn logging level")
    public_base_url: str | None = Field(
        default=None,
        description="Canonical site URL for robots.txt and sitemap.xml; "
        "derived from the request headers when unset",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


api_settings = APISettings()
