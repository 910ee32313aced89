"""Application settings (env/.env)."""

from __future__ import annotations

from typing import Literal

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the MCP server and the Raindrop.io REST API."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    raindrop_access_token: str = Field(alias="RAINDROP_ACCESS_TOKEN", min_length=1)
    raindrop_base_url: AnyHttpUrl = Field(
        default="https://api.raindrop.io/rest/v1",
        alias="RAINDROP_BASE_URL",
    )

    # Only the HTTP transport is protected by an API key.
    mcp_api_key: str | None = Field(default=None, alias="MCP_API_KEY", min_length=1)
    mcp_host: str = Field(default="127.0.0.1", alias="MCP_HOST")
    mcp_port: int = Field(default=3002, alias="MCP_PORT", ge=1, le=65535)
    mcp_transport: Literal["http", "stdio"] = Field(default="http", alias="MCP_TRANSPORT")

    http_timeout_seconds: float = Field(
        default=15.0,
        alias="HTTP_TIMEOUT_SECONDS",
        gt=0,
    )
    log_level: Literal["debug", "info", "warn", "warning", "error"] = Field(
        default="info",
        alias="LOG_LEVEL",
    )
