"""
Configuration settings for the Random User MCP server.

Uses Pydantic Settings to load environment variables for the upstream API,
the tool-invocation server identity, and logging.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Upstream API
    api_url: str = Field("https://randomuser.me/api/", alias="RANDOMUSER_API_URL")
    timeout_seconds: float = Field(5.0, alias="RANDOMUSER_TIMEOUT_SECONDS")
    user_agent: str = Field("randomuser-mcp/0.1.0", alias="RANDOMUSER_USER_AGENT")

    # Server identity
    server_name: str = Field("randomuser-server", alias="MCP_SERVER_NAME")
    server_version: str = Field("1.0.0", alias="MCP_SERVER_VERSION")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
