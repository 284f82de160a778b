"""Centralised application configuration.

Settings are loaded from environment variables or the `.env` file in the
project root. Using pydantic's BaseSettings provides convenient parsing
and type checking. The proxy service receives a Settings instance at
construction time, so tests can pass their own values instead of touching
the process environment.
"""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Gemini
    gemini_api_key: str | None = Field(
        default=None, validation_alias=AliasChoices("GEMINI_API_KEY", "gemini_api_key")
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash-preview-05-20",
        validation_alias=AliasChoices("GEMINI_MODEL", "gemini_model"),
    )
    gemini_api_base: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        validation_alias=AliasChoices("GEMINI_API_BASE", "gemini_api_base"),
    )

    # Upstream call bounds (seconds)
    upstream_connect_timeout: float = Field(
        default=10.0,
        validation_alias=AliasChoices(
            "UPSTREAM_CONNECT_TIMEOUT", "upstream_connect_timeout"
        ),
    )
    upstream_read_timeout: float = Field(
        default=120.0,
        validation_alias=AliasChoices("UPSTREAM_READ_TIMEOUT", "upstream_read_timeout"),
    )

    # HTTP surface
    proxy_path: str = Field(
        default="/api/proxy", validation_alias=AliasChoices("PROXY_PATH", "proxy_path")
    )

    # Logging/observability
    service_name: str = Field(
        default="audience-proxy",
        validation_alias=AliasChoices("SERVICE_NAME", "service_name"),
    )
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("ENVIRONMENT", "environment"),
    )
    log_level: str = Field(
        default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level")
    )
    # "json" or "console"; empty follows ENVIRONMENT
    log_format: str = Field(
        default="", validation_alias=AliasChoices("LOG_FORMAT", "log_format")
    )
