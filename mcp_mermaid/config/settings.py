"""
Application Settings
===================

Server, transport and rendering settings using Pydantic Settings.
Every field can be overridden with an ``MCP_MERMAID_`` prefixed environment variable.
"""

from typing import Optional
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main application settings with environment variable support."""

    # Application Configuration
    app_name: str = Field(default="mcp-mermaid", description="Application name")
    app_version: str = Field(default="0.1.3", description="Application version")
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Optional rotating log file")

    # Transport Configuration
    transport: str = Field(default="stdio", description="Transport: stdio, sse, streamable")
    host: str = Field(default="0.0.0.0", description="HTTP transport host")
    port: int = Field(default=3033, description="HTTP transport port")
    sse_endpoint: str = Field(default="/sse", description="SSE stream endpoint")
    sse_message_path: str = Field(
        default="/messages/", description="Endpoint receiving client messages for SSE sessions"
    )
    http_endpoint: str = Field(default="/mcp", description="Streamable HTTP endpoint")

    # Mermaid Configuration
    mermaid_js_url: str = Field(
        default="https://cdn.jsdelivr.net/npm/mermaid@11/dist/mermaid.min.js",
        description="URL mermaid.js is loaded from",
    )
    mermaid_js_path: Optional[Path] = Field(
        default=None, description="Local mermaid.js file, used instead of mermaid_js_url"
    )

    # Browser Configuration
    playwright_headless: bool = Field(default=True, description="Run browser in headless mode")
    playwright_timeout: int = Field(default=30000, description="Playwright timeout in milliseconds")
    browser_pool_size: int = Field(
        default=2, ge=1, description="Browser instance pool size and concurrent render limit"
    )

    # Rendering Configuration
    render_timeout: float = Field(
        default=30.0, ge=0, description="Per-invocation render timeout in seconds, 0 disables"
    )
    strict_screenshot: bool = Field(
        default=False, description="Fail PNG output when the renderer returns no screenshot"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("transport")
    @classmethod
    def validate_transport(cls, v: str) -> str:
        """Validate transport name."""
        allowed = {"stdio", "sse", "streamable"}
        if v.lower() not in allowed:
            raise ValueError(f"Transport must be one of: {allowed}")
        return v.lower()

    @field_validator("sse_endpoint", "sse_message_path", "http_endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Endpoints are absolute URL paths."""
        if not v.startswith("/"):
            raise ValueError(f"Endpoint must start with '/': {v}")
        return v

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, env_prefix="MCP_MERMAID_"
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
