"""Configuration management for the Gong MCP server.

Settings are read from the environment (and an optional ``.env`` file) once at
process start using Pydantic Settings. The server core never reads the
environment itself: it receives an immutable ``GongConfig`` built from
``GongSettings.to_config()``, or ``None`` when credentials are incomplete.
"""

import logging
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Valid logging levels
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

GONG_CREDENTIAL_VARS = ("GONG_BASE_URL", "GONG_ACCESS_KEY", "GONG_ACCESS_KEY_SECRET")


def running_in_docker() -> bool:
    """Detect whether the process runs inside a Docker container."""
    if os.environ.get("DOCKER_ENV") is not None:
        return True
    if Path("/.dockerenv").exists():
        return True
    try:
        return "docker" in Path("/proc/1/cgroup").read_text(encoding="utf-8")
    except OSError:
        return False


def default_host() -> str:
    """Bind on all interfaces inside Docker, loopback otherwise."""
    return "0.0.0.0" if running_in_docker() else "127.0.0.1"


class GongConfig(BaseModel):
    """Credentials and endpoint needed to reach the Gong API.

    Immutable for the lifetime of the server.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    endpoint: str = Field(..., min_length=1, description="Gong API base URL")
    key_id: str = Field(..., min_length=1, description="Gong access key")
    key_secret: SecretStr = Field(..., description="Gong access key secret")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")

    @field_validator("endpoint")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so endpoint paths can be appended."""
        return v.strip().rstrip("/")


class MCPServerSettings(BaseSettings):
    """Main MCP server configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MCP_", env_file=".env", extra="ignore"
    )

    # Server settings
    server_name: str = Field(default="gong-mcp", description="MCP server name")

    version: str = Field(default="0.1.0", description="Server version")

    log_level: str = Field(default="INFO", description="Logging level")

    structured_logging: bool = Field(
        default=True, description="Enable structured JSON logging"
    )

    # Transport settings
    transport: Literal["stdio", "http"] = Field(
        default="stdio", description="Transport mode"
    )

    host: str = Field(
        default_factory=default_host, description="Host to bind in HTTP mode"
    )

    port: int = Field(default=8080, ge=1, le=65535, description="Port to bind in HTTP mode")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        upper_v = v.upper()
        if upper_v not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: {sorted(VALID_LOG_LEVELS)}"
            )
        return upper_v

    @field_validator("server_name")
    @classmethod
    def validate_server_name(cls, v: str) -> str:
        """Validate server name is not empty."""
        if not v or not v.strip():
            raise ValueError("Server name cannot be empty")
        return v.strip()


class GongSettings(BaseSettings):
    """Gong API credentials and client settings."""

    model_config = SettingsConfigDict(
        env_prefix="GONG_", env_file=".env", extra="ignore"
    )

    base_url: str = Field(default="", description="Gong API base URL")

    access_key: str = Field(default="", description="Gong access key")

    access_key_secret: str = Field(default="", description="Gong access key secret")

    api_timeout: int = Field(
        default=30, ge=5, le=120, description="API request timeout in seconds"
    )

    @property
    def is_configured(self) -> bool:
        """Check if all Gong credentials are provided."""
        return all([self.base_url, self.access_key, self.access_key_secret])

    @property
    def missing_credentials(self) -> list[str]:
        """Names of the credential variables that are not set."""
        values = (self.base_url, self.access_key, self.access_key_secret)
        return [name for name, value in zip(GONG_CREDENTIAL_VARS, values) if not value]

    def to_config(self) -> GongConfig | None:
        """Build the immutable Gong configuration.

        Returns:
            GongConfig when every credential is present, otherwise None
        """
        if not self.is_configured:
            missing = self.missing_credentials
            if len(missing) < len(GONG_CREDENTIAL_VARS):
                logger.warning(
                    "Incomplete Gong credentials, server starts unconfigured. Missing: %s",
                    ", ".join(missing),
                )
            return None

        return GongConfig(
            endpoint=self.base_url,
            key_id=self.access_key,
            key_secret=SecretStr(self.access_key_secret),
            timeout=float(self.api_timeout),
        )


class Settings:
    """Aggregated settings for the entire application."""

    def __init__(self) -> None:
        """Initialize all settings groups.

        Raises ValidationError if any settings group is invalid.
        """
        self.server = MCPServerSettings()
        self.gong = GongSettings()

    @property
    def is_gong_configured(self) -> bool:
        """Check if the Gong integration is fully configured."""
        return self.gong.is_configured


def get_settings() -> Settings:
    """Get or create global settings instance.

    Returns:
        Settings instance
    """
    global _settings
    if "_settings" not in globals():
        _settings = Settings()
    return _settings
