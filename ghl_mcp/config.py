"""Configuration management for the GHL MCP server.

This module handles all configuration settings: GoHighLevel credentials,
API endpoint details, server binding and logging. Settings are loaded from
a .env file if present.
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_CORS_ORIGINS = (
    "https://chatgpt.com,"
    "https://chat.openai.com,"
    "http://localhost:3000,"
    "http://localhost:9000"
)


def _port() -> int:
    return int(os.getenv("PORT") or os.getenv("MCP_SERVER_PORT") or 9000)


def _origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [o.strip() for o in raw.split(",") if o.strip()]


@dataclass(frozen=True)
class Settings:
    """Application settings and configuration.

    All settings are immutable (frozen=True). Values are read from the
    environment when the instance is created.

    Attributes:
        ghl_api_key: Private integration token or OAuth access token (GHL_API_KEY).
        ghl_location_id: Sub-account (location) used when a tool gets none (GHL_LOCATION_ID).
        ghl_base_url: API root (GHL_BASE_URL).
        ghl_api_version: Value of the ``Version`` header (GHL_API_VERSION).
        host: Interface the HTTP transport binds to (MCP_SERVER_HOST).
        port: HTTP port (PORT, then MCP_SERVER_PORT).
        request_timeout: Seconds before a GHL request is abandoned (GHL_REQUEST_TIMEOUT).
        log_level: Logging level name (LOG_LEVEL).
        log_path: Log file location (MCP_LOG_PATH).
        cors_origins: Browser origins allowed by the HTTP transport (CORS_ORIGINS).
    """
    ghl_api_key: str = field(default_factory=lambda: os.getenv("GHL_API_KEY", ""))
    ghl_location_id: str = field(default_factory=lambda: os.getenv("GHL_LOCATION_ID", ""))
    ghl_base_url: str = field(
        default_factory=lambda: os.getenv("GHL_BASE_URL", "https://services.leadconnectorhq.com")
    )
    ghl_api_version: str = field(default_factory=lambda: os.getenv("GHL_API_VERSION", "2021-07-28"))
    host: str = field(default_factory=lambda: os.getenv("MCP_SERVER_HOST", "0.0.0.0"))
    port: int = field(default_factory=_port)
    request_timeout: float = field(default_factory=lambda: float(os.getenv("GHL_REQUEST_TIMEOUT", "30")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    log_path: str = field(default_factory=lambda: os.getenv("MCP_LOG_PATH", "artifacts/mcp.log"))
    cors_origins: List[str] = field(default_factory=_origins)

    def require_credentials(self) -> None:
        """Raise ValueError if the GHL credentials are missing.

        Raises:
            ValueError: If GHL_API_KEY or GHL_LOCATION_ID is not set.
        """
        missing = []
        if not self.ghl_api_key:
            missing.append("GHL_API_KEY")
        if not self.ghl_location_id:
            missing.append("GHL_LOCATION_ID")
        if missing:
            raise ValueError(
                f"Missing required environment variable(s): {', '.join(missing)}.\n"
                "Create a private integration token in your GoHighLevel sub-account settings."
            )


# Global settings instance - import this in other modules
settings = Settings()
