"""
Configuration for the Moneybird MCP server.

Values are read from the process environment after loading a local `.env`
file with python-dotenv:

- MONEYBIRD_API_TOKEN / MONEYBIRD_ADMINISTRATION_ID: API credentials
- MONEYBIRD_API_URL: base endpoint (defaults to the public v2 API)
- MONEYBIRD_TIMEOUT_MS, MONEYBIRD_MAX_RETRIES, MONEYBIRD_RETRY_BASE_DELAY_MS
- MCP_API_KEY: optional key required in the X-API-Key header of every endpoint
- LOG_LEVEL, MCP_HOST, MCP_PORT
"""

import os
from typing import Optional

import dotenv
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_API_URL = "https://moneybird.com/api/v2"


def api_key_from_env() -> Optional[str]:
    """Key protecting the MCP endpoints, or None when unset."""
    return os.getenv("MCP_API_KEY") or None


class Credentials(BaseModel):
    """API token plus the administration every request is scoped to."""
    model_config = ConfigDict(frozen=True)

    api_token: str = Field(..., description="Moneybird API token")
    administration_id: str = Field(..., description="Moneybird administration ID")


class MoneybirdSettings(BaseModel):
    """Runtime settings for the client and the HTTP server."""
    api_token: Optional[str] = Field(None, description="Moneybird API token")
    administration_id: Optional[str] = Field(None, description="Moneybird administration ID")
    api_url: str = Field(DEFAULT_API_URL, description="Base URL of the Moneybird API")
    timeout_ms: int = Field(30000, gt=0, description="Per-request timeout in milliseconds")
    max_retries: int = Field(2, ge=0, le=10, description="Retries for transient failures")
    retry_base_delay_ms: int = Field(1000, ge=0, description="First backoff delay in milliseconds")
    api_key: Optional[str] = Field(None, description="Key required in the X-API-Key header")
    log_level: str = Field("INFO", description="Root log level")
    host: str = Field("0.0.0.0", description="Bind address for the HTTP server")
    port: int = Field(8001, description="Bind port for the HTTP server")

    @classmethod
    def from_env(cls) -> "MoneybirdSettings":
        dotenv.load_dotenv()
        values = {
            "api_token": os.getenv("MONEYBIRD_API_TOKEN"),
            "administration_id": os.getenv("MONEYBIRD_ADMINISTRATION_ID"),
            "api_url": os.getenv("MONEYBIRD_API_URL"),
            "timeout_ms": os.getenv("MONEYBIRD_TIMEOUT_MS"),
            "max_retries": os.getenv("MONEYBIRD_MAX_RETRIES"),
            "retry_base_delay_ms": os.getenv("MONEYBIRD_RETRY_BASE_DELAY_MS"),
            "api_key": api_key_from_env(),
            "log_level": os.getenv("LOG_LEVEL"),
            "host": os.getenv("MCP_HOST"),
            "port": os.getenv("MCP_PORT"),
        }
        # Unset variables fall back to the field defaults
        return cls(**{key: value for key, value in values.items() if value not in (None, "")})

    @property
    def credentials(self) -> Optional[Credentials]:
        """Credentials if both values are configured, otherwise None."""
        if not self.api_token or not self.administration_id:
            return None
        return Credentials(api_token=self.api_token, administration_id=self.administration_id)
