"""
Authentication Middleware for MCP Server

Provides optional API key authentication for MCP endpoints. The Moneybird
credentials themselves never leave the server.
"""

from fastapi import HTTPException, Security
from fastapi.security import APIKeyHeader
from typing import Optional

from moneybird_mcp.config import api_key_from_env

# API Key header name
API_KEY_HEADER = APIKeyHeader(name="X-API-Key", auto_error=False)


def get_api_key() -> Optional[str]:
    """Get the configured MCP_API_KEY, if any."""
    return api_key_from_env()


def verify_api_key(api_key: Optional[str] = Security(API_KEY_HEADER)) -> str:
    """
    Verify API key from request header.

    Usage:
        @app.get("/endpoint")
        async def endpoint(api_key: str = Security(verify_api_key)):
            ...

    Args:
        api_key: API key from X-API-Key header

    Returns:
        The verified API key

    Raises:
        HTTPException: If API key is missing or invalid
    """
    expected_key = get_api_key()

    # If no API key is configured, allow all requests (development mode)
    if not expected_key:
        return "dev-mode"

    if api_key is None:
        raise HTTPException(
            status_code=401,
            detail="Missing API key. Please provide X-API-Key header."
        )

    if api_key != expected_key:
        raise HTTPException(
            status_code=403,
            detail="Invalid API key."
        )

    return api_key
