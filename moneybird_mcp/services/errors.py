"""
Typed failures raised by the Moneybird client and resource operations.

A single exception type carries an `ErrorKind` tag instead of one subclass
per failure; the tool dispatcher is the only place that turns these into
user-facing text.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Optional

import requests


class ErrorKind(str, Enum):
    """Failure categories surfaced to MCP callers."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    RATE_LIMIT = "rate_limit"
    CONFLICT = "conflict"
    GENERIC = "generic"


STATUS_KINDS = {
    400: ErrorKind.VALIDATION,
    401: ErrorKind.AUTHENTICATION,
    403: ErrorKind.PERMISSION,
    404: ErrorKind.NOT_FOUND,
    409: ErrorKind.CONFLICT,
    422: ErrorKind.VALIDATION,
    429: ErrorKind.RATE_LIMIT,
}


class MoneybirdError(Exception):
    """Failure talking to Moneybird, tagged with its `ErrorKind`."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        status_code: Optional[int] = None,
        response: Any = None,
        reset_at: Optional[datetime] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.response = response
        self.reset_at = reset_at

    @property
    def retryable(self) -> bool:
        """Network failures, rate limiting and server errors are transient."""
        if self.status_code is None:
            return self.kind is ErrorKind.GENERIC
        return self.status_code == 429 or self.status_code >= 500

    def __repr__(self) -> str:
        return f"MoneybirdError(kind={self.kind.value!r}, status_code={self.status_code!r}, message={self.message!r})"


def _response_payload(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


def _parse_reset_at(response: requests.Response) -> Optional[datetime]:
    """
    Read the rate-limit reset moment from the response headers.

    `RateLimit-Reset` carries a unix timestamp, `Retry-After` a number of
    seconds. Returns None when neither is usable.
    """
    reset = response.headers.get("RateLimit-Reset")
    if reset:
        try:
            return datetime.fromtimestamp(int(reset), tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            pass

    retry_after = response.headers.get("Retry-After")
    if retry_after:
        try:
            return datetime.now(timezone.utc) + timedelta(seconds=int(retry_after))
        except ValueError:
            pass

    return None


def error_from_response(response: requests.Response) -> MoneybirdError:
    """
    Classify an HTTP error response.

    Args:
        response: Response with a 4xx or 5xx status code

    Returns:
        MoneybirdError with kind, message, status code and payload filled in
    """
    status = response.status_code
    payload = _response_payload(response)

    message = f"Request failed with status code {status}"
    if isinstance(payload, dict) and isinstance(payload.get("error"), str):
        message = payload["error"]

    kind = STATUS_KINDS.get(status, ErrorKind.GENERIC)
    reset_at = _parse_reset_at(response) if kind is ErrorKind.RATE_LIMIT else None

    return MoneybirdError(kind, message, status_code=status, response=payload, reset_at=reset_at)


def not_found(resource: str, resource_id: str) -> MoneybirdError:
    return MoneybirdError(ErrorKind.NOT_FOUND, f"{resource} with ID {resource_id} not found")
