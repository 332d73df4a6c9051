import logging
import time
from typing import Any, Callable, Dict, Optional

import requests

from ..config import Credentials, DEFAULT_API_URL, MoneybirdSettings
from .errors import ErrorKind, MoneybirdError, error_from_response

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "post", "put", "delete")


class MoneybirdClient:
    """
    HTTP client for the Moneybird v2 API.

    Every path is scoped to the configured administration. Transient failures
    (network errors, timeouts, 429 and 5xx responses) are retried with
    exponential backoff; anything else is raised immediately as a
    MoneybirdError.

    No cookie jar or other response state is kept between calls.
    """

    def __init__(
        self,
        credentials: Credentials,
        base_url: str = DEFAULT_API_URL,
        timeout_ms: int = 30000,
        max_retries: int = 2,
        base_delay_ms: int = 1000,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if credentials is None or not credentials.api_token or not credentials.administration_id:
            raise MoneybirdError(
                ErrorKind.AUTHENTICATION,
                "Moneybird credentials are not configured. "
                "Set MONEYBIRD_API_TOKEN and MONEYBIRD_ADMINISTRATION_ID.",
            )

        self.administration_id = credentials.administration_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout_ms / 1000
        self.max_retries = max_retries
        self.base_delay = base_delay_ms / 1000
        self.headers = {
            "Authorization": f"Bearer {credentials.api_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        # Without an injected session each call gets a fresh one, so no cookies carry over
        self.session = session
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: MoneybirdSettings, **kwargs) -> "MoneybirdClient":
        return cls(
            settings.credentials,
            base_url=settings.api_url,
            timeout_ms=settings.timeout_ms,
            max_retries=settings.max_retries,
            base_delay_ms=settings.retry_base_delay_ms,
            **kwargs,
        )

    def build_path(self, path: str) -> str:
        """Prefix a relative API path with the administration ID."""
        if path.startswith("/"):
            path = path[1:]
        return f"{self.administration_id}/{path}"

    def backoff_delay(self, retries_left: int) -> float:
        """Seconds to wait before the retry that leaves `retries_left - 1` retries."""
        return self.base_delay * (2 ** (self.max_retries - retries_left))

    def request(
        self,
        method: str,
        path: str,
        data: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Execute a request against the administration-scoped API.

        Args:
            method: One of get, post, put, delete (case-insensitive)
            path: Path relative to the administration, e.g. "contacts/123"
            data: Optional JSON body
            params: Optional query parameters

        Returns:
            Decoded JSON body, the raw text for non-JSON bodies, or None when empty

        Raises:
            MoneybirdError: On a terminal failure or when retries are exhausted
        """
        if method.lower() not in HTTP_METHODS:
            raise MoneybirdError(ErrorKind.VALIDATION, f"Unsupported HTTP method: {method}")

        url = f"{self.base_url}/{self.build_path(path)}"
        return self._execute(method.upper(), url, data, params, self.max_retries)

    def _execute(
        self,
        method: str,
        url: str,
        data: Any,
        params: Optional[Dict[str, Any]],
        retries_left: int,
    ) -> Any:
        try:
            return self._send(method, url, data, params)
        except MoneybirdError as e:
            if retries_left <= 0 or not e.retryable:
                raise

            delay = self.backoff_delay(retries_left)
            logger.warning(
                f"{method} {url} failed ({e.status_code or 'network error'}): {e.message}. "
                f"Retrying in {delay:.1f}s ({retries_left} retries left)"
            )
            self._sleep(delay)
            return self._execute(method, url, data, params, retries_left - 1)

    def _send(self, method: str, url: str, data: Any, params: Optional[Dict[str, Any]]) -> Any:
        try:
            http = self.session if self.session is not None else requests
            response = http.request(
                method,
                url,
                headers=self.headers,
                json=data,
                params=params,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise MoneybirdError(ErrorKind.GENERIC, f"Request to Moneybird failed: {e}") from e

        if response.status_code >= 400:
            raise error_from_response(response)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    # Convenience accessors

    def get_contacts(self) -> Any:
        return self.request("get", "contacts")

    def get_contact(self, contact_id: str) -> Any:
        return self.request("get", f"contacts/{contact_id}")

    def get_sales_invoices(self) -> Any:
        return self.request("get", "sales_invoices")

    def get_sales_invoice(self, invoice_id: str) -> Any:
        return self.request("get", f"sales_invoices/{invoice_id}")

    def get_financial_accounts(self) -> Any:
        return self.request("get", "financial_accounts")

    def get_products(self) -> Any:
        return self.request("get", "products")

    def get_projects(self) -> Any:
        return self.request("get", "projects")

    def get_time_entries(self) -> Any:
        return self.request("get", "time_entries")


class ClientProvider:
    """
    Builds one MoneybirdClient on first use and hands out the same instance.

    The host creates a provider once and passes it to the tool dispatcher.
    `override` and `reset` exist so tests can swap the client.
    """

    def __init__(
        self,
        settings: Optional[MoneybirdSettings] = None,
        factory: Callable[[MoneybirdSettings], MoneybirdClient] = MoneybirdClient.from_settings,
    ):
        self.settings = settings or MoneybirdSettings()
        self._factory = factory
        self._client: Optional[MoneybirdClient] = None

    def get(self) -> MoneybirdClient:
        if self._client is None:
            self._client = self._factory(self.settings)
            logger.info(f"Moneybird client initialized for administration {self._client.administration_id}")
        return self._client

    def override(self, client: MoneybirdClient) -> None:
        self._client = client

    def reset(self) -> None:
        self._client = None
