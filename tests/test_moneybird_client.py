"""
Tests for the Moneybird HTTP client

Tests cover:
- Administration-scoped URL building
- Fixed auth/content headers and timeout
- Retry policy and exponential backoff
- Error classification
- Lazy client provider
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
import requests

from moneybird_mcp.config import Credentials, MoneybirdSettings
from moneybird_mcp.services.errors import ErrorKind, MoneybirdError
from moneybird_mcp.services.moneybird import ClientProvider, MoneybirdClient


# ============================================================================
# Paths and headers
# ============================================================================

def test_leading_slash_hits_same_url(client, session, make_response):
    session.request.return_value = make_response(200, [])

    client.request("get", "/contacts")
    client.request("get", "contacts")

    first, second = session.request.call_args_list
    assert first.args[1] == second.args[1] == "https://moneybird.com/api/v2/123456/contacts"


def test_only_one_leading_slash_is_stripped(client):
    assert client.build_path("//contacts") == "123456//contacts"
    assert client.build_path("contacts/1") == "123456/contacts/1"


def test_request_sends_fixed_headers_and_timeout(client, session, make_response):
    session.request.return_value = make_response(200, {"id": "1"})

    client.request("post", "contacts", {"contact": {"company_name": "Acme"}})

    call = session.request.call_args
    assert call.args[0] == "POST"
    assert call.kwargs["headers"]["Authorization"] == "Bearer test-token"
    assert call.kwargs["headers"]["Content-Type"] == "application/json"
    assert call.kwargs["json"] == {"contact": {"company_name": "Acme"}}
    assert call.kwargs["timeout"] == 30


def test_query_params_are_forwarded(client, session, make_response):
    session.request.return_value = make_response(200, [])

    client.request("get", "contacts/filter", params={"filter": "first_name:Jan"})

    assert session.request.call_args.kwargs["params"] == {"filter": "first_name:Jan"}


def test_empty_response_returns_none(client, session, make_response):
    session.request.return_value = make_response(204)

    assert client.request("delete", "time_entries/1") is None


def test_non_json_body_returns_text(client, session, make_response):
    session.request.return_value = make_response(200, text="OK")

    assert client.request("get", "ping") == "OK"


def test_convenience_accessors_use_get(client, session, make_response):
    session.request.return_value = make_response(200, [])

    client.get_time_entries()
    client.get_sales_invoice("77")

    calls = session.request.call_args_list
    assert [call.args[0] for call in calls] == ["GET", "GET"]
    assert calls[0].args[1].endswith("/123456/time_entries")
    assert calls[1].args[1].endswith("/123456/sales_invoices/77")


def test_cookies_from_one_call_are_not_sent_on_the_next(make_response):
    client = MoneybirdClient(Credentials(api_token="t", administration_id="1"))
    first = make_response(200, [], headers={"Set-Cookie": "session=from-first-call"})

    with patch("moneybird_mcp.services.moneybird.requests.request",
               side_effect=[first, make_response(200, [])]) as mock_request:
        client.get_contacts()
        client.get_products()

    assert mock_request.call_count == 2
    second = mock_request.call_args_list[1]
    assert second.args[1] == "https://moneybird.com/api/v2/1/products"
    assert "Cookie" not in second.kwargs["headers"]
    assert "cookies" not in second.kwargs
    assert "Cookie" not in client.headers


def test_unsupported_method_is_rejected(client, session):
    with pytest.raises(MoneybirdError) as exc_info:
        client.request("patch", "contacts/1")

    assert exc_info.value.kind is ErrorKind.VALIDATION
    session.request.assert_not_called()


def test_missing_credentials_raise_authentication_error():
    with pytest.raises(MoneybirdError) as exc_info:
        MoneybirdClient(Credentials(api_token="", administration_id="123456"))

    assert exc_info.value.kind is ErrorKind.AUTHENTICATION


# ============================================================================
# Retry policy
# ============================================================================

@pytest.mark.parametrize("status, kind", [
    (400, ErrorKind.VALIDATION),
    (401, ErrorKind.AUTHENTICATION),
    (403, ErrorKind.PERMISSION),
    (404, ErrorKind.NOT_FOUND),
    (409, ErrorKind.CONFLICT),
    (422, ErrorKind.VALIDATION),
    (418, ErrorKind.GENERIC),
])
def test_client_errors_are_not_retried(client, session, sleeps, make_response, status, kind):
    session.request.return_value = make_response(status, {"error": "nope"})

    with pytest.raises(MoneybirdError) as exc_info:
        client.request("get", "contacts/1")

    assert session.request.call_count == 1
    assert sleeps == []
    assert exc_info.value.kind is kind
    assert exc_info.value.status_code == status
    assert exc_info.value.message == "nope"


@pytest.mark.parametrize("status", [429, 500, 502, 503])
def test_transient_statuses_are_retried_with_backoff(client, session, sleeps, make_response, status):
    session.request.return_value = make_response(status)

    with pytest.raises(MoneybirdError) as exc_info:
        client.request("get", "contacts")

    assert session.request.call_count == 3
    assert sleeps == [1.0, 2.0]
    assert exc_info.value.status_code == status


def test_network_failures_are_retried(client, session, sleeps):
    session.request.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(MoneybirdError) as exc_info:
        client.request("get", "contacts")

    assert session.request.call_count == 3
    assert sleeps == [1.0, 2.0]
    assert exc_info.value.kind is ErrorKind.GENERIC
    assert exc_info.value.status_code is None


def test_timeout_then_success(client, session, sleeps, make_response):
    session.request.side_effect = [
        requests.Timeout("read timed out"),
        make_response(503),
        make_response(200, [{"id": "1"}]),
    ]

    assert client.request("get", "contacts") == [{"id": "1"}]
    assert sleeps == [1.0, 2.0]


def test_last_failure_is_surfaced_unchanged(client, session, make_response):
    session.request.side_effect = [
        make_response(500),
        make_response(502),
        make_response(503, {"error": "Service unavailable"}),
    ]

    with pytest.raises(MoneybirdError) as exc_info:
        client.request("get", "contacts")

    assert exc_info.value.status_code == 503
    assert exc_info.value.message == "Service unavailable"
    assert exc_info.value.response == {"error": "Service unavailable"}


def test_retry_stops_at_first_terminal_error(client, session, sleeps, make_response):
    session.request.side_effect = [make_response(500), make_response(404)]

    with pytest.raises(MoneybirdError) as exc_info:
        client.request("get", "contacts/1")

    assert session.request.call_count == 2
    assert sleeps == [1.0]
    assert exc_info.value.kind is ErrorKind.NOT_FOUND


def test_backoff_sequence_follows_remaining_retries(session, sleeps, make_response):
    client = MoneybirdClient(
        Credentials(api_token="t", administration_id="1"),
        max_retries=3,
        session=session,
        sleep=sleeps.append,
    )
    session.request.return_value = make_response(500)

    with pytest.raises(MoneybirdError):
        client.request("get", "contacts")

    assert session.request.call_count == 4
    assert sleeps == [1.0, 2.0, 4.0]


def test_zero_retries_makes_one_attempt(session, sleeps, make_response):
    client = MoneybirdClient(
        Credentials(api_token="t", administration_id="1"),
        max_retries=0,
        session=session,
        sleep=sleeps.append,
    )
    session.request.return_value = make_response(500)

    with pytest.raises(MoneybirdError):
        client.request("get", "contacts")

    assert session.request.call_count == 1
    assert sleeps == []


# ============================================================================
# Rate limiting
# ============================================================================

def test_rate_limit_reset_from_header(client, session, make_response):
    session.request.return_value = make_response(429, headers={"RateLimit-Reset": "1700000000"})

    with pytest.raises(MoneybirdError) as exc_info:
        client.request("get", "contacts")

    assert exc_info.value.kind is ErrorKind.RATE_LIMIT
    assert exc_info.value.reset_at == datetime.fromtimestamp(1700000000, tz=timezone.utc)


def test_rate_limit_reset_from_retry_after(client, session, make_response):
    session.request.return_value = make_response(429, headers={"Retry-After": "60"})

    with pytest.raises(MoneybirdError) as exc_info:
        client.request("get", "contacts")

    assert exc_info.value.reset_at > datetime.now(timezone.utc)


def test_rate_limit_without_reset_is_unknown(client, session, make_response):
    session.request.return_value = make_response(429)

    with pytest.raises(MoneybirdError) as exc_info:
        client.request("get", "contacts")

    assert exc_info.value.reset_at is None


# ============================================================================
# Client provider
# ============================================================================

def test_provider_builds_client_once():
    factory = MagicMock()
    provider = ClientProvider(MoneybirdSettings(api_token="t", administration_id="1"), factory=factory)

    assert provider.get() is provider.get()
    factory.assert_called_once()


def test_provider_override_and_reset(client):
    factory = MagicMock()
    provider = ClientProvider(MoneybirdSettings(), factory=factory)

    provider.override(client)
    assert provider.get() is client
    factory.assert_not_called()

    provider.reset()
    provider.get()
    factory.assert_called_once()


def test_provider_without_credentials_raises_authentication_error():
    provider = ClientProvider(MoneybirdSettings())

    with pytest.raises(MoneybirdError) as exc_info:
        provider.get()

    assert exc_info.value.kind is ErrorKind.AUTHENTICATION


def test_settings_from_env(monkeypatch):
    monkeypatch.setattr("moneybird_mcp.config.dotenv.load_dotenv", lambda: None)
    monkeypatch.setenv("MONEYBIRD_API_TOKEN", "env-token")
    monkeypatch.setenv("MONEYBIRD_ADMINISTRATION_ID", "42")
    monkeypatch.setenv("MONEYBIRD_TIMEOUT_MS", "5000")
    monkeypatch.delenv("MONEYBIRD_MAX_RETRIES", raising=False)

    settings = MoneybirdSettings.from_env()

    assert settings.credentials == Credentials(api_token="env-token", administration_id="42")
    assert settings.timeout_ms == 5000
    assert settings.max_retries == 2


def test_settings_read_mcp_api_key(monkeypatch):
    monkeypatch.setattr("moneybird_mcp.config.dotenv.load_dotenv", lambda: None)
    monkeypatch.setenv("MCP_API_KEY", "secret")

    assert MoneybirdSettings.from_env().api_key == "secret"

    monkeypatch.setenv("MCP_API_KEY", "")
    assert MoneybirdSettings.from_env().api_key is None
