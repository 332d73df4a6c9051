"""
Shared fixtures: a Moneybird client whose requests.Session is a MagicMock,
plus a builder for fake HTTP responses.
"""

import json
from unittest.mock import MagicMock

import pytest

from moneybird_mcp.config import Credentials
from moneybird_mcp.services.moneybird import MoneybirdClient


def build_response(status_code=200, payload=None, headers=None, text=None):
    response = MagicMock()
    response.status_code = status_code
    response.headers = headers or {}

    if payload is not None:
        response.json.return_value = payload
        response.text = json.dumps(payload)
        response.content = response.text.encode()
    else:
        response.json.side_effect = ValueError("No JSON object could be decoded")
        response.text = text or ""
        response.content = response.text.encode()
    return response


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def sleeps():
    """Delays requested by the client, in seconds."""
    return []


@pytest.fixture
def client(session, sleeps):
    return MoneybirdClient(
        Credentials(api_token="test-token", administration_id="123456"),
        session=session,
        sleep=sleeps.append,
    )
