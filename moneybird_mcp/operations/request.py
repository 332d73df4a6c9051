"""
Generic passthrough to any administration-scoped Moneybird endpoint.
"""

import json
import logging
from typing import Any, Dict, Union

from ..services.moneybird import MoneybirdClient
from .models import GenericRequestOptions
from .pagination import coerce_options

logger = logging.getLogger(__name__)


def parse_body(data: Any) -> Any:
    """Parse a JSON string body; anything unparseable is sent unchanged."""
    if not isinstance(data, str):
        return data
    try:
        return json.loads(data)
    except ValueError:
        logger.warning("Could not parse request data as JSON, sending it as-is")
        return data


def make_generic_request(
    client: MoneybirdClient,
    options: Union[GenericRequestOptions, Dict[str, Any]],
) -> Any:
    options = coerce_options(GenericRequestOptions, options)
    return client.request(options.method, options.path, parse_body(options.data))
