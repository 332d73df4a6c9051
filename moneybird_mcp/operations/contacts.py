"""
Contact operations.

Plain listings fetch the whole collection and paginate client-side. When a
filter, query, include_archived or todo value is given, the dedicated
`contacts/filter` endpoint is used instead and pagination is left to the server.
"""

import logging
from typing import Any, Dict, Optional, Union

from ..services.moneybird import MoneybirdClient
from .models import ContactData, ListContactsOptions, ListResult
from .pagination import as_list, coerce_options, paginate, payload

logger = logging.getLogger(__name__)

FILTER_PARAMS = ("filter", "query", "include_archived", "todo")


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def get_contact(client: MoneybirdClient, contact_id: str) -> Dict[str, Any]:
    return client.get_contact(contact_id)


def list_contacts(
    client: MoneybirdClient,
    options: Union[ListContactsOptions, Dict[str, Any], None] = None,
) -> ListResult:
    """
    List contacts, optionally through the filter endpoint.

    Args:
        client: Moneybird client
        options: Pagination and filter options

    Returns:
        ListResult; `filtered` is True when the filter endpoint was used
    """
    options = coerce_options(ListContactsOptions, options)

    if options.uses_filter_endpoint:
        params: Dict[str, Any] = {}
        if options.page:
            params["page"] = options.page
        if options.per_page:
            params["per_page"] = options.per_page
        for name in FILTER_PARAMS:
            value = getattr(options, name)
            if value:
                params[name] = _query_value(value)

        logger.info(f"Filtering contacts with {params}")
        contacts = as_list(client.request("get", "contacts/filter", params=params), "contacts")
        return ListResult(
            items=contacts,
            page=options.page,
            per_page=options.per_page,
            filtered=True,
            filter_criteria=options.model_dump(by_alias=True, exclude_none=True),
        )

    contacts = as_list(client.get_contacts(), "contacts")
    return paginate(contacts, options.page, options.per_page)


def create_contact(client: MoneybirdClient, data: Union[ContactData, Dict[str, Any]]) -> Dict[str, Any]:
    return client.request("post", "contacts", {"contact": payload(ContactData, data)})


def update_contact(client: MoneybirdClient, contact_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
    return client.request("put", f"contacts/{contact_id}", {"contact": data})
