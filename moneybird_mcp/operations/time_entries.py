"""
Time entry operations.

Listings filter by project first, then by the `started_at` date range
(inclusive on both ends), then paginate.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Union

from ..services.moneybird import MoneybirdClient
from .models import ListResult, ListTimeEntriesOptions, TimeEntryData, parse_moment
from .pagination import as_list, coerce_options, find_by_id, paginate, payload


def _started_within(entry: Dict[str, Any], start: Optional[datetime], end: Optional[datetime]) -> bool:
    started = parse_moment(entry.get("started_at"))
    if started is None:
        return False
    if start is not None and started < start:
        return False
    if end is not None and started > end:
        return False
    return True


def get_time_entry(client: MoneybirdClient, entry_id: str) -> Dict[str, Any]:
    return find_by_id(as_list(client.get_time_entries(), "time entries"), entry_id, "Time entry")


def list_time_entries(
    client: MoneybirdClient,
    options: Union[ListTimeEntriesOptions, Dict[str, Any], None] = None,
) -> ListResult:
    options = coerce_options(ListTimeEntriesOptions, options)
    entries = as_list(client.get_time_entries(), "time entries")

    if options.project_id:
        entries = [entry for entry in entries if str(entry.get("project_id")) == options.project_id]

    start = parse_moment(options.start_date)
    end = parse_moment(options.end_date)
    if start is not None or end is not None:
        entries = [entry for entry in entries if _started_within(entry, start, end)]

    return paginate(entries, options.page, options.per_page)


def create_time_entry(client: MoneybirdClient, data: Union[TimeEntryData, Dict[str, Any]]) -> Dict[str, Any]:
    return client.request("post", "time_entries", {"time_entry": payload(TimeEntryData, data)})


def update_time_entry(client: MoneybirdClient, entry_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
    return client.request("put", f"time_entries/{entry_id}", {"time_entry": data})


def delete_time_entry(client: MoneybirdClient, entry_id: str) -> Any:
    return client.request("delete", f"time_entries/{entry_id}")
