"""
Text rendering for tool results and failures.

This is the only place where errors become user-facing text.
"""

import json
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from moneybird_mcp.operations.models import ListResult
from moneybird_mcp.services.errors import ErrorKind, MoneybirdError

CHUNK_SIZE = 50

CONTACT_FIELDS = ("id", "company_name", "firstname", "lastname", "email", "phone")
INVOICE_FIELDS = (
    "id", "invoice_id", "contact_id", "reference", "state", "date", "due_date",
    "total_price_incl_tax", "total_price_excl_tax", "currency", "paid_at",
)


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def summarize(items: List[Dict[str, Any]], fields: tuple) -> List[Dict[str, Any]]:
    """Reduce each item to the given fields."""
    return [{field: item.get(field) for field in fields} for item in items]


TRUNCATED_HINT = "(Response truncated for stability. Use pagination to see more.)"


def format_list(
    items: List[Dict[str, Any]],
    label: str,
    chunk_size: int = CHUNK_SIZE,
    hint: str = TRUNCATED_HINT,
) -> str:
    """
    Render a list as JSON, truncating to the first chunk when it is too long.

    Args:
        items: Items to render
        label: Plural noun used in the truncation notice (e.g. "contacts")
        chunk_size: Maximum number of items rendered
        hint: Closing line of the truncation notice

    Returns:
        JSON text, with a notice when items were left out
    """
    if len(items) <= chunk_size:
        return to_json(items)

    shown = items[:chunk_size]
    return (
        f"Retrieved {len(items)} {label}. Showing first {len(shown)}:\n\n"
        f"{to_json(shown)}\n\n{hint}"
    )


def format_list_result(result: ListResult, label: str, chunk_size: int = CHUNK_SIZE) -> str:
    hint = TRUNCATED_HINT
    if result.paginated:
        hint = f"(Response truncated for stability. Use perPage {chunk_size} or less to see the whole page.)"
    text = format_list(result.items, label, chunk_size, hint)

    if result.paginated:
        text = (
            f"Page {result.page} of {result.total_pages} "
            f"({result.total_count} {label} in total, {result.per_page} per page)\n\n{text}"
        )
    if result.filtered:
        text = f"Filtered {label} with criteria: {json.dumps(result.filter_criteria)}\n\n{text}"
    return text


def format_validation_error(tool_name: str, error: ValidationError) -> str:
    """Itemize every field problem of a failed argument validation."""
    lines = [f"Invalid arguments for tool '{tool_name}':"]
    for problem in error.errors():
        location = ".".join(str(part) for part in problem.get("loc", ())) or "arguments"
        lines.append(f"- {location}: {problem.get('msg')}")
    return "\n".join(lines)


def format_moneybird_error(error: MoneybirdError) -> str:
    if error.kind is ErrorKind.RATE_LIMIT:
        message = f"Rate Limit Exceeded: {error.message}"
        reset = error.reset_at.isoformat() if error.reset_at else "unknown"
        message += f"\nResets at: {reset}"
    else:
        message = f"Moneybird API Error [{error.kind.value}]: {error.message}"

    if error.status_code is not None:
        message += f"\nStatus: {error.status_code}"
    if error.response is not None:
        message += f"\nDetails: {json.dumps(error.response, default=str)}"
    return message


def format_error(tool_name: str, error: Exception) -> str:
    """Turn any failure raised while handling a tool call into text."""
    if isinstance(error, ValidationError):
        return format_validation_error(tool_name, error)
    if isinstance(error, MoneybirdError):
        return format_moneybird_error(error)
    return f"Failed to execute {tool_name}: {error}"


def unknown_tool_message(tool_name: str, available: Optional[List[str]] = None) -> str:
    message = f"Unknown tool: '{tool_name}'."
    if available:
        message += f" Available tools: {', '.join(available)}"
    return message
