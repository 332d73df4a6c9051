"""
MCP Tool Endpoint Handlers

Handles tool listing and execution for MCP protocol.
Every tool call goes through the same steps: look up the tool, validate the
arguments against its model, run the resource operation, and render the
result or the failure as a single text block.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, Optional, Type

from pydantic import BaseModel, ValidationError

from moneybird_mcp import operations
from moneybird_mcp.operations.models import (
    GenericRequestOptions,
    ListContactsOptions,
    ListFinancialAccountsOptions,
    ListInvoicesOptions,
    ListProductsOptions,
    ListProjectsOptions,
    ListTimeEntriesOptions,
)
from moneybird_mcp.services.moneybird import ClientProvider, MoneybirdClient
from ..models import (
    GetContactArguments,
    GetSalesInvoiceArguments,
    NoArguments,
    ToolDefinition,
    ToolListResponse,
    ToolCallRequest,
    ToolCallResponse,
)
from .formatting import (
    CONTACT_FIELDS,
    INVOICE_FIELDS,
    format_error,
    format_list,
    format_list_result,
    summarize,
    to_json,
    unknown_tool_message,
)
from .prompts import ASSISTANT_PROMPT

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Optional[MoneybirdClient], Any], str]


# ============================================================================
# Handlers
# ============================================================================

def _list_contacts(client: MoneybirdClient, args: ListContactsOptions) -> str:
    result = operations.list_contacts(client, args)
    logger.info(f"Retrieved {len(result.items)} contacts")
    result.items = summarize(result.items, CONTACT_FIELDS)
    return format_list_result(result, "contacts")


def _get_contact(client: MoneybirdClient, args: GetContactArguments) -> str:
    return to_json(operations.get_contact(client, args.contact_id))


def _list_sales_invoices(client: MoneybirdClient, args: ListInvoicesOptions) -> str:
    result = operations.list_invoices(client, args)
    logger.info(f"Retrieved {len(result.items)} sales invoices")
    result.items = summarize(result.items, INVOICE_FIELDS)
    return format_list_result(result, "sales invoices")


def _get_sales_invoice(client: MoneybirdClient, args: GetSalesInvoiceArguments) -> str:
    return to_json(operations.get_invoice(client, args.invoice_id))


def _list_financial_accounts(client: MoneybirdClient, args: ListFinancialAccountsOptions) -> str:
    return format_list_result(operations.list_financial_accounts(client, args), "financial accounts")


def _list_products(client: MoneybirdClient, args: ListProductsOptions) -> str:
    return format_list_result(operations.list_products(client, args), "products")


def _list_projects(client: MoneybirdClient, args: ListProjectsOptions) -> str:
    return format_list_result(operations.list_projects(client, args), "projects")


def _list_time_entries(client: MoneybirdClient, args: ListTimeEntriesOptions) -> str:
    return format_list_result(operations.list_time_entries(client, args), "time entries")


def _moneybird_request(client: MoneybirdClient, args: GenericRequestOptions) -> str:
    logger.info(f"Making {args.method.upper()} request to {args.path}")
    result = operations.make_generic_request(client, args)
    if isinstance(result, list):
        return format_list(result, "items")
    return to_json(result)


def _moneybird_assistant(client: Optional[MoneybirdClient], args: NoArguments) -> str:
    return ASSISTANT_PROMPT


# ============================================================================
# Registry
# ============================================================================

PAGINATION_PROPERTIES: Dict[str, Any] = {
    "page": {
        "type": "integer",
        "description": "Page number for pagination (starts from 1, requires perPage)",
        "minimum": 1
    },
    "perPage": {
        "type": "integer",
        "description": "Items per page (max 100, requires page)",
        "minimum": 1,
        "maximum": 100
    }
}

# Tool registry with metadata
TOOL_REGISTRY: Dict[str, Dict[str, Any]] = {
    "list_contacts": {
        "description": "List all contacts from your Moneybird account with optional filtering",
        "inputSchema": {
            "type": "object",
            "properties": {
                **PAGINATION_PROPERTIES,
                "query": {
                    "type": "string",
                    "description": "General search term across contact fields"
                },
                "filter": {
                    "type": "string",
                    "description": (
                        "Specific filter in format 'property:value' (e.g., 'created_after:2023-01-01 00:00:00 UTC', "
                        "'updated_after:2023-01-01', 'first_name:value')"
                    )
                },
                "include_archived": {
                    "type": "boolean",
                    "description": "Include archived contacts in results"
                },
                "todo": {
                    "type": "string",
                    "description": "Filter contacts based on outstanding tasks"
                }
            },
            "additionalProperties": False
        },
        "arguments": ListContactsOptions,
        "handler": _list_contacts,
    },
    "get_contact": {
        "description": "Get a specific contact by ID from your Moneybird account",
        "inputSchema": {
            "type": "object",
            "properties": {
                "contact_id": {
                    "type": "string",
                    "description": "The ID of the contact to retrieve"
                }
            },
            "required": ["contact_id"],
            "additionalProperties": False
        },
        "arguments": GetContactArguments,
        "handler": _get_contact,
    },
    "list_sales_invoices": {
        "description": "List all sales invoices from your Moneybird account",
        "inputSchema": {
            "type": "object",
            "properties": {
                **PAGINATION_PROPERTIES,
                "state": {
                    "type": "string",
                    "enum": [
                        "all", "draft", "open", "scheduled", "pending_payment",
                        "payment_failed", "paid", "late", "late_draft"
                    ],
                    "description": "Filter by invoice state"
                }
            },
            "additionalProperties": False
        },
        "arguments": ListInvoicesOptions,
        "handler": _list_sales_invoices,
    },
    "get_sales_invoice": {
        "description": "Get a specific sales invoice by ID from your Moneybird account",
        "inputSchema": {
            "type": "object",
            "properties": {
                "invoice_id": {
                    "type": "string",
                    "description": "The ID of the sales invoice to retrieve"
                }
            },
            "required": ["invoice_id"],
            "additionalProperties": False
        },
        "arguments": GetSalesInvoiceArguments,
        "handler": _get_sales_invoice,
    },
    "list_financial_accounts": {
        "description": "List all financial accounts from your Moneybird account",
        "inputSchema": {
            "type": "object",
            "properties": {**PAGINATION_PROPERTIES},
            "additionalProperties": False
        },
        "arguments": ListFinancialAccountsOptions,
        "handler": _list_financial_accounts,
    },
    "list_products": {
        "description": "List all products from your Moneybird account",
        "inputSchema": {
            "type": "object",
            "properties": {**PAGINATION_PROPERTIES},
            "additionalProperties": False
        },
        "arguments": ListProductsOptions,
        "handler": _list_products,
    },
    "list_projects": {
        "description": "List all projects from your Moneybird account",
        "inputSchema": {
            "type": "object",
            "properties": {
                **PAGINATION_PROPERTIES,
                "state": {
                    "type": "string",
                    "enum": ["active", "archived", "all"],
                    "description": "Filter by project state"
                }
            },
            "additionalProperties": False
        },
        "arguments": ListProjectsOptions,
        "handler": _list_projects,
    },
    "list_time_entries": {
        "description": "List all time entries from your Moneybird account",
        "inputSchema": {
            "type": "object",
            "properties": {
                **PAGINATION_PROPERTIES,
                "projectId": {
                    "type": "string",
                    "description": "Filter by project ID"
                },
                "startDate": {
                    "type": "string",
                    "description": "Only entries started on or after this date (YYYY-MM-DD)"
                },
                "endDate": {
                    "type": "string",
                    "description": "Only entries started on or before this date (YYYY-MM-DD)"
                }
            },
            "additionalProperties": False
        },
        "arguments": ListTimeEntriesOptions,
        "handler": _list_time_entries,
    },
    "moneybird_request": {
        "description": "Make a custom request to the Moneybird API",
        "inputSchema": {
            "type": "object",
            "properties": {
                "method": {
                    "type": "string",
                    "enum": ["get", "post", "put", "delete"],
                    "description": "HTTP method for the request"
                },
                "path": {
                    "type": "string",
                    "description": "API path (without administration ID prefix)"
                },
                "data": {
                    "description": "Request data for POST and PUT requests (optional, object or JSON string)"
                }
            },
            "required": ["method", "path"],
            "additionalProperties": False
        },
        "arguments": GenericRequestOptions,
        "handler": _moneybird_request,
    },
    "moneybird_assistant": {
        "description": "Get assistance with using the Moneybird MCP server",
        "inputSchema": {
            "type": "object",
            "properties": {},
            "additionalProperties": False
        },
        "arguments": NoArguments,
        "handler": _moneybird_assistant,
        "requires_client": False,
    },
}


async def list_tools() -> ToolListResponse:
    """
    List all available tools.

    Returns:
        ToolListResponse with list of tool definitions
    """
    tools = [
        ToolDefinition(
            name=name,
            description=metadata["description"],
            inputSchema=metadata["inputSchema"]
        )
        for name, metadata in TOOL_REGISTRY.items()
    ]

    return ToolListResponse(tools=tools)


async def call_tool(request: ToolCallRequest, provider: ClientProvider) -> ToolCallResponse:
    """
    Execute a tool call.

    Failures never escape: unknown tools, invalid arguments, missing
    credentials and Moneybird errors all come back as an error result.

    Args:
        request: Tool call request with name and arguments
        provider: Source of the shared Moneybird client

    Returns:
        ToolCallResponse with tool output
    """
    tool_name = request.name

    if tool_name not in TOOL_REGISTRY:
        logger.warning(f"Unknown tool requested: {tool_name}")
        return ToolCallResponse.text(unknown_tool_message(tool_name, list(TOOL_REGISTRY.keys())), is_error=True)

    metadata = TOOL_REGISTRY[tool_name]
    logger.info(f"Executing tool: {tool_name} with args: {request.arguments}")

    try:
        arguments_model: Type[BaseModel] = metadata["arguments"]
        arguments = arguments_model.model_validate(request.arguments or {})

        client = provider.get() if metadata.get("requires_client", True) else None
        handler: ToolHandler = metadata["handler"]

        # requests is blocking, keep the event loop free while it runs
        loop = asyncio.get_running_loop()
        text = await loop.run_in_executor(None, handler, client, arguments)

        return ToolCallResponse.text(text)

    except ValidationError as e:
        logger.warning(f"Invalid arguments for tool '{tool_name}': {e.error_count()} problem(s)")
        return ToolCallResponse.text(format_error(tool_name, e), is_error=True)

    except Exception as e:
        logger.error(f"Error executing tool '{tool_name}': {e}", exc_info=True)
        return ToolCallResponse.text(format_error(tool_name, e), is_error=True)
