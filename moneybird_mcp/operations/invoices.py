"""
Sales invoice operations.
"""

from typing import Any, Dict, Union

from ..services.moneybird import MoneybirdClient
from .models import InvoiceData, ListInvoicesOptions, ListResult, SendInvoiceOptions
from .pagination import as_list, coerce_options, paginate, payload


def get_invoice(client: MoneybirdClient, invoice_id: str) -> Dict[str, Any]:
    return client.get_sales_invoice(invoice_id)


def list_invoices(
    client: MoneybirdClient,
    options: Union[ListInvoicesOptions, Dict[str, Any], None] = None,
) -> ListResult:
    """List sales invoices, filtered by state before pagination."""
    options = coerce_options(ListInvoicesOptions, options)
    invoices = as_list(client.get_sales_invoices(), "sales invoices")

    if options.state and options.state != "all":
        invoices = [invoice for invoice in invoices if invoice.get("state") == options.state]

    return paginate(invoices, options.page, options.per_page)


def create_invoice(client: MoneybirdClient, data: Union[InvoiceData, Dict[str, Any]]) -> Dict[str, Any]:
    return client.request("post", "sales_invoices", {"sales_invoice": payload(InvoiceData, data)})


def update_invoice(client: MoneybirdClient, invoice_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
    return client.request("put", f"sales_invoices/{invoice_id}", {"sales_invoice": data})


def send_invoice(
    client: MoneybirdClient,
    invoice_id: str,
    options: Union[SendInvoiceOptions, Dict[str, Any]],
) -> Any:
    """Send an invoice by email, simpler invoicing or mark it as sent manually."""
    options = coerce_options(SendInvoiceOptions, options)
    return client.request(
        "post",
        f"sales_invoices/{invoice_id}/send_invoice",
        {"sales_invoice_sending": options.model_dump(exclude_none=True)},
    )
