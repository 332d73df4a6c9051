"""
Resource operations for the Moneybird API.

Each operation takes a MoneybirdClient as its first argument, validates its
options, applies client-side filtering and pagination where the API has none,
and returns raw Moneybird data or a ListResult.
"""

from .contacts import create_contact, get_contact, list_contacts, update_contact
from .financial_accounts import (
    create_financial_account,
    get_financial_account,
    list_financial_accounts,
    update_financial_account,
)
from .invoices import create_invoice, get_invoice, list_invoices, send_invoice, update_invoice
from .models import (
    GenericRequestOptions,
    ListContactsOptions,
    ListFinancialAccountsOptions,
    ListInvoicesOptions,
    ListProductsOptions,
    ListProjectsOptions,
    ListResult,
    ListTimeEntriesOptions,
    SendInvoiceOptions,
)
from .products import create_product, get_product, list_products, update_product
from .projects import archive_project, create_project, get_project, list_projects, update_project
from .request import make_generic_request
from .time_entries import (
    create_time_entry,
    delete_time_entry,
    get_time_entry,
    list_time_entries,
    update_time_entry,
)

__all__ = [
    # Contacts
    "get_contact",
    "list_contacts",
    "create_contact",
    "update_contact",
    # Sales invoices
    "get_invoice",
    "list_invoices",
    "create_invoice",
    "update_invoice",
    "send_invoice",
    # Projects
    "get_project",
    "list_projects",
    "create_project",
    "update_project",
    "archive_project",
    # Products
    "get_product",
    "list_products",
    "create_product",
    "update_product",
    # Financial accounts
    "get_financial_account",
    "list_financial_accounts",
    "create_financial_account",
    "update_financial_account",
    # Time entries
    "get_time_entry",
    "list_time_entries",
    "create_time_entry",
    "update_time_entry",
    "delete_time_entry",
    # Generic
    "make_generic_request",
    # Models
    "GenericRequestOptions",
    "ListContactsOptions",
    "ListFinancialAccountsOptions",
    "ListInvoicesOptions",
    "ListProductsOptions",
    "ListProjectsOptions",
    "ListResult",
    "ListTimeEntriesOptions",
    "SendInvoiceOptions",
]
