"""
Pydantic models for resource operation inputs and outputs.

This module defines:
- List options per resource (pagination plus resource-specific filters)
- Write payloads for create/update operations
- ListResult: the shape every list operation returns
"""

from datetime import date, datetime, timezone
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================================================
# List options
# ============================================================================

class PaginationOptions(BaseModel):
    """Client-side pagination, applied only when both values are given."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    page: Optional[int] = Field(None, gt=0, description="Page number (starts from 1)")
    per_page: Optional[int] = Field(
        None, ge=1, le=100, alias="perPage", description="Number of items per page (max 100)"
    )


class ListContactsOptions(PaginationOptions):
    query: Optional[str] = Field(None, description="Search term for general contact search")
    filter: Optional[str] = Field(
        None,
        description=(
            'Filter string in format "property:value" (e.g., "created_after:2023-01-01 00:00:00 UTC", '
            '"updated_after:2023-01-01", "first_name:value")'
        ),
    )
    include_archived: Optional[bool] = Field(None, description="Include archived contacts in the results")
    todo: Optional[str] = Field(None, description="Filter contacts based on outstanding tasks")

    @property
    def uses_filter_endpoint(self) -> bool:
        return bool(self.filter or self.query or self.include_archived or self.todo)


InvoiceState = Literal[
    "all", "draft", "open", "scheduled", "pending_payment",
    "payment_failed", "paid", "late", "late_draft",
]


class ListInvoicesOptions(PaginationOptions):
    state: Optional[InvoiceState] = Field(None, description="Filter by invoice state")


class ListProjectsOptions(PaginationOptions):
    state: Optional[Literal["active", "archived", "all"]] = Field(None, description="Filter by project state")


class ListProductsOptions(PaginationOptions):
    pass


class ListFinancialAccountsOptions(PaginationOptions):
    pass


def parse_moment(value: Union[str, date, datetime, None]) -> Optional[datetime]:
    """
    Parse an ISO date or datetime into an aware UTC datetime.

    Naive values are treated as UTC. Returns None for empty or unparseable input.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


class ListTimeEntriesOptions(PaginationOptions):
    project_id: Optional[str] = Field(None, alias="projectId", description="Filter by project ID")
    start_date: Optional[str] = Field(None, alias="startDate", description="Filter by start date (YYYY-MM-DD)")
    end_date: Optional[str] = Field(None, alias="endDate", description="Filter by end date (YYYY-MM-DD)")

    @field_validator("start_date", "end_date")
    @classmethod
    def _check_date(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and parse_moment(value) is None:
            raise ValueError(f"'{value}' is not an ISO date (YYYY-MM-DD)")
        return value


class SendInvoiceOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    delivery_method: Literal["email", "simpler_invoicing", "manual"] = Field(
        ..., description="How to deliver the invoice"
    )
    email_address: Optional[str] = Field(None, description="Email address to send the invoice to")
    email_message: Optional[str] = Field(None, description="Email message when sending the invoice")


class GenericRequestOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    method: Literal["get", "post", "put", "delete"] = Field(..., description="HTTP method for the request")
    path: str = Field(..., min_length=1, description="API path, relative to the administration")
    data: Any = Field(None, description="Optional data to send with the request")


# ============================================================================
# Write payloads
# ============================================================================

class ContactData(BaseModel):
    company_name: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    zipcode: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    tax_number: Optional[str] = None
    chamber_of_commerce: Optional[str] = None
    bank_account: Optional[str] = None
    send_invoices_to_attention: Optional[str] = None
    send_invoices_to_email: Optional[str] = None
    send_estimates_to_attention: Optional[str] = None
    send_estimates_to_email: Optional[str] = None
    customer_id: Optional[str] = None


class InvoiceDetailLine(BaseModel):
    description: str = Field(..., description="Description of the invoice line")
    price: float = Field(..., description="Price per unit")
    amount: Optional[str] = Field(None, description="Number of units, e.g. '2' or '3 uur'")
    tax_rate_id: Optional[str] = None
    ledger_account_id: Optional[str] = None
    project_id: Optional[str] = None
    product_id: Optional[str] = None


class InvoiceData(BaseModel):
    contact_id: str = Field(..., description="Contact ID for the invoice")
    reference: Optional[str] = None
    details_attributes: List[InvoiceDetailLine] = Field(default_factory=list, description="Invoice lines")
    invoice_date: Optional[str] = None
    due_date: Optional[str] = None
    payment_conditions: Optional[str] = None
    currency: Optional[str] = None
    prices_are_incl_tax: Optional[bool] = None


class ProjectData(BaseModel):
    name: str = Field(..., description="Name of the project")
    contact_id: Optional[str] = None
    budget: Optional[float] = None
    state: Optional[Literal["active", "archived"]] = None


class ProductData(BaseModel):
    title: Optional[str] = None
    description: str = Field(..., description="Description of the product")
    price: float = Field(..., description="Price of the product")
    currency: Optional[str] = None
    tax_rate_id: Optional[str] = None
    ledger_account_id: Optional[str] = None
    frequency: Optional[int] = None
    frequency_type: Optional[Literal["day", "week", "month", "quarter", "year"]] = None


class FinancialAccountData(BaseModel):
    name: Optional[str] = None
    identifier: Optional[str] = None
    currency: Optional[str] = None
    provider: Optional[str] = None


class TimeEntryData(BaseModel):
    started_at: str = Field(..., description="Start time (ISO 8601)")
    ended_at: str = Field(..., description="End time (ISO 8601)")
    description: str = Field(..., description="Description of the time entry")
    user_id: Optional[str] = None
    project_id: Optional[str] = None
    contact_id: Optional[str] = None
    paused_duration: Optional[int] = Field(None, description="Paused time in seconds")
    billable: Optional[bool] = None


# ============================================================================
# Results
# ============================================================================

class ListResult(BaseModel):
    """Items of a list operation plus pagination or filter metadata."""
    items: List[Dict[str, Any]] = Field(default_factory=list)
    page: Optional[int] = None
    per_page: Optional[int] = None
    total_count: Optional[int] = None
    total_pages: Optional[int] = None
    filtered: bool = False
    filter_criteria: Optional[Dict[str, Any]] = None

    @property
    def paginated(self) -> bool:
        return self.total_pages is not None
