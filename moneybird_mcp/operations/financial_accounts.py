from typing import Any, Dict, Union

from ..services.moneybird import MoneybirdClient
from .models import FinancialAccountData, ListFinancialAccountsOptions, ListResult
from .pagination import as_list, coerce_options, find_by_id, paginate, payload


def get_financial_account(client: MoneybirdClient, account_id: str) -> Dict[str, Any]:
    accounts = as_list(client.get_financial_accounts(), "financial accounts")
    return find_by_id(accounts, account_id, "Financial account")


def list_financial_accounts(
    client: MoneybirdClient,
    options: Union[ListFinancialAccountsOptions, Dict[str, Any], None] = None,
) -> ListResult:
    options = coerce_options(ListFinancialAccountsOptions, options)
    accounts = as_list(client.get_financial_accounts(), "financial accounts")
    return paginate(accounts, options.page, options.per_page)


def create_financial_account(
    client: MoneybirdClient,
    data: Union[FinancialAccountData, Dict[str, Any]],
) -> Dict[str, Any]:
    return client.request(
        "post", "financial_accounts", {"financial_account": payload(FinancialAccountData, data)}
    )


def update_financial_account(client: MoneybirdClient, account_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
    return client.request("put", f"financial_accounts/{account_id}", {"financial_account": data})
