from typing import Any, Dict, Union

from ..services.moneybird import MoneybirdClient
from .models import ListProductsOptions, ListResult, ProductData
from .pagination import as_list, coerce_options, find_by_id, paginate, payload


def get_product(client: MoneybirdClient, product_id: str) -> Dict[str, Any]:
    return find_by_id(as_list(client.get_products(), "products"), product_id, "Product")


def list_products(
    client: MoneybirdClient,
    options: Union[ListProductsOptions, Dict[str, Any], None] = None,
) -> ListResult:
    options = coerce_options(ListProductsOptions, options)
    return paginate(as_list(client.get_products(), "products"), options.page, options.per_page)


def create_product(client: MoneybirdClient, data: Union[ProductData, Dict[str, Any]]) -> Dict[str, Any]:
    return client.request("post", "products", {"product": payload(ProductData, data)})


def update_product(client: MoneybirdClient, product_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
    return client.request("put", f"products/{product_id}", {"product": data})
