"""
Helpers shared by the resource operations: option coercion, collection
scans and client-side pagination.
"""

import math
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from ..services.errors import ErrorKind, MoneybirdError, not_found
from .models import ListResult

ModelT = TypeVar("ModelT", bound=BaseModel)


def coerce_options(model: Type[ModelT], options: Union[ModelT, Dict[str, Any], None]) -> ModelT:
    """Validate a dict of options into `model`; model instances pass through."""
    if options is None:
        return model()
    if isinstance(options, model):
        return options
    return model.model_validate(options)


def payload(model: Type[BaseModel], data: Union[BaseModel, Dict[str, Any]]) -> Dict[str, Any]:
    """Validate write data and drop fields that were not set."""
    if not isinstance(data, model):
        data = model.model_validate(data)
    return data.model_dump(exclude_none=True)


def as_list(data: Any, resource: str) -> List[Dict[str, Any]]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise MoneybirdError(
            ErrorKind.GENERIC,
            f"Expected a list of {resource} from Moneybird, got {type(data).__name__}",
            response=data,
        )
    return data


def find_by_id(items: List[Dict[str, Any]], item_id: str, resource: str) -> Dict[str, Any]:
    """Scan a fetched collection for `item_id`, raising not-found when absent."""
    for item in items:
        if str(item.get("id")) == str(item_id):
            return item
    raise not_found(resource, item_id)


def paginate(items: List[Dict[str, Any]], page: Optional[int], per_page: Optional[int]) -> ListResult:
    """
    Slice `items` for the requested page.

    Without both `page` and `per_page` the full list is returned. A page past
    the end yields an empty slice with the totals still filled in.
    """
    if not page or not per_page:
        return ListResult(items=items)

    start = (page - 1) * per_page
    return ListResult(
        items=items[start:start + per_page],
        page=page,
        per_page=per_page,
        total_count=len(items),
        total_pages=math.ceil(len(items) / per_page),
    )
