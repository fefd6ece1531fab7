"""
Shared handler for list endpoints.

List routes read the raw query string instead of declaring parameters
because filters arrive as arbitrary bracket keys such as
``[title][contains]=Summer``.  Recognised controls:

- ``page``: 1-based page number; ``0`` returns every matching row;
- ``per_page``: page size, capped at the endpoint maximum;
- ``orderBy``: sort string, e.g. ``[year]=desc`` (URL-encode ``&`` to
  sort on several fields);
- ``filter``: optional URL-encoded bracket query;
- any other key: a filter, e.g. ``[year][gte]=2024``.
"""

from typing import Any, Dict, Type

from fastapi import HTTPException, Request, status

from camp_registration_api.app.query.pagination import (
    PaginationConfig,
    build_list_response,
    parse_list_query,
)
from camp_registration_api.app.query.sql import QueryError
from camp_registration_api.app.services.base import ResourceService


async def list_resource(
    service: Type[ResourceService], request: Request, config: PaginationConfig
) -> Dict[str, Any]:
    page_request = parse_list_query(request.query_params.multi_items(), config)
    try:
        rows, total = await service.list_records(page_request)
    except QueryError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return build_list_response(rows, total, page_request)
