"""
Pagination contract shared by every list endpoint.

A list request carries ``page``, ``per_page``, a filter and a sort
string.  ``get_pagination`` turns those into a ``PageRequest`` holding
``skip``/``take`` plus the translated ``where`` and ``order_by``; the
service layer runs it and ``build_list_response`` wraps the rows in the
response envelope.

``page=0`` switches pagination off: every matching row is returned.
Small reference tables (for example the district list used by the
registration form) are fetched this way, so the behaviour is part of
the public API.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..core.config import settings
from .filters import (
    RawValue,
    SortSpec,
    WhereNode,
    collect_query_params,
    parse_query_sort,
    query_params_to_where,
    split_query_string,
)


logger = logging.getLogger(__name__)

# Query keys that control paging and sorting rather than filtering.
PAGE_PARAM = "page"
PER_PAGE_PARAM = "per_page"
ORDER_BY_PARAM = "orderBy"
FILTER_PARAM = "filter"
RESERVED_PARAMS = frozenset({PAGE_PARAM, PER_PAGE_PARAM, ORDER_BY_PARAM, FILTER_PARAM})

_PAGING_INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class PaginationConfig:
    """Per-endpoint paging defaults.

    ``max_page_size`` is further capped by ``settings.max_page_size``,
    the application-wide ceiling.
    """

    page_size: int = field(default_factory=lambda: settings.default_page_size)
    max_page_size: int = field(default_factory=lambda: settings.max_page_size)

    @property
    def ceiling(self) -> int:
        return max(1, min(self.max_page_size, settings.max_page_size))


@dataclass
class PageRequest:
    """A concrete page request ready for the query layer.

    ``skip`` and ``take`` are ``None`` when ``page`` is 0.
    """

    page: int
    per_page: int
    where: WhereNode
    order_by: SortSpec
    skip: Optional[int] = None
    take: Optional[int] = None

    @property
    def fetch_all(self) -> bool:
        return self.page == 0

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"where": self.where, "orderBy": self.order_by}
        if not self.fetch_all:
            result["skip"] = self.skip
            result["take"] = self.take
        return result


def get_pagination(
    page: int = 1,
    per_page: Optional[int] = None,
    filter: Union[str, Mapping[str, RawValue], None] = None,
    order_by: Optional[str] = None,
    config: Optional[PaginationConfig] = None,
) -> PageRequest:
    """Resolve paging parameters into a ``PageRequest``.

    ``per_page`` defaults to the endpoint page size and is capped at the
    endpoint ceiling without complaint.  ``page=0`` disables paging;
    otherwise ``page`` is at least 1.  ``filter`` may be a bracket-notation
    query string or an already-collected parameter mapping.
    """
    config = config or PaginationConfig()

    size = config.page_size if per_page is None else per_page
    size = min(max(size, 1), config.ceiling)

    if isinstance(filter, str):
        where = query_params_to_where(collect_query_params(split_query_string(filter)))
    else:
        where = query_params_to_where(filter or {})
    sort = parse_query_sort(order_by)

    if page == 0:
        return PageRequest(page=0, per_page=size, where=where, order_by=sort)

    page = max(page, 1)
    return PageRequest(
        page=page,
        per_page=size,
        where=where,
        order_by=sort,
        skip=(page - 1) * size,
        take=size,
    )


def _as_int(value: RawValue, default: Optional[int]) -> Optional[int]:
    if isinstance(value, (list, tuple)):
        value = value[-1] if value else ""
    text = value.strip()
    if not _PAGING_INT_RE.fullmatch(text):
        logger.debug("Ignoring non-integer paging value %r", value)
        return default
    return int(text)


def _last(value: RawValue) -> str:
    if isinstance(value, (list, tuple)):
        return value[-1] if value else ""
    return value


def parse_list_query(
    params: Union[str, Iterable[Tuple[str, str]]],
    config: Optional[PaginationConfig] = None,
) -> PageRequest:
    """Build a ``PageRequest`` from a full list-endpoint query.

    ``params`` is a raw query string or ``(key, value)`` pairs such as
    Starlette's ``request.query_params.multi_items()``.  ``page``,
    ``per_page`` and ``orderBy`` drive paging and sorting; ``filter`` may
    carry a URL-encoded bracket query of its own; every other key is a
    filter parameter.  Bracket keys given directly on the URL take
    precedence over the same keys inside ``filter``.
    """
    pairs = split_query_string(params) if isinstance(params, str) else list(params)
    collected = collect_query_params(pairs)

    page = _as_int(collected.get(PAGE_PARAM, "1"), 1)
    per_page = _as_int(collected[PER_PAGE_PARAM], None) if PER_PAGE_PARAM in collected else None
    order_by = _last(collected.get(ORDER_BY_PARAM, ""))

    filter_params: Dict[str, RawValue] = {}
    if FILTER_PARAM in collected:
        filter_params.update(collect_query_params(split_query_string(_last(collected[FILTER_PARAM]))))
    for key, value in collected.items():
        if key not in RESERVED_PARAMS:
            filter_params[key] = value

    return get_pagination(
        page=page,
        per_page=per_page,
        filter=filter_params,
        order_by=order_by,
        config=config,
    )


def build_list_response(
    rows: List[Any], total: int, page_request: PageRequest
) -> Dict[str, Any]:
    """Wrap a page of rows in the list response envelope."""
    if page_request.fetch_all:
        return {"success": True, "data": rows, "total": total}
    return {
        "success": True,
        "data": rows,
        "meta": {
            "page": page_request.page,
            "per_page": page_request.per_page,
            "total": total,
            "total_pages": math.ceil(total / page_request.per_page),
        },
    }
