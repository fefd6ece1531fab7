"""
Query translation for list endpoints.

``filters`` turns bracket-notation URL parameters into filter and sort
structures, ``pagination`` resolves paging and builds the response
envelope, and ``sql`` compiles the result for SQLite.
"""

from .filters import (  # noqa: F401
    OPERATORS,
    coerce_value,
    parse_query_sort,
    query_params_to_where,
    query_string_to_where,
    tokenize_key,
)
from .pagination import (  # noqa: F401
    PageRequest,
    PaginationConfig,
    build_list_response,
    get_pagination,
    parse_list_query,
)
