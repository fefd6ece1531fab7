"""
Bracket-notation query translator.

Turns URL query parameters such as ``[firstname][contains]=john`` into a
nested filter mapping (``{"firstname": {"contains": "john"}}``) and sort
strings such as ``[year]=desc&[title]=asc`` into an ordered list of
``{field: direction}`` mappings.  The output is plain ``dict``/``list``
data that the query layer (``query.sql``) compiles into SQL.

The translator is permissive: it never raises for odd
input.  Unknown fields and operators are passed through untouched and
malformed sort segments are skipped; validating names against a table is
the job of the consumer.

Example::

    >>> query_string_to_where("[firstname][contains]=john&[age][gte]=18")
    {'firstname': {'contains': 'john'}, 'age': {'gte': 18}}
    >>> parse_query_sort("[firstname]=desc&[created_at]=asc")
    [{'firstname': 'desc'}, {'created_at': 'asc'}]
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import parse_qsl


logger = logging.getLogger(__name__)


# Operators understood by the query layer.  The builder does not check
# against this set; ``query.sql`` rejects anything outside it.
OPERATORS = frozenset(
    {
        "equals",
        "in",
        "notIn",
        "lt",
        "lte",
        "gt",
        "gte",
        "contains",
        "startsWith",
        "endsWith",
        "mode",
        "some",
        "none",
        "every",
    }
)

RawValue = Union[str, Sequence[str]]
WhereNode = Dict[str, Any]
SortSpec = List[Dict[str, str]]

_BRACKET_RE = re.compile(r"\[([^\]]*)\]")
_SORT_SEGMENT_RE = re.compile(r"\[([^\]]+)\]=(.*)")

# Number literals accepted by JavaScript's ``Number()``: decimals with an
# optional sign, fraction and exponent, signed ``Infinity`` and unsigned
# hex/octal/binary integers.
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_PREFIXED_INT_RE = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")
_INFINITY_RE = re.compile(r"[+-]?Infinity")


def tokenize_key(key: str) -> List[str]:
    """Split a query key into its bracket-group segments.

    ``"[user][name][contains]"`` becomes ``["user", "name", "contains"]``.
    A key without brackets is returned as the single segment ``[key]``.
    Empty groups (``[]``) are ignored, so ``"[]"`` also falls back to the
    whole key.
    """
    segments = [segment for segment in _BRACKET_RE.findall(key) if segment]
    if not segments:
        return [key]
    return segments


def _parse_number(text: str) -> Optional[Union[int, float]]:
    stripped = text.strip()
    if not stripped:
        return None
    if _INTEGER_RE.fullmatch(stripped):
        return int(stripped)
    if _PREFIXED_INT_RE.fullmatch(stripped):
        return int(stripped, 0)
    if _INFINITY_RE.fullmatch(stripped):
        return float("-inf") if stripped.startswith("-") else float("inf")
    if _DECIMAL_RE.fullmatch(stripped):
        number = float(stripped)
        if number.is_integer():
            return int(number)
        return number
    return None


def coerce_value(value: RawValue) -> Any:
    """Interpret a raw query value.

    Rules are applied in order and the first match wins:

    1. a list of raw values is coerced element by element;
    2. a value wrapped in matching double or single quotes is returned
       without the quotes and without further conversion, which keeps
       numeric-looking identifiers as strings (``'"123"'`` -> ``"123"``);
    3. a complete number literal becomes ``int`` or ``float``;
    4. ``"true"``, ``"false"`` and ``"null"`` become ``True``, ``False``
       and ``None``;
    5. text starting with ``[`` or ``{`` is parsed as JSON when it is
       valid JSON;
    6. anything else is returned unchanged.
    """
    if isinstance(value, (list, tuple)):
        return [coerce_value(item) for item in value]

    if (value.startswith('"') and value.endswith('"')) or (
        value.startswith("'") and value.endswith("'")
    ):
        return value[1:-1]

    number = _parse_number(value)
    if number is not None:
        return number

    if value == "true":
        return True
    if value == "false":
        return False
    if value == "null":
        return None

    if value.startswith("[") or value.startswith("{"):
        try:
            return json.loads(value)
        except ValueError:
            pass

    return value


def _ensure_node(container: WhereNode, key: str) -> WhereNode:
    existing = container.get(key)
    if isinstance(existing, dict):
        return existing
    node: WhereNode = {}
    container[key] = node
    return node


def query_params_to_where(query_params: Mapping[str, RawValue]) -> WhereNode:
    """Build a nested filter mapping from bracket-notation parameters.

    ``[field]=value`` (or a bare ``field=value``) sets an equality
    shorthand.  Longer paths create nested mappings for every segment but
    the last, which always receives the coerced value::

        {"[email][contains]": "example.com", "[email][mode]": "insensitive"}
        -> {"email": {"contains": "example.com", "mode": "insensitive"}}

    Nothing is validated.  A later key that nests under a field holding a
    plain value replaces that value, and a later plain value replaces an
    earlier mapping.
    """
    where: WhereNode = {}
    for key, value in query_params.items():
        parts = tokenize_key(key)
        if len(parts) == 1:
            where[parts[0]] = coerce_value(value)
            continue
        current = where
        for part in parts[:-1]:
            current = _ensure_node(current, part)
        current[parts[-1]] = coerce_value(value)
    return where


def collect_query_params(pairs: Iterable[Tuple[str, str]]) -> Dict[str, RawValue]:
    """Group ``(key, value)`` pairs, turning repeated keys into lists.

    Keys keep the order in which they were first seen.
    """
    params: Dict[str, RawValue] = {}
    for key, value in pairs:
        if key not in params:
            params[key] = value
            continue
        existing = params[key]
        if isinstance(existing, list):
            existing.append(value)
        else:
            params[key] = [existing, value]
    return params


def split_query_string(query_string: Optional[str]) -> List[Tuple[str, str]]:
    """Decode a URL query string into ordered ``(key, value)`` pairs."""
    if not query_string:
        return []
    if query_string.startswith("?"):
        query_string = query_string[1:]
    return parse_qsl(query_string, keep_blank_values=True)


def query_string_to_where(query_string: Optional[str]) -> WhereNode:
    """Parse a URL query string straight into a filter mapping.

    >>> query_string_to_where("[id]=1&[id]=2")
    {'id': [1, 2]}
    """
    if not query_string:
        return {}
    return query_params_to_where(collect_query_params(split_query_string(query_string)))


def parse_query_sort(sort_string: Optional[str]) -> SortSpec:
    """Parse ``[field]=asc&[other]=desc`` into an ordered sort list.

    Each ``&``-separated segment must look like ``[field]=asc`` or
    ``[field]=desc``; single quotes around the direction are ignored.
    Other segments are skipped.  Duplicate fields are kept in order.
    """
    if not sort_string:
        return []

    order_by: SortSpec = []
    for segment in sort_string.split("&"):
        match = _SORT_SEGMENT_RE.search(segment)
        if not match:
            if segment:
                logger.debug("Skipping malformed sort segment %r", segment)
            continue
        field, direction = match.group(1), match.group(2).replace("'", "")
        if direction not in ("asc", "desc"):
            logger.debug("Skipping sort on %r with direction %r", field, direction)
            continue
        order_by.append({field: direction})
    return order_by
