"""
Compile translated filters and sorts into SQLite fragments.

``compile_where`` walks a filter mapping produced by
``query.filters`` and emits a parameterised ``WHERE`` body for one
table.  Column and relation names are checked against the metadata in
``core.tables``; unknown names raise ``QueryError`` so a typo in a
filter never silently widens a result set.

Supported shapes, per field:

* ``{"year": 2025}`` equality, ``None`` compiles to ``IS NULL`` and a
  list to ``IN``;
* ``{"year": {"gte": 2024, "lt": 2026}}`` operator mapping, with
  ``mode: "insensitive"`` lowering both sides of string comparisons;
* ``{"camp": {"title": {"contains": "Summer"}}}`` filter on a to-one
  relation;
* ``{"campites": {"some": {...}}}`` (``none``/``every``) filter on a
  to-many relation.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from ..core.tables import JSON, TABLES, Table, dump_json
from .filters import OPERATORS


logger = logging.getLogger(__name__)

_COMPARISONS = {"lt": "<", "lte": "<=", "gt": ">", "gte": ">="}
_RELATION_OPERATORS = {"some", "none", "every"}
_FIELD_OPERATORS = OPERATORS - _RELATION_OPERATORS
_MODES = {"default", "insensitive"}


class QueryError(ValueError):
    """Raised when a filter or sort cannot be applied to a table."""


def _quote(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def _column(table: Table, name: str) -> str:
    return f"{_quote(table.name)}.{_quote(name)}"


def _to_param(value: Any, kind: str) -> Any:
    if kind == JSON and isinstance(value, (list, dict)):
        return dump_json(value)
    if isinstance(value, (list, dict)):
        raise QueryError(f"Expected a scalar value, got {value!r}")
    return value


def _compile_in(column: str, values: Any, kind: str, negate: bool) -> Tuple[str, List[Any]]:
    if not isinstance(values, list):
        values = [values]
    if not values:
        # Nothing is in an empty set; everything is outside it.
        return ("1 = 1" if negate else "1 = 0"), []
    placeholders = ", ".join("?" for _ in values)
    keyword = "NOT IN" if negate else "IN"
    return f"{column} {keyword} ({placeholders})", [_to_param(v, kind) for v in values]


def _compile_string_operator(
    column: str, operator: str, value: Any, insensitive: bool
) -> Tuple[str, List[Any]]:
    if not isinstance(value, str):
        # Numbers and booleans were coerced by the translator; compare text.
        if isinstance(value, (list, dict)) or value is None:
            raise QueryError(f"Operator {operator!r} expects a string, got {value!r}")
        value = json.dumps(value)
    lhs, rhs = (f"LOWER({column})", "LOWER(?)") if insensitive else (column, "?")
    if operator == "contains":
        return f"INSTR({lhs}, {rhs}) > 0", [value]
    if operator == "startsWith":
        return f"SUBSTR({lhs}, 1, LENGTH(?)) = {rhs}", [value, value]
    return f"SUBSTR({lhs}, LENGTH({lhs}) - LENGTH(?) + 1) = {rhs}", [value, value]


def _compile_equality(column: str, value: Any, kind: str, insensitive: bool = False) -> Tuple[str, List[Any]]:
    if value is None:
        return f"{column} IS NULL", []
    if isinstance(value, list) and kind != JSON:
        return _compile_in(column, value, kind, negate=False)
    if insensitive and isinstance(value, str):
        return f"LOWER({column}) = LOWER(?)", [value]
    return f"{column} = ?", [_to_param(value, kind)]


def _compile_operators(
    table: Table, field: str, operators: Mapping[str, Any]
) -> Tuple[List[str], List[Any]]:
    kind = table.columns[field]
    column = _column(table, field)
    mode = operators.get("mode", "default")
    if mode not in _MODES:
        raise QueryError(f"Unknown mode {mode!r} for field {field!r}")
    insensitive = mode == "insensitive"

    clauses: List[str] = []
    params: List[Any] = []
    for operator, value in operators.items():
        if operator == "mode":
            continue
        if operator not in _FIELD_OPERATORS:
            raise QueryError(f"Unknown operator {operator!r} for field {field!r}")
        if operator == "equals":
            clause, args = _compile_equality(column, value, kind, insensitive)
        elif operator in ("in", "notIn"):
            clause, args = _compile_in(column, value, kind, negate=operator == "notIn")
        elif operator in _COMPARISONS:
            if value is None or isinstance(value, (list, dict)):
                raise QueryError(f"Operator {operator!r} on {field!r} expects a scalar")
            clause, args = f"{column} {_COMPARISONS[operator]} ?", [value]
        else:
            clause, args = _compile_string_operator(column, operator, value, insensitive)
        clauses.append(clause)
        params.extend(args)
    return clauses, params


def _compile_relation(
    table: Table, name: str, value: Any
) -> Tuple[List[str], List[Any]]:
    relation = table.relations[name]
    related = TABLES[relation.table]
    if not isinstance(value, dict):
        raise QueryError(f"Relation {name!r} expects a nested filter")

    if not relation.many:
        body, params = compile_where(value, related)
        clause = (
            f"{_column(table, relation.local_key)} IN "
            f"(SELECT {_column(related, relation.remote_key)} FROM {_quote(related.name)}"
            f" WHERE {body})"
        )
        return [clause], params

    unknown = set(value) - _RELATION_OPERATORS
    if unknown:
        raise QueryError(
            f"Relation {name!r} accepts only some/none/every, got {sorted(unknown)}"
        )
    link = f"{_column(related, relation.remote_key)} = {_column(table, relation.local_key)}"
    clauses: List[str] = []
    params: List[Any] = []
    for operator, nested in value.items():
        if not isinstance(nested, dict):
            raise QueryError(f"{operator!r} on {name!r} expects a nested filter")
        body, args = compile_where(nested, related)
        if operator == "some":
            clause = f"EXISTS (SELECT 1 FROM {_quote(related.name)} WHERE {link} AND {body})"
        elif operator == "none":
            clause = f"NOT EXISTS (SELECT 1 FROM {_quote(related.name)} WHERE {link} AND {body})"
        else:
            clause = f"NOT EXISTS (SELECT 1 FROM {_quote(related.name)} WHERE {link} AND ({body}) IS NOT 1)"
        clauses.append(clause)
        params.extend(args)
    return clauses, params


def compile_where(where: Mapping[str, Any], table: Table) -> Tuple[str, List[Any]]:
    """Compile a filter mapping into ``(sql, params)`` for ``table``.

    An empty mapping compiles to ``"1 = 1"`` so the result can always be
    placed after ``WHERE``.
    """
    clauses: List[str] = []
    params: List[Any] = []
    for field, value in where.items():
        if field in table.columns:
            if isinstance(value, dict) and table.columns[field] != JSON:
                field_clauses, field_params = _compile_operators(table, field, value)
            else:
                clause, field_params = _compile_equality(
                    _column(table, field), value, table.columns[field]
                )
                field_clauses = [clause]
        elif field in table.relations:
            field_clauses, field_params = _compile_relation(table, field, value)
        else:
            raise QueryError(f"Unknown field {field!r} for {table.name}")
        clauses.extend(field_clauses)
        params.extend(field_params)

    if not clauses:
        return "1 = 1", []
    return " AND ".join(f"({clause})" for clause in clauses), params


def compile_order_by(order_by: Sequence[Dict[str, str]], table: Table) -> str:
    """Compile a sort list into an ``ORDER BY`` body.

    Fields that are not columns of ``table`` are dropped.  When nothing
    usable remains the rows are ordered by ``id`` so that pages stay
    stable.
    """
    terms: List[str] = []
    for entry in order_by:
        for field, direction in entry.items():
            if field not in table.columns:
                logger.info("Ignoring sort on unknown field %r for %s", field, table.name)
                continue
            terms.append(f"{_column(table, field)} {'DESC' if direction == 'desc' else 'ASC'}")
    if not terms:
        terms.append(f"{_column(table, 'id')} ASC")
    return ", ".join(terms)
