"""
Generic CRUD service shared by every resource.

``ResourceService`` implements list/get/create/update/delete against a
single table described in ``core.tables``.  Subclasses set ``table``,
``read_schema`` and ``label`` and override the hooks they need.  Listing
goes through the query translator: the ``PageRequest`` built from the
URL is compiled into SQL by ``query.sql``.
"""

import json
import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, List, Tuple, Type

from pydantic import BaseModel

from ..core.db import get_connection
from ..core.tables import JSON, Table, dump_json
from ..query.pagination import PageRequest
from ..query.sql import compile_order_by, compile_where


logger = logging.getLogger(__name__)


class NotFoundError(ValueError):
    """Raised when a record with the requested id does not exist."""


def utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


class ResourceService:
    """Base class for table-backed services."""

    table: ClassVar[Table]
    read_schema: ClassVar[Type[BaseModel]]
    label: ClassVar[str] = "Record"

    @classmethod
    def _to_db(cls, values: Dict[str, Any]) -> Dict[str, Any]:
        """Convert python values into what SQLite stores."""
        stored: Dict[str, Any] = {}
        for key, value in values.items():
            if cls.table.column_kind(key) == JSON:
                stored[key] = dump_json(value if value is not None else [])
            elif isinstance(value, datetime):
                stored[key] = value.isoformat()
            else:
                stored[key] = value
        return stored

    @classmethod
    def _from_row(cls, row: sqlite3.Row) -> BaseModel:
        data = dict(row)
        for name in cls.table.json_columns():
            if data.get(name) is not None:
                data[name] = json.loads(data[name])
        return cls.read_schema(**data)

    @classmethod
    def _fetch(cls, cursor: sqlite3.Cursor, record_id: int) -> sqlite3.Row:
        row = cursor.execute(
            f"SELECT * FROM {cls.table.name} WHERE id = ?", (record_id,)
        ).fetchone()
        if not row:
            raise NotFoundError(f"{cls.label} {record_id} not found")
        return row

    @classmethod
    def before_create(cls, cursor: sqlite3.Cursor, values: Dict[str, Any]) -> Dict[str, Any]:
        """Hook to validate or extend values before they are inserted."""
        return values

    @classmethod
    def before_update(
        cls, cursor: sqlite3.Cursor, record_id: int, updates: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Hook to validate or extend values before an update."""
        return updates

    @classmethod
    async def list_records(cls, page_request: PageRequest) -> Tuple[List[BaseModel], int]:
        """Return the requested page of records and the total match count.

        Raises ``QueryError`` when the filter refers to unknown fields or
        operators.
        """
        where_sql, params = compile_where(page_request.where, cls.table)
        order_sql = compile_order_by(page_request.order_by, cls.table)
        table_name = cls.table.name

        query = f"SELECT * FROM {table_name} WHERE {where_sql} ORDER BY {order_sql}"
        query_params: List[Any] = list(params)
        if not page_request.fetch_all:
            query += " LIMIT ? OFFSET ?"
            query_params.extend([page_request.take, page_request.skip])

        conn = get_connection()
        try:
            cursor = conn.cursor()
            rows = cursor.execute(query, tuple(query_params)).fetchall()
            total = cursor.execute(
                f"SELECT COUNT(*) FROM {table_name} WHERE {where_sql}", tuple(params)
            ).fetchone()[0]
            return [cls._from_row(row) for row in rows], total
        finally:
            conn.close()

    @classmethod
    async def get(cls, record_id: int) -> BaseModel:
        """Retrieve a single record.  Raises ``NotFoundError`` if missing."""
        conn = get_connection()
        try:
            return cls._from_row(cls._fetch(conn.cursor(), record_id))
        finally:
            conn.close()

    @classmethod
    async def create(cls, data: BaseModel) -> BaseModel:
        """Insert a record and return it as ``read_schema``."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            values = cls.before_create(cursor, data.model_dump())
            now = utcnow()
            values.update(created_at=now, updated_at=now)
            stored = cls._to_db(values)
            columns = ", ".join(stored)
            placeholders = ", ".join("?" for _ in stored)
            try:
                cursor.execute(
                    f"INSERT INTO {cls.table.name} ({columns}) VALUES ({placeholders})",
                    tuple(stored.values()),
                )
            except sqlite3.IntegrityError as e:
                raise ValueError(f"Cannot create {cls.label.lower()}: {e}") from e
            record_id = cursor.lastrowid
            conn.commit()
            logger.info("Created %s %s", cls.label.lower(), record_id)
            return cls._from_row(cls._fetch(cursor, record_id))
        finally:
            conn.close()

    @classmethod
    async def update(cls, record_id: int, updates: Dict[str, Any]) -> BaseModel:
        """Update the given fields of a record and return the result.

        Only keys present in ``updates`` are written.  Raises
        ``NotFoundError`` if the record does not exist.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cls._fetch(cursor, record_id)
            updates = cls.before_update(cursor, record_id, dict(updates))
            if updates:
                stored = cls._to_db(updates)
                stored["updated_at"] = utcnow()
                assignments = ", ".join(f"{key} = ?" for key in stored)
                try:
                    cursor.execute(
                        f"UPDATE {cls.table.name} SET {assignments} WHERE id = ?",
                        (*stored.values(), record_id),
                    )
                except sqlite3.IntegrityError as e:
                    raise ValueError(f"Cannot update {cls.label.lower()}: {e}") from e
                conn.commit()
                logger.info("Updated %s %s: %s", cls.label.lower(), record_id, sorted(updates))
            return cls._from_row(cls._fetch(cursor, record_id))
        finally:
            conn.close()

    @classmethod
    async def delete(cls, record_id: int) -> None:
        """Delete a record.  Dependent rows follow the foreign key rules."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cls._fetch(cursor, record_id)
            cursor.execute(f"DELETE FROM {cls.table.name} WHERE id = ?", (record_id,))
            conn.commit()
            logger.info("Deleted %s %s", cls.label.lower(), record_id)
        finally:
            conn.close()
