"""
Service layer for dashboard analytics.

Aggregates campite registrations, optionally restricted to one camp.
All queries are read-only and parameterised.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..core.db import get_connection


class AnalyticsService:
    """Aggregated registration figures for the admin dashboard."""

    @classmethod
    async def dashboard(cls, camp_id: Optional[int] = None) -> Dict[str, Any]:
        """Return the total number of campites plus gender and age group splits.

        Groups are ordered by count, largest first, then by value.
        """
        where_sql = ""
        params: tuple = ()
        if camp_id is not None:
            where_sql = " WHERE camp_id = ?"
            params = (camp_id,)

        conn = get_connection()
        try:
            cursor = conn.cursor()
            total = cursor.execute(
                f"SELECT COUNT(*) FROM campites{where_sql}", params
            ).fetchone()[0]

            def grouped(column: str) -> List[Dict[str, Any]]:
                rows = cursor.execute(
                    f"SELECT {column} AS value, COUNT(*) AS count FROM campites{where_sql} "
                    f"GROUP BY {column} ORDER BY count DESC, value ASC",
                    params,
                ).fetchall()
                return [{"value": row["value"], "count": row["count"]} for row in rows]

            return {
                "total_campites": total,
                "by_gender": grouped("gender"),
                "by_age_group": grouped("age_group"),
            }
        finally:
            conn.close()
