"""
Business logic for camps.

Deleting a camp also deletes every campite registered for it (the
``campites.camp_id`` foreign key cascades).
"""

import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, Union

from ..core.tables import CAMPS
from ..schemas.camp import CampRead
from .base import ResourceService


def _as_utc(value: Union[str, datetime]) -> datetime:
    if not isinstance(value, datetime):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


class CampService(ResourceService):
    table = CAMPS
    read_schema = CampRead
    label = "Camp"

    @classmethod
    def before_update(
        cls, cursor: sqlite3.Cursor, record_id: int, updates: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Reject updates that would leave the camp ending before it starts."""
        if "start_date" in updates or "end_date" in updates:
            row = cursor.execute(
                "SELECT start_date, end_date FROM camps WHERE id = ?", (record_id,)
            ).fetchone()
            start = _as_utc(updates.get("start_date") or row["start_date"])
            end = _as_utc(updates.get("end_date") or row["end_date"])
            if end < start:
                raise ValueError("end_date must not be before start_date")
        return updates
