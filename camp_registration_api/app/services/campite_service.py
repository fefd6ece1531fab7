"""
Business logic for campites.

Every campite receives a six digit registration number that is printed
on their badge and used at check-in.  Numbers are drawn at random and
retried on collision; the retry budget comes from
``settings.registration_no_attempts``.
"""

import logging
import random
import sqlite3
import string
from typing import Any, Dict

from ..core.config import settings
from ..core.tables import CAMPITES
from ..schemas.campite import CampiteRead
from .base import ResourceService


logger = logging.getLogger(__name__)

REGISTRATION_NO_LENGTH = 6


def generate_registration_no(length: int = REGISTRATION_NO_LENGTH) -> str:
    return "".join(random.choices(string.digits, k=length))


class CampiteService(ResourceService):
    table = CAMPITES
    read_schema = CampiteRead
    label = "Campite"

    @classmethod
    def allocate_registration_no(cls, cursor: sqlite3.Cursor) -> str:
        """Return a registration number not yet used by any campite.

        Raises ``RuntimeError`` once ``settings.registration_no_attempts``
        candidates have all collided.
        """
        attempts = settings.registration_no_attempts
        for attempt in range(1, attempts + 1):
            candidate = generate_registration_no()
            taken = cursor.execute(
                "SELECT 1 FROM campites WHERE registration_no = ?", (candidate,)
            ).fetchone()
            if not taken:
                return candidate
            logger.warning(
                "Registration number %s already taken (attempt %d of %d)",
                candidate,
                attempt,
                attempts,
            )
        raise RuntimeError(
            f"Could not allocate a unique registration number after {attempts} attempts"
        )

    @classmethod
    def _check_references(cls, cursor: sqlite3.Cursor, values: Dict[str, Any]) -> None:
        camp_id = values.get("camp_id")
        if camp_id is not None and not cursor.execute(
            "SELECT 1 FROM camps WHERE id = ?", (camp_id,)
        ).fetchone():
            raise ValueError(f"Camp {camp_id} does not exist")
        district_id = values.get("district_id")
        if district_id is not None and not cursor.execute(
            "SELECT 1 FROM districts WHERE id = ?", (district_id,)
        ).fetchone():
            raise ValueError(f"District {district_id} does not exist")

    @classmethod
    def before_create(cls, cursor: sqlite3.Cursor, values: Dict[str, Any]) -> Dict[str, Any]:
        cls._check_references(cursor, values)
        values["registration_no"] = cls.allocate_registration_no(cursor)
        return values

    @classmethod
    def before_update(
        cls, cursor: sqlite3.Cursor, record_id: int, updates: Dict[str, Any]
    ) -> Dict[str, Any]:
        cls._check_references(cursor, updates)
        if updates.get("type") == "premium" and updates.get("amount") is None:
            row = cursor.execute(
                "SELECT amount FROM campites WHERE id = ?", (record_id,)
            ).fetchone()
            if row["amount"] is None:
                raise ValueError("Amount is required for premium campites")
        return updates
