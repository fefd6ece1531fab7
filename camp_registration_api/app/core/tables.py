"""
Table metadata used by the query layer and the generic CRUD service.

Each ``Table`` lists its columns with a storage kind and the relations
that may be filtered through.  The definitions here must stay in step
with the migrations in ``core.db``.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


# Column kinds.  ``json`` columns hold JSON text and are decoded on read.
TEXT = "text"
INTEGER = "integer"
TIMESTAMP = "timestamp"
JSON = "json"


def dump_json(value: Any) -> str:
    """Serialise a value for a ``json`` column.

    Writes and filter comparisons both go through here so that equal
    values always produce identical text.
    """
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


@dataclass(frozen=True)
class Relation:
    """A navigable link from one table to another.

    For a to-one relation ``local_key`` is the foreign key on the owning
    table and ``remote_key`` the referenced column.  For a to-many
    relation ``local_key`` is the owner's primary key and ``remote_key``
    the foreign key on the related table.
    """

    table: str
    local_key: str
    remote_key: str
    many: bool = False


@dataclass(frozen=True)
class Table:
    name: str
    columns: Dict[str, str]
    relations: Dict[str, Relation] = field(default_factory=dict)

    def column_kind(self, name: str) -> Optional[str]:
        return self.columns.get(name)

    def json_columns(self) -> list[str]:
        return [name for name, kind in self.columns.items() if kind == JSON]


DISTRICTS = Table(
    name="districts",
    columns={
        "id": INTEGER,
        "name": TEXT,
        "zones": JSON,
        "created_at": TIMESTAMP,
        "updated_at": TIMESTAMP,
    },
    relations={
        "campites": Relation("campites", local_key="id", remote_key="district_id", many=True),
    },
)

CAMPS = Table(
    name="camps",
    columns={
        "id": INTEGER,
        "title": TEXT,
        "theme": TEXT,
        "verse": TEXT,
        "year": INTEGER,
        "fee": INTEGER,
        "premium_fees": JSON,
        "start_date": TIMESTAMP,
        "end_date": TIMESTAMP,
        "created_at": TIMESTAMP,
        "updated_at": TIMESTAMP,
    },
    relations={
        "campites": Relation("campites", local_key="id", remote_key="camp_id", many=True),
    },
)

CAMPITES = Table(
    name="campites",
    columns={
        "id": INTEGER,
        "camp_id": INTEGER,
        "district_id": INTEGER,
        "firstname": TEXT,
        "lastname": TEXT,
        "email": TEXT,
        "phone": TEXT,
        "age_group": TEXT,
        "gender": TEXT,
        "type": TEXT,
        "amount": INTEGER,
        "payment_ref": TEXT,
        "registration_no": TEXT,
        "checkin_at": TIMESTAMP,
        "created_at": TIMESTAMP,
        "updated_at": TIMESTAMP,
    },
    relations={
        "camp": Relation("camps", local_key="camp_id", remote_key="id"),
        "district": Relation("districts", local_key="district_id", remote_key="id"),
    },
)

TABLES: Dict[str, Table] = {table.name: table for table in (DISTRICTS, CAMPS, CAMPITES)}
