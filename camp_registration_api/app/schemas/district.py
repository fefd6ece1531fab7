"""
Pydantic models for districts.

Districts are the church districts campites register from.  Each one
may be split into zones, stored as a list of names.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class DistrictBase(BaseModel):
    name: str = Field(..., min_length=1, examples=["Yaba"])
    zones: List[str] = Field(default_factory=list, examples=[["Zone A", "Zone B"]])


class DistrictCreate(DistrictBase):
    """Schema for creating a district."""
    pass


class DistrictRead(DistrictBase):
    """Schema for reading a district from the API."""

    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True,
    }


class DistrictUpdate(BaseModel):
    """Schema for updating a district.

    All fields are optional; only provided fields will be updated.
    """

    name: Optional[str] = Field(default=None, min_length=1)
    zones: Optional[List[str]] = None
