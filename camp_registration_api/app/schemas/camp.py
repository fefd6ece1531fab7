"""
Pydantic models for camps.

``CampBase`` holds the fields shared by requests and responses;
``CampCreate`` is accepted on creation and ``CampRead`` adds the
identifier and timestamps for responses.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class CampBase(BaseModel):
    title: str = Field(..., min_length=1, examples=["Summer Camp 2025"])
    theme: Optional[str] = Field(None, examples=["Faith and Fire"])
    verse: Optional[str] = Field(None, examples=["Jeremiah 29:11"])
    year: int = Field(..., examples=[2025])
    fee: int = Field(..., ge=0, examples=[15000])
    premium_fees: List[int] = Field(default_factory=list, examples=[[20000, 30000]])
    start_date: datetime = Field(..., examples=["2025-08-01T00:00:00Z"])
    end_date: datetime = Field(..., examples=["2025-08-07T00:00:00Z"])


class CampCreate(CampBase):
    """Schema for creating a camp."""

    @model_validator(mode="after")
    def check_dates(self) -> "CampCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class CampRead(CampBase):
    """Schema for reading a camp from the API."""

    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True,
    }


class CampUpdate(BaseModel):
    """Schema for updating a camp.

    All fields are optional; only provided fields will be updated.
    """

    title: Optional[str] = Field(default=None, min_length=1)
    theme: Optional[str] = None
    verse: Optional[str] = None
    year: Optional[int] = None
    fee: Optional[int] = Field(default=None, ge=0)
    premium_fees: Optional[List[int]] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
