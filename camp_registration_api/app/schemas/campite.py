"""
Pydantic models for campites (people registered for a camp).

A campite is either ``regular`` or ``premium``.  Premium registrations
pay one of the camp's premium fees, so ``amount`` is mandatory for
them.  The registration number is generated by the service and never
accepted from clients.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator


CampiteType = Literal["regular", "premium"]


class CampiteBase(BaseModel):
    firstname: str = Field(..., min_length=1, examples=["John"])
    lastname: str = Field(..., min_length=1, examples=["Doe"])
    email: Optional[str] = Field(None, examples=["john.doe@example.com"])
    phone: str = Field(..., min_length=1, examples=["+2348012345678"])
    age_group: str = Field(..., min_length=1, examples=["21-30"])
    gender: str = Field(..., min_length=1, examples=["male"])
    camp_id: int = Field(..., examples=[1])
    district_id: Optional[int] = Field(None, examples=[1])
    payment_ref: Optional[str] = Field(None, examples=["pay_ref_001"])
    type: CampiteType = "regular"
    amount: Optional[int] = Field(None, ge=0, examples=[5000])
    checkin_at: Optional[datetime] = None


class CampiteCreate(CampiteBase):
    """Schema for registering a campite."""

    @model_validator(mode="after")
    def check_premium_amount(self) -> "CampiteCreate":
        if self.type == "premium" and self.amount is None:
            raise ValueError("Amount is required for premium campites")
        return self


class CampiteRead(CampiteBase):
    """Schema for reading a campite from the API."""

    id: int
    registration_no: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True,
    }


class CampiteUpdate(BaseModel):
    """Schema for updating a campite.

    All fields are optional; only provided fields will be updated.
    Setting ``checkin_at`` records the campite's arrival at camp.
    """

    firstname: Optional[str] = Field(default=None, min_length=1)
    lastname: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = Field(default=None, min_length=1)
    age_group: Optional[str] = Field(default=None, min_length=1)
    gender: Optional[str] = Field(default=None, min_length=1)
    district_id: Optional[int] = None
    payment_ref: Optional[str] = None
    type: Optional[CampiteType] = None
    amount: Optional[int] = Field(default=None, ge=0)
    checkin_at: Optional[datetime] = None
