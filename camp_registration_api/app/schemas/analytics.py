"""Pydantic models for the dashboard analytics endpoint."""

from typing import List

from pydantic import BaseModel


class GroupCount(BaseModel):
    value: str
    count: int


class DashboardAnalytics(BaseModel):
    total_campites: int
    by_gender: List[GroupCount]
    by_age_group: List[GroupCount]
