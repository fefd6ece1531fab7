"""Analytics endpoints for API v1."""

from typing import Optional

from fastapi import APIRouter, Query

from camp_registration_api.app.schemas.analytics import DashboardAnalytics
from camp_registration_api.app.services.analytics_service import AnalyticsService


router = APIRouter()


@router.get("/dashboard", response_model=DashboardAnalytics)
async def dashboard(camp_id: Optional[int] = Query(None)) -> DashboardAnalytics:
    """Campite totals split by gender and age group.

    Pass ``camp_id`` to restrict the figures to a single camp.
    """
    return await AnalyticsService.dashboard(camp_id)
