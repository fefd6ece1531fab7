"""
Top-level router for version 1 of the API.

Aggregates the resource routers under a unified prefix.  When a new
resource is added, include its router here.
"""

from fastapi import APIRouter

from .endpoints import analytics, campites, camps, districts, health


router = APIRouter()

router.include_router(districts.router, prefix="/districts", tags=["districts"])
router.include_router(camps.router, prefix="/camps", tags=["camps"])
router.include_router(campites.router, prefix="/campites", tags=["campites"])
router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
router.include_router(health.router, tags=["health"])
