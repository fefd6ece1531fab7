"""Liveness probe."""

from fastapi import APIRouter

from camp_registration_api.app.core.config import settings


router = APIRouter()


@router.get("/health")
async def health() -> dict:
    return {"status": "ok", "version": settings.api_version}
