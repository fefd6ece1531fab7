"""
District endpoints for API v1.

The district list is the registration form's lookup table and is
usually fetched whole with ``page=0``.
"""

from typing import Any, Dict

from fastapi import APIRouter, HTTPException, Request, status

from camp_registration_api.app.api.v1.listing import list_resource
from camp_registration_api.app.query.pagination import PaginationConfig
from camp_registration_api.app.schemas.district import DistrictCreate, DistrictRead, DistrictUpdate
from camp_registration_api.app.services.base import NotFoundError
from camp_registration_api.app.services.district_service import DistrictService


router = APIRouter()

PAGINATION = PaginationConfig(page_size=100)


@router.get("/")
async def list_districts(request: Request) -> Dict[str, Any]:
    """List districts with bracket filters, sorting and pagination."""
    return await list_resource(DistrictService, request, PAGINATION)


@router.get("/{district_id}", response_model=DistrictRead)
async def get_district(district_id: int) -> DistrictRead:
    try:
        return await DistrictService.get(district_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post("/", response_model=DistrictRead, status_code=status.HTTP_201_CREATED)
async def create_district(district: DistrictCreate) -> DistrictRead:
    try:
        return await DistrictService.create(district)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.put("/{district_id}", response_model=DistrictRead)
async def update_district(district_id: int, updates: DistrictUpdate) -> DistrictRead:
    """Update a district.  Unspecified fields remain unchanged."""
    try:
        return await DistrictService.update(district_id, updates.model_dump(exclude_unset=True))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.delete("/{district_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_district(district_id: int) -> None:
    """Delete a district.  Its campites are kept without a district."""
    try:
        await DistrictService.delete(district_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return None
