"""
Campite endpoints for API v1.

Registering a campite allocates its registration number.  The list
route supports filters through the camp and district relations, e.g.
``[camp][year]=2025`` or ``[district][name][contains]=Yaba``.
"""

from typing import Any, Dict

from fastapi import APIRouter, HTTPException, Request, status

from camp_registration_api.app.api.v1.listing import list_resource
from camp_registration_api.app.query.pagination import PaginationConfig
from camp_registration_api.app.schemas.campite import CampiteCreate, CampiteRead, CampiteUpdate
from camp_registration_api.app.services.base import NotFoundError
from camp_registration_api.app.services.campite_service import CampiteService


router = APIRouter()

PAGINATION = PaginationConfig()


@router.get("/")
async def list_campites(request: Request) -> Dict[str, Any]:
    """List campites with bracket filters, sorting and pagination."""
    return await list_resource(CampiteService, request, PAGINATION)


@router.get("/{campite_id}", response_model=CampiteRead)
async def get_campite(campite_id: int) -> CampiteRead:
    try:
        return await CampiteService.get(campite_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post("/", response_model=CampiteRead, status_code=status.HTTP_201_CREATED)
async def create_campite(campite: CampiteCreate) -> CampiteRead:
    """Register a campite for a camp.

    Returns 400 if the camp or district does not exist.
    """
    try:
        return await CampiteService.create(campite)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.put("/{campite_id}", response_model=CampiteRead)
async def update_campite(campite_id: int, updates: CampiteUpdate) -> CampiteRead:
    """Update a campite.  Unspecified fields remain unchanged."""
    try:
        return await CampiteService.update(campite_id, updates.model_dump(exclude_unset=True))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.delete("/{campite_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_campite(campite_id: int) -> None:
    try:
        await CampiteService.delete(campite_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return None
