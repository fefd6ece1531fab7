"""
Camp endpoints for API v1.

These routes provide CRUD operations for camps.  The list route accepts
bracket-notation filters, for example::

    GET /api/v1/camps/?[title][contains]=Summer&[year][gte]=2024&orderBy=[year]=desc

and related-entity filters such as
``[campites][some][gender]=female``.
"""

from typing import Any, Dict

from fastapi import APIRouter, HTTPException, Request, status

from camp_registration_api.app.api.v1.listing import list_resource
from camp_registration_api.app.query.pagination import PaginationConfig
from camp_registration_api.app.schemas.camp import CampCreate, CampRead, CampUpdate
from camp_registration_api.app.services.base import NotFoundError
from camp_registration_api.app.services.camp_service import CampService


router = APIRouter()

PAGINATION = PaginationConfig()


@router.get("/")
async def list_camps(request: Request) -> Dict[str, Any]:
    """List camps.

    - **page**, **per_page**: pagination (``page=0`` returns everything).
    - **orderBy**: sort string such as ``[year]=desc``.
    - any ``[field][operator]=value`` key: filter.
    """
    return await list_resource(CampService, request, PAGINATION)


@router.get("/{camp_id}", response_model=CampRead)
async def get_camp(camp_id: int) -> CampRead:
    """Retrieve a single camp by its ID.  Raises 404 if it does not exist."""
    try:
        return await CampService.get(camp_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post("/", response_model=CampRead, status_code=status.HTTP_201_CREATED)
async def create_camp(camp: CampCreate) -> CampRead:
    try:
        return await CampService.create(camp)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.put("/{camp_id}", response_model=CampRead)
async def update_camp(camp_id: int, updates: CampUpdate) -> CampRead:
    """Update an existing camp.

    Partial updates are supported; any unspecified fields remain
    unchanged.
    """
    try:
        return await CampService.update(camp_id, updates.model_dump(exclude_unset=True))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.delete("/{camp_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_camp(camp_id: int) -> None:
    """Delete a camp together with its campites."""
    try:
        await CampService.delete(camp_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return None
