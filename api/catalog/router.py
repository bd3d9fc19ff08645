"""
Catalog API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from . import filtering, guides, schemas, service

router = APIRouter()


@router.get("/categories")
async def list_categories() -> dict:
    categories, notices = await service.list_categories()
    return {"categories": categories, "count": len(categories), "notices": notices}


@router.get("/apis")
async def search_apis(
    q: str = Query(default="", max_length=500),
    category: str = Query(default=filtering.ALL, max_length=64),
    auth_type: filtering.AuthFilter = Query(default=filtering.ALL),
    sort_by: filtering.SortKey = Query(default=filtering.DEFAULT_SORT),
) -> dict:
    """
    Search the catalog by name/description/tag, filter by category and
    auth type, then sort.
    """
    criteria = filtering.FilterCriteria(query=q, category=category, auth_type=auth_type, sort_by=sort_by)
    try:
        return await service.search_apis(criteria)
    except service.CatalogUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc


@router.get("/apis/{api_id}")
async def get_api(api_id: str) -> dict:
    try:
        api, notices = await service.get_api(api_id)
    except service.CatalogUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc

    if api is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="API not found.")
    return {"api": api, "auth_guide": guides.auth_guide(api), "notices": notices}


@router.post("/apis", status_code=status.HTTP_201_CREATED)
async def create_api(request: schemas.CreateApiRequest) -> dict:
    try:
        api, notices = await service.create_api(request)
    except service.CatalogValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except service.CatalogWriteError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    return {"api": api, "auth_guide": guides.auth_guide(api), "notices": notices}


@router.get("/dashboard")
async def dashboard() -> dict:
    return await service.dashboard()
