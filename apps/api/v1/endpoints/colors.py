"""Color endpoints for REST API."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from core.application.services import CatalogApplicationService

from apps.api.deps import get_catalog_service

router = APIRouter(prefix="/colors", tags=["colors"])


@router.get("", response_model=List[str])
async def list_colors(
    category_id: Optional[int] = Query(None),
    subcategory_id: Optional[int] = Query(None, description="Only applied together with category_id"),
    service: CatalogApplicationService = Depends(get_catalog_service),
) -> List[str]:
    """Distinct product colors, sorted alphabetically."""
    return await service.list_colors(category_id, subcategory_id)
