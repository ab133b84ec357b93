"""Category endpoints for REST API."""

from typing import List

from fastapi import APIRouter, Depends

from core.application.dtos.product_dto import CategoryDTO, SubcategoryDTO
from core.application.services import CatalogApplicationService

from apps.api.deps import get_catalog_service

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=List[CategoryDTO])
async def list_categories(
    service: CatalogApplicationService = Depends(get_catalog_service),
) -> List[CategoryDTO]:
    return await service.list_categories()


@router.get("/{category_id}/subcategories", response_model=List[SubcategoryDTO])
async def list_subcategories(
    category_id: int,
    service: CatalogApplicationService = Depends(get_catalog_service),
) -> List[SubcategoryDTO]:
    return await service.list_subcategories(category_id)
