"""Product endpoints for REST API."""

from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from core.application.dtos.product_dto import DetailedProductDTO, ProductDTO, ProductFilterRequest
from core.application.services import CatalogApplicationService
from core.domain.value_objects import ProductFilter
from core.settings import AppSettings

from apps.api.deps import get_catalog_service, get_settings

router = APIRouter(prefix="/products", tags=["products"])


@router.post("", response_model=List[ProductDTO])
async def filter_products(
    request: ProductFilterRequest,
    service: CatalogApplicationService = Depends(get_catalog_service),
) -> List[ProductDTO]:
    """List products matching a filter sent in the request body.

    Args:
        request: ProductFilterRequest DTO
        service: CatalogApplicationService instance

    Returns:
        One page of ProductDTO instances
    """
    return await service.list_products(request.to_filter())


@router.get("", response_model=List[ProductDTO])
async def list_products(
    category_id: Optional[int] = Query(None),
    subcategory_id: Optional[int] = Query(None),
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    colors: List[str] = Query(default=[], description="Repeat for several colors"),
    sort_by: Optional[str] = Query(None),
    search_text: Optional[str] = Query(None),
    page_size: Optional[int] = Query(None, gt=0),
    page_number: int = Query(default=1, ge=1),
    service: CatalogApplicationService = Depends(get_catalog_service),
    settings: AppSettings = Depends(get_settings),
) -> List[ProductDTO]:
    """List products using query string filters."""
    product_filter = ProductFilter(
        category_id=category_id,
        subcategory_id=subcategory_id,
        min_price=min_price,
        max_price=max_price,
        selected_colors=frozenset(colors),
        sort_key=sort_by,
        search_text=search_text,
        page_size=page_size or settings.catalog.default_page_size,
        page_number=page_number,
    )
    return await service.list_products(product_filter)


@router.get("/recent", response_model=List[ProductDTO])
async def list_recent_products(
    count: int = Query(default=0, description="Number of products; 0 uses the configured default"),
    service: CatalogApplicationService = Depends(get_catalog_service),
) -> List[ProductDTO]:
    """Newest products first."""
    return await service.list_recent_products(count)


@router.get("/{product_id}", response_model=DetailedProductDTO)
async def get_product(
    product_id: int,
    service: CatalogApplicationService = Depends(get_catalog_service),
) -> DetailedProductDTO:
    """Get product by ID.

    Raises:
        HTTPException: If product not found
    """
    product = await service.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product {product_id} not found")
    return product
